"""Core domain: exceptions, roles, and the text-generation gateway."""
