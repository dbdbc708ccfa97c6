"""Two-party AI mediation service."""

__version__ = "0.1.0"
