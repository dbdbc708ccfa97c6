"""Boundary adapters: database and change-notification feed."""
