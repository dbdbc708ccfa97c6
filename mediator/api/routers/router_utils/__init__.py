"""Router utilities."""

from .error_handling import handle_mediation_errors, status_for

__all__ = ["handle_mediation_errors", "status_for"]
