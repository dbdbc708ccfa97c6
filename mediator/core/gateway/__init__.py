"""Text-generation gateway over Google Gemini."""

from mediator.core.gateway.gateway import MediatorGateway
from mediator.core.gateway.schema import HistoryTurn, MediationReport

__all__ = ["MediatorGateway", "HistoryTurn", "MediationReport"]
