"""Application layer: mediation use-case services."""
