"""fedtrust API - Entry point for federation brokers."""

from fedtrust.api.service import TrustPathService

__all__ = ["TrustPathService"]
