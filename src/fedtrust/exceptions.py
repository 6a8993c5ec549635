# -*- encoding: utf-8 -*-
"""
fedtrust Exceptions.

Custom exceptions for network configuration loading and federation gating.

Path computation itself never raises: malformed input always comes back as
an unreachable TrustPath. These exceptions belong to the layers around it.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from fedtrust.trust_path.path import TrustPath


class FedTrustError(Exception):
    """Base exception for all fedtrust errors."""
    pass


class NetworkConfigError(FedTrustError):
    """
    Raised when a trust network configuration document cannot be loaded.

    Covers unparsable JSON, a top-level value that is not an object,
    a missing network_id, and unreadable files.

    Attributes:
        source: Where the document came from (file path, "<string>", "<dict>")
    """

    def __init__(self, message: str, source: str = ""):
        super().__init__(message)
        self.source = source

    def to_dict(self) -> dict:
        """Convert exception to dictionary representation."""
        return {
            "error": "NetworkConfigError",
            "message": str(self),
            "source": self.source,
        }


class FederationDeniedError(FedTrustError):
    """
    Raised when a cross-provider redirect has no trust path.

    Only raised by TrustPathService.require_trust_path(); the underlying
    topology policies report the same condition as reachable=False.

    Attributes:
        trust_path: The unreachable TrustPath that caused the denial
        network_id: Network the path was computed in

    Usage:
        try:
            path = service.require_trust_path("fed-1", "spoke-a", "spoke-b")
        except FederationDeniedError as e:
            print(f"Denied: {e.trust_path}")
    """

    def __init__(
        self,
        message: str,
        trust_path: Optional["TrustPath"] = None,
        network_id: str = "",
    ):
        super().__init__(message)
        self.trust_path = trust_path
        self.network_id = network_id

    def to_dict(self) -> dict:
        """Convert exception to dictionary representation."""
        return {
            "error": "FederationDeniedError",
            "message": str(self),
            "network_id": self.network_id,
            "trust_path": self.trust_path.to_dict() if self.trust_path else None,
        }
