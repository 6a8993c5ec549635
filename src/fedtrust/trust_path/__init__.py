"""
fedtrust Trust Path - Result of routing a request through the trust graph.

This module provides:
- TrustPath: Immutable reachability/route result
- UNKNOWN_PROVIDER: Placeholder ID used when an endpoint is missing
"""

from fedtrust.trust_path.path import TrustPath, UNKNOWN_PROVIDER

__all__ = [
    "TrustPath",
    "UNKNOWN_PROVIDER",
]
