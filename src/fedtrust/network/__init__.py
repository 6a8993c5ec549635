"""
fedtrust Network - Trust graph model, loading and lookup.

This module provides:
- TrustNetwork: Immutable federation graph snapshot
- ProviderNode / TrustEdge: Graph nodes and directed trust edges
- ProviderRole / TrustLevel: Role tags and edge levels
- TrustNetworkBuilder: Assembles a TrustNetwork
- NetworkConfigLoader: Builds networks from configuration documents
- TrustNetworkRegistry: network_id → TrustNetwork lookup
"""

from fedtrust.network.model import (
    TrustNetwork,
    TrustNetworkBuilder,
    ProviderNode,
    ProviderRole,
    RoleKind,
    TrustEdge,
    TrustLevel,
    HUB,
    SPOKE,
    PEER,
    HUB_AND_SPOKE,
    PEER_TO_PEER,
    DEFAULT_TOPOLOGY_TYPE,
)
from fedtrust.network.loader import NetworkConfigLoader, parse_registry_version
from fedtrust.network.registry import TrustNetworkRegistry

__all__ = [
    "TrustNetwork",
    "TrustNetworkBuilder",
    "ProviderNode",
    "ProviderRole",
    "RoleKind",
    "TrustEdge",
    "TrustLevel",
    "HUB",
    "SPOKE",
    "PEER",
    "HUB_AND_SPOKE",
    "PEER_TO_PEER",
    "DEFAULT_TOPOLOGY_TYPE",
    "NetworkConfigLoader",
    "parse_registry_version",
    "TrustNetworkRegistry",
]
