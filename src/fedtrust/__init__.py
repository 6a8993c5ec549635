"""
fedtrust - Federation trust path computation.

Decides whether an authentication request at one identity provider may be
routed to the user's home provider through configured trust relationships.

Core Principles:
- Snapshots are immutable: a TrustNetwork is replaced, never mutated
- One failure channel: bad input yields an unreachable TrustPath, not an error

Components:
- TrustNetwork: Immutable graph of providers and directed trust edges
- HubAndSpokePolicy / PeerToPeerPolicy: Topology-specific routing
- TrustPath: Reachability and route result
- TrustPathService: Network lookup + policy selection for brokers

Usage:
    from fedtrust import NetworkConfigLoader, HubAndSpokePolicy

    network = NetworkConfigLoader().load_from_file("fed-1.json")
    path = HubAndSpokePolicy().compute_trust_path(network, "b", "c")
    print(path.reachable, path.hop_count)
"""

from fedtrust.api.service import TrustPathService
from fedtrust.exceptions import (
    FedTrustError,
    NetworkConfigError,
    FederationDeniedError,
)
from fedtrust.network import (
    TrustNetwork,
    TrustNetworkBuilder,
    ProviderNode,
    ProviderRole,
    TrustEdge,
    TrustLevel,
    NetworkConfigLoader,
    TrustNetworkRegistry,
)
from fedtrust.topology import (
    TopologyPolicy,
    HubAndSpokePolicy,
    PeerToPeerPolicy,
    TopologyRegistry,
    create_default_registry,
)
from fedtrust.trust_path import TrustPath

__all__ = [
    # Main API
    "TrustPathService",
    # Graph model
    "TrustNetwork",
    "TrustNetworkBuilder",
    "ProviderNode",
    "ProviderRole",
    "TrustEdge",
    "TrustLevel",
    "NetworkConfigLoader",
    "TrustNetworkRegistry",
    # Policies
    "TopologyPolicy",
    "HubAndSpokePolicy",
    "PeerToPeerPolicy",
    "TopologyRegistry",
    "create_default_registry",
    # Results and errors
    "TrustPath",
    "FedTrustError",
    "NetworkConfigError",
    "FederationDeniedError",
]

__version__ = "0.1.0"
