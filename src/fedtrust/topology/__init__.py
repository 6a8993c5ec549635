"""
fedtrust Topology - Routing policies over the trust graph.

This module provides:
- TopologyPolicy: Abstract routing contract
- HubAndSpokePolicy: Spoke-to-spoke routing through a common hub
- PeerToPeerPolicy: BFS shortest path over any trust edges
- TopologyRegistry: Policy lookup by a network's topology type
"""

from fedtrust.topology.base import TopologyPolicy
from fedtrust.topology.hub_and_spoke import HubAndSpokePolicy
from fedtrust.topology.peer_to_peer import (
    PeerToPeerPolicy,
    MAX_PATH_LENGTH,
    has_cycles,
)
from fedtrust.topology.registry import TopologyRegistry, create_default_registry

__all__ = [
    "TopologyPolicy",
    "HubAndSpokePolicy",
    "PeerToPeerPolicy",
    "MAX_PATH_LENGTH",
    "has_cycles",
    "TopologyRegistry",
    "create_default_registry",
]
