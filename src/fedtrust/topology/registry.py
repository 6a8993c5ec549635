# -*- encoding: utf-8 -*-
"""
fedtrust Topology Registry - Policy lookup by topology type.

Each TrustNetwork declares its topology_type. The registry maps that
identifier to the TopologyPolicy serving it. Selection is always explicit:
a network whose type has no registered policy gets no policy.

Usage:
    from fedtrust.topology import create_default_registry

    registry = create_default_registry()
    policy = registry.policy_for(network)
    if policy is not None:
        path = policy.compute_trust_path(network, "a", "b")
"""

from typing import Optional

from fedtrust.network.model import TrustNetwork
from fedtrust.topology.base import TopologyPolicy


class TopologyRegistry:
    """
    Registry of topology policies by topology type.

    Attributes:
        _policies: Dict mapping topology type identifiers to policies
    """

    def __init__(self):
        """Initialize empty registry."""
        self._policies: dict[str, TopologyPolicy] = {}

    def register(self, policy: TopologyPolicy) -> None:
        """
        Register a policy for its topology type.

        Replaces any policy already registered for the same type.

        Args:
            policy: TopologyPolicy instance to register
        """
        self._policies[policy.topology_type] = policy

    def unregister(self, topology_type: str) -> Optional[TopologyPolicy]:
        """
        Remove and return a policy by topology type.

        Returns:
            The removed policy, or None if not found
        """
        return self._policies.pop(topology_type, None)

    def get(self, topology_type: Optional[str]) -> Optional[TopologyPolicy]:
        """Get the policy for a topology type, or None if not registered."""
        if topology_type is None:
            return None
        return self._policies.get(topology_type)

    def topology_types(self) -> list[str]:
        """List all registered topology types."""
        return list(self._policies.keys())

    def __len__(self) -> int:
        return len(self._policies)

    def __contains__(self, topology_type: str) -> bool:
        return topology_type in self._policies

    def policy_for(self, network: Optional[TrustNetwork]) -> Optional[TopologyPolicy]:
        """
        Select the policy matching a network's declared topology type.

        Args:
            network: Network to route in (may be None)

        Returns:
            The registered policy, or None for a None network or an
            unregistered topology type
        """
        if network is None:
            return None
        return self.get(network.topology_type)


def create_default_registry() -> TopologyRegistry:
    """
    Create a registry with the built-in policies.

    Includes:
        - HubAndSpokePolicy ("hub-and-spoke")
        - PeerToPeerPolicy ("peer-to-peer")

    Returns:
        TopologyRegistry with default policies registered
    """
    from fedtrust.topology.hub_and_spoke import HubAndSpokePolicy
    from fedtrust.topology.peer_to_peer import PeerToPeerPolicy

    registry = TopologyRegistry()
    registry.register(HubAndSpokePolicy())
    registry.register(PeerToPeerPolicy())
    return registry
