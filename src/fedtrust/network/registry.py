# -*- encoding: utf-8 -*-
"""
fedtrust Network Registry - In-memory lookup of trust network snapshots.

The registry is the network_id → TrustNetwork capability handed to the
TrustPathService. It is an ordinary object, not process-wide state, so
tests construct one with fixed snapshots.

Snapshots are never mutated. put() swaps in a new immutable mapping, so a
reader holding the previous mapping keeps a consistent view.
"""

import logging
import threading
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Union

from fedtrust.network.model import ProviderNode, TrustEdge, TrustNetwork

logger = logging.getLogger(__name__)


class TrustNetworkRegistry:
    """
    Thread-safe store of TrustNetwork snapshots keyed by network ID.

    Usage:
        registry = TrustNetworkRegistry([network])
        network = registry.load_network("fed-1")
        registry.put(reloaded_network)   # wholesale replacement
    """

    def __init__(
        self,
        networks: Union[Mapping[str, TrustNetwork], Iterable[TrustNetwork], None] = None,
    ):
        """
        Initialize with optional starting snapshots.

        Args:
            networks: Mapping of network_id → TrustNetwork, or an iterable
                of networks keyed by their own network_id
        """
        if networks is None:
            initial: dict[str, TrustNetwork] = {}
        elif isinstance(networks, Mapping):
            initial = dict(networks)
        else:
            initial = {n.network_id: n for n in networks}
        self._lock = threading.Lock()
        self._networks: Mapping[str, TrustNetwork] = MappingProxyType(initial)

    def load_network(self, network_id: Optional[str]) -> Optional[TrustNetwork]:
        """
        Look up a network snapshot.

        Returns:
            The network, or None for an empty or unknown ID
        """
        if not network_id:
            logger.warning("Attempted to load network with empty network_id")
            return None
        network = self._networks.get(network_id)
        if network is None:
            logger.debug("Network %s not found in registry", network_id)
        return network

    def put(self, network: TrustNetwork) -> Optional[TrustNetwork]:
        """
        Store a snapshot, replacing any previous one with the same ID.

        Returns:
            The replaced snapshot, or None
        """
        with self._lock:
            updated = dict(self._networks)
            previous = updated.get(network.network_id)
            updated[network.network_id] = network
            self._networks = MappingProxyType(updated)
        logger.info("Registered trust network %s (version %s)",
                    network.network_id, network.version.isoformat())
        return previous

    def remove(self, network_id: str) -> Optional[TrustNetwork]:
        """Remove and return a snapshot, or None if absent."""
        with self._lock:
            if network_id not in self._networks:
                return None
            updated = dict(self._networks)
            removed = updated.pop(network_id)
            self._networks = MappingProxyType(updated)
        return removed

    def network_ids(self) -> list[str]:
        return list(self._networks.keys())

    def __len__(self) -> int:
        return len(self._networks)

    def __contains__(self, network_id: str) -> bool:
        return network_id in self._networks

    def is_member(self, provider_id: Optional[str], network_id: Optional[str]) -> bool:
        """Check if a provider belongs to a network."""
        if provider_id is None or network_id is None:
            return False
        network = self.load_network(network_id)
        return network is not None and network.is_member(provider_id)

    def get_provider(
        self,
        provider_id: Optional[str],
        network_id: Optional[str],
    ) -> Optional[ProviderNode]:
        """Get a provider node from a network, or None."""
        if provider_id is None or network_id is None:
            return None
        network = self.load_network(network_id)
        if network is None:
            return None
        return network.get_provider(provider_id)

    def get_trust_relationships(self, network_id: Optional[str]) -> frozenset[TrustEdge]:
        """All trust edges of a network; empty for an unknown network."""
        network = self.load_network(network_id) if network_id else None
        if network is None:
            return frozenset()
        return frozenset(network.trust_relationships)

    def has_trust_relationship(
        self,
        from_provider: Optional[str],
        to_provider: Optional[str],
        network_id: Optional[str],
    ) -> bool:
        """Check for a direct trust edge within a network."""
        if from_provider is None or to_provider is None or network_id is None:
            return False
        network = self.load_network(network_id)
        return network is not None and network.has_trust_relationship(from_provider, to_provider)
