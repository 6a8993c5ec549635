# -*- encoding: utf-8 -*-
"""
fedtrust Hub-and-Spoke Policy - Routes spoke traffic through trust hubs.

In this topology:
- One or more hubs act as central trust anchors
- Any two providers may still carry a direct trust edge
- A hub is the only permitted intermediary for indirect routing

Trust path examples:
- Spoke A → Spoke B        (1 hop, direct edge A→B)
- Spoke A → Hub → Spoke B  (2 hops, needs A→Hub and Hub→B)
- Hub → Spoke A            (1 hop, direct edge only)

Trust direction matters at each hop: the source must trust the hub and
the hub must trust the target. Hubs are never chained.
"""

import logging
from typing import Optional

from fedtrust.network.model import HUB_AND_SPOKE, ProviderNode, TrustNetwork
from fedtrust.topology.base import TopologyPolicy
from fedtrust.trust_path.path import TrustPath

logger = logging.getLogger(__name__)


class HubAndSpokePolicy(TopologyPolicy):
    """
    Hub-and-spoke routing.

    Candidate hubs are scanned in the network's provider order, so the
    chosen hub follows configuration order. Pass sort_hubs=True to pick
    the qualifying hub with the lowest ID instead, which does not depend
    on how the network was assembled.

    Usage:
        policy = HubAndSpokePolicy()
        path = policy.compute_trust_path(network, "spoke-a", "spoke-b")
        if path.reachable:
            print(path)  # spoke-a -> hub-1 -> spoke-b
    """

    def __init__(self, sort_hubs: bool = False):
        self._sort_hubs = sort_hubs

    @property
    def topology_type(self) -> str:
        return HUB_AND_SPOKE

    def _route(self, network: TrustNetwork, source: str, target: str) -> TrustPath:
        # A direct edge wins over every role restriction
        if network.has_trust_relationship(source, target):
            return TrustPath.of([source, target])

        source_node = network.get_provider(source)
        target_node = network.get_provider(target)
        if source_node.is_hub or target_node.is_hub:
            logger.debug(
                "No direct trust for hub endpoint: %s (%s) → %s (%s)",
                source, source_node.role, target, target_node.role,
            )
            return TrustPath.unreachable(source, target)

        hub = self.find_common_hub(network, source, target)
        if hub is None:
            logger.debug("No common hub found between %s and %s", source, target)
            return TrustPath.unreachable(source, target)

        path = TrustPath.of([source, hub.provider_id, target])
        logger.debug("Computed spoke-to-spoke path: %s", path)
        return path

    def find_common_hub(
        self,
        network: TrustNetwork,
        source: str,
        target: str,
    ) -> Optional[ProviderNode]:
        """
        Find the first hub that source trusts and that trusts target.

        Args:
            network: Network to search
            source: Provider that must have an edge to the hub
            target: Provider the hub must have an edge to

        Returns:
            The qualifying hub node, or None if there is none
        """
        hubs = network.hubs()
        if self._sort_hubs:
            hubs = sorted(hubs, key=lambda node: node.provider_id)
        for hub in hubs:
            hub_id = hub.provider_id
            if (network.has_trust_relationship(source, hub_id)
                    and network.has_trust_relationship(hub_id, target)):
                return hub
        return None

    def validate_topology(self, network: Optional[TrustNetwork]) -> bool:
        """A hub-and-spoke network needs at least one hub."""
        if network is None:
            return False
        if not network.hubs():
            logger.warning(
                "Hub-and-spoke network %s has no hub", network.network_id,
            )
            return False
        return True
