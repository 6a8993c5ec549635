# -*- encoding: utf-8 -*-
"""
fedtrust Topology Policy - Abstract interface for trust path routing.

Different topologies decide differently which chains of trust edges count
as a valid route. Each policy serves one network topology_type.

Contract shared by all policies:
- compute_trust_path() never raises for bad input; it returns an
  unreachable TrustPath instead
- validate_topology() returns False, never raises, for a None network
- Neither method mutates the network or keeps state between calls

Example implementations:
    - HubAndSpokePolicy: spokes route to each other through a common hub
    - PeerToPeerPolicy: shortest transitive path over any trust edges
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from fedtrust.network.model import TrustNetwork
from fedtrust.trust_path.path import TrustPath, UNKNOWN_PROVIDER

logger = logging.getLogger(__name__)


class TopologyPolicy(ABC):
    """
    Abstract trust path routing policy.

    Subclasses implement _route(), which is only called once the endpoints
    are known to be distinct members of the network. Input screening is
    done here so every policy handles the degenerate cases identically.
    """

    @property
    @abstractmethod
    def topology_type(self) -> str:
        """
        Topology type identifier served by this policy.

        Returns:
            Identifier matching TrustNetwork.topology_type (e.g., "peer-to-peer")
        """
        ...

    @abstractmethod
    def validate_topology(self, network: Optional[TrustNetwork]) -> bool:
        """
        Check that a network's structure suits this topology.

        Args:
            network: Network to validate (may be None)

        Returns:
            True if the network is valid for this topology, False otherwise
        """
        ...

    @abstractmethod
    def _route(self, network: TrustNetwork, source: str, target: str) -> TrustPath:
        """
        Route between two distinct member providers.

        Args:
            network: Network containing both providers
            source: Source provider ID (a member, != target)
            target: Target provider ID (a member, != source)

        Returns:
            Reachable TrustPath, or unreachable if no valid route exists
        """
        ...

    def compute_trust_path(
        self,
        network: Optional[TrustNetwork],
        source: Optional[str],
        target: Optional[str],
    ) -> TrustPath:
        """
        Compute the trust path from source to target.

        Args:
            network: Trust network containing providers and relationships
            source: Source provider ID
            target: Target provider ID

        Returns:
            TrustPath with the route, or an unreachable TrustPath if no
            route exists or the input is invalid
        """
        if network is None or not isinstance(source, str) or not isinstance(target, str):
            logger.warning(
                "Invalid input: network=%s, source=%s, target=%s",
                network, source, target,
            )
            return TrustPath.unreachable(
                source if isinstance(source, str) else UNKNOWN_PROVIDER,
                target if isinstance(target, str) else UNKNOWN_PROVIDER,
            )

        if source == target:
            return TrustPath.of([source])

        if not network.is_member(source) or not network.is_member(target):
            logger.warning(
                "Provider not in network %s: source=%s (exists=%s), target=%s (exists=%s)",
                network.network_id,
                source, network.is_member(source),
                target, network.is_member(target),
            )
            return TrustPath.unreachable(source, target)

        return self._route(network, source, target)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(topology_type={self.topology_type!r})"
