# -*- encoding: utf-8 -*-
"""
fedtrust Trust Path Service - Federation redirect gating.

A federated-identity broker asks this service whether an authentication
request at the current provider may be redirected to the user's home
provider. The service resolves the network snapshot, selects the policy
for the network's topology type, and computes the trust path.

Usage:
    from fedtrust import TrustPathService, TrustNetworkRegistry

    service = TrustPathService(TrustNetworkRegistry([network]))
    path = service.compute_trust_path("fed-1", "spoke-a", "spoke-b")
    if not path.reachable:
        ...  # deny the federation attempt
"""

import logging
from typing import Callable, Optional, Union

from fedtrust.exceptions import FederationDeniedError
from fedtrust.network.model import TrustNetwork
from fedtrust.topology.registry import TopologyRegistry, create_default_registry
from fedtrust.trust_path.path import TrustPath, UNKNOWN_PROVIDER

logger = logging.getLogger(__name__)

NetworkLookup = Callable[[str], Optional[TrustNetwork]]


class TrustPathService:
    """
    Computes trust paths for networks held by an injected lookup.

    Holds no state between calls beyond its collaborators. Every failure
    to route (unknown network, unregistered topology, unknown provider)
    comes back as an unreachable TrustPath; only require_trust_path()
    raises.
    """

    def __init__(
        self,
        networks: Union[NetworkLookup, object],
        topologies: Optional[TopologyRegistry] = None,
    ):
        """
        Initialize with a network lookup and a topology registry.

        Args:
            networks: Object with a load_network(network_id) method (such as
                TrustNetworkRegistry), or a callable network_id → TrustNetwork
            topologies: Policy registry; defaults to the built-in policies
        """
        load = getattr(networks, "load_network", None)
        if load is None:
            if not callable(networks):
                raise TypeError("networks must provide load_network() or be callable")
            load = networks
        self._load_network: NetworkLookup = load
        self._topologies = topologies if topologies is not None else create_default_registry()

    @property
    def topologies(self) -> TopologyRegistry:
        return self._topologies

    def compute_trust_path(
        self,
        network_id: Optional[str],
        source: Optional[str],
        target: Optional[str],
    ) -> TrustPath:
        """
        Compute the trust path from source to target in a network.

        Returns:
            TrustPath from the network's policy, or an unreachable path if
            the network or its policy cannot be found
        """
        network = self._load_network(network_id) if network_id else None
        if network is None:
            logger.warning("Trust network %s not available", network_id)
            return self._unreachable(source, target)

        policy = self._topologies.policy_for(network)
        if policy is None:
            logger.warning(
                "No topology policy registered for %s (network %s)",
                network.topology_type, network.network_id,
            )
            return self._unreachable(source, target)

        path = policy.compute_trust_path(network, source, target)
        logger.debug("Trust path in %s: %s", network.network_id, path)
        return path

    def validate(self, network_id: Optional[str]) -> bool:
        """Validate a network against its own topology policy."""
        network = self._load_network(network_id) if network_id else None
        policy = self._topologies.policy_for(network)
        if policy is None:
            return False
        return policy.validate_topology(network)

    def is_federation_permitted(
        self,
        network_id: Optional[str],
        current_provider: Optional[str],
        home_provider: Optional[str],
    ) -> bool:
        """True if a redirect from current_provider to home_provider is allowed."""
        return self.compute_trust_path(network_id, current_provider, home_provider).reachable

    def require_trust_path(
        self,
        network_id: Optional[str],
        current_provider: Optional[str],
        home_provider: Optional[str],
    ) -> TrustPath:
        """
        Compute the trust path and insist that it exists.

        Returns:
            The reachable TrustPath

        Raises:
            FederationDeniedError: If home_provider is not reachable
        """
        path = self.compute_trust_path(network_id, current_provider, home_provider)
        if not path.reachable:
            raise FederationDeniedError(
                f"No trust path from {path.source_provider} to "
                f"{path.target_provider} in network {network_id}",
                trust_path=path,
                network_id=network_id or "",
            )
        return path

    @staticmethod
    def _unreachable(source: Optional[str], target: Optional[str]) -> TrustPath:
        return TrustPath.unreachable(
            source if source is not None else UNKNOWN_PROVIDER,
            target if target is not None else UNKNOWN_PROVIDER,
        )
