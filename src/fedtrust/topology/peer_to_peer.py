# -*- encoding: utf-8 -*-
"""
fedtrust Peer-to-Peer Policy - BFS shortest trust path.

In this topology:
- All providers are peers, with no hierarchy
- Any provider may directly trust any other
- Trust composes transitively through the network

Trust path examples:
- Peer A → Peer B           (1 hop, direct edge)
- Peer A → Peer C → Peer B  (2 hops, transitive through C)

Cycles are legal. The visited set keeps the search from re-expanding a
node and MAX_PATH_LENGTH bounds how deep the search goes.
"""

import logging
from collections import deque
from typing import Optional

from fedtrust.network.model import PEER_TO_PEER, TrustNetwork
from fedtrust.topology.base import TopologyPolicy
from fedtrust.trust_path.path import TrustPath

logger = logging.getLogger(__name__)

MAX_PATH_LENGTH = 10


def build_adjacency(network: TrustNetwork) -> dict[str, list[str]]:
    """Map each provider to the providers it trusts, in edge order."""
    adjacency: dict[str, list[str]] = {}
    for edge in network.trust_relationships:
        adjacency.setdefault(edge.from_provider, []).append(edge.to_provider)
    return adjacency


def has_cycles(network: Optional[TrustNetwork]) -> bool:
    """
    Check whether the trust graph contains a directed cycle.

    Iterative three-colour DFS, so deep chains cannot exhaust the stack.
    Self-loops count as cycles. Edges to providers outside the node map
    are followed like any other.

    Args:
        network: Network to inspect

    Returns:
        True if any cycle exists, False otherwise (including None)
    """
    if network is None:
        return False

    adjacency = build_adjacency(network)
    done: set[str] = set()
    on_stack: set[str] = set()

    for start in list(network.providers) + list(adjacency):
        if start in done:
            continue
        stack: list[tuple[str, int]] = [(start, 0)]
        on_stack.add(start)
        while stack:
            node, index = stack[-1]
            neighbors = adjacency.get(node, [])
            if index < len(neighbors):
                stack[-1] = (node, index + 1)
                nxt = neighbors[index]
                if nxt in on_stack:
                    return True
                if nxt not in done:
                    on_stack.add(nxt)
                    stack.append((nxt, 0))
            else:
                stack.pop()
                on_stack.discard(node)
                done.add(node)
    return False


class PeerToPeerPolicy(TopologyPolicy):
    """
    Shortest-path routing over any trust edges.

    Uses BFS with parent pointers, so the returned path has the minimum
    hop count among paths within max_path_length. When several shortest
    paths exist, the first one discovered in edge order is returned.

    Usage:
        policy = PeerToPeerPolicy()
        path = policy.compute_trust_path(network, "peer-a", "peer-d")
        print(path.hop_count)
    """

    def __init__(self, max_path_length: int = MAX_PATH_LENGTH):
        """
        Initialize the policy.

        Args:
            max_path_length: Depth at which dequeued nodes, the target
                included, are skipped
        """
        self._max_path_length = max_path_length

    @property
    def topology_type(self) -> str:
        return PEER_TO_PEER

    @property
    def max_path_length(self) -> int:
        return self._max_path_length

    def _route(self, network: TrustNetwork, source: str, target: str) -> TrustPath:
        path = self.find_shortest_path(network, source, target)
        if not path:
            logger.debug("No trust path found from %s to %s", source, target)
            return TrustPath.unreachable(source, target)
        return TrustPath.of(path)

    def find_shortest_path(
        self,
        network: TrustNetwork,
        source: str,
        target: str,
    ) -> Optional[list[str]]:
        """
        Breadth-first search from source to target.

        Args:
            network: Network to search
            source: Start provider ID
            target: Goal provider ID

        Returns:
            Provider IDs from source to target, or None if unreachable
            within max_path_length
        """
        adjacency = build_adjacency(network)

        parents: dict[str, Optional[str]] = {source: None}
        depths: dict[str, int] = {source: 0}
        visited: set[str] = {source}
        queue: deque[str] = deque([source])

        while queue:
            current = queue.popleft()

            # Nodes at the bound are skipped outright, the target included
            depth = depths[current]
            if depth >= self._max_path_length:
                logger.debug(
                    "Skipping %s at depth %d (max %d) while searching %s → %s",
                    current, depth, self._max_path_length, source, target,
                )
                continue

            if current == target:
                return self._reconstruct(parents, target)

            for neighbor in adjacency.get(current, ()):
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                parents[neighbor] = current
                depths[neighbor] = depth + 1
                queue.append(neighbor)

        return None

    @staticmethod
    def _reconstruct(parents: dict[str, Optional[str]], target: str) -> list[str]:
        path = []
        node: Optional[str] = target
        while node is not None:
            path.append(node)
            node = parents[node]
        path.reverse()
        return path

    def validate_topology(self, network: Optional[TrustNetwork]) -> bool:
        """Any non-None network is valid; cycles are reported, not rejected."""
        if network is None:
            return False
        if has_cycles(network):
            logger.info(
                "Peer-to-peer network %s contains cycles (allowed)",
                network.network_id,
            )
        return True
