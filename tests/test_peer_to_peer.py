# -*- encoding: utf-8 -*-
"""
Tests for fedtrust Peer-to-Peer policy.

Tests BFS shortest paths, cycle handling, the depth bound, cycle
detection and invalid input.
"""

import itertools

import pytest

from fedtrust.network.model import TrustNetworkBuilder
from fedtrust.topology.peer_to_peer import (
    MAX_PATH_LENGTH,
    PeerToPeerPolicy,
    build_adjacency,
    has_cycles,
)


def _network(edges, providers=None):
    """Build a peer network from (from, to) pairs."""
    builder = TrustNetworkBuilder("p2p", "peer-to-peer")
    ids = providers or sorted({p for edge in edges for p in edge})
    for provider_id in ids:
        builder.add_provider(provider_id, f"https://{provider_id}.example", "peer")
    for src, tgt in edges:
        builder.add_trust_relationship(src, tgt)
    return builder.build()


def _chain(length):
    """n0 → n1 → ... → n{length}."""
    return _network([(f"n{i}", f"n{i + 1}") for i in range(length)])


def _all_simple_path_lengths(network, source, target):
    """Brute-force hop counts of every simple path, for cross-checking BFS."""
    adjacency = build_adjacency(network)
    lengths = []
    stack = [(source, (source,))]
    while stack:
        node, path = stack.pop()
        if node == target:
            lengths.append(len(path) - 1)
            continue
        for nxt in adjacency.get(node, []):
            if nxt not in path:
                stack.append((nxt, path + (nxt,)))
    return lengths


@pytest.fixture
def policy():
    return PeerToPeerPolicy()


class TestTopologyType:

    def test_type(self, policy):
        assert policy.topology_type == "peer-to-peer"

    def test_default_bound(self, policy):
        assert policy.max_path_length == MAX_PATH_LENGTH == 10


# ── Shortest Path Tests ──────────────────────────────────────────────


class TestShortestPath:
    """BFS shortest path discovery."""

    def test_direct(self, policy):
        network = _network([("a", "b")])
        path = policy.compute_trust_path(network, "a", "b")
        assert path.path == ("a", "b")
        assert path.hop_count == 1

    def test_transitive(self, policy):
        network = _network([("a", "b"), ("b", "c")])
        path = policy.compute_trust_path(network, "a", "c")
        assert path.path == ("a", "b", "c")
        assert path.hop_count == 2

    def test_direct_shortcut_wins(self, policy):
        network = _network([("a", "b"), ("b", "c"), ("c", "d"), ("a", "d")])
        path = policy.compute_trust_path(network, "a", "d")
        assert path.path == ("a", "d")
        assert path.hop_count == 1

    def test_shorter_branch_wins(self, policy):
        network = _network([
            ("root", "a"), ("a", "b"), ("b", "target"),
            ("root", "c"), ("c", "target"),
        ])
        path = policy.compute_trust_path(network, "root", "target")
        assert path.path == ("root", "c", "target")

    def test_first_discovered_among_equal_paths(self, policy):
        network = _network(
            [("a", "x"), ("a", "y"), ("x", "b"), ("y", "b")],
            providers=["a", "b", "x", "y"],
        )
        path = policy.compute_trust_path(network, "a", "b")
        assert path.hop_count == 2
        assert path.path == ("a", "x", "b")

    def test_direction_respected(self, policy):
        network = _network([("a", "b")])
        assert not policy.compute_trust_path(network, "b", "a").reachable

    def test_disconnected(self, policy):
        network = _network([("a", "b"), ("c", "d")])
        path = policy.compute_trust_path(network, "a", "d")
        assert not path.reachable
        assert path.hop_count == -1

    def test_endpoints_match(self, policy):
        network = _network([("a", "b"), ("b", "c"), ("c", "d")])
        path = policy.compute_trust_path(network, "a", "d")
        assert path.path[0] == "a"
        assert path.path[-1] == "d"

    def test_hop_count_is_minimal(self, policy):
        edges = [
            ("a", "b"), ("a", "c"), ("b", "d"), ("c", "e"), ("d", "f"),
            ("e", "f"), ("b", "e"), ("f", "g"), ("c", "g"), ("g", "a"),
        ]
        network = _network(edges)
        for source, target in itertools.permutations(network.providers, 2):
            path = policy.compute_trust_path(network, source, target)
            lengths = _all_simple_path_lengths(network, source, target)
            if lengths:
                assert path.reachable
                assert path.hop_count == min(lengths)
            else:
                assert not path.reachable

    def test_find_shortest_path(self, policy):
        network = _network([("a", "b"), ("b", "c")])
        assert policy.find_shortest_path(network, "a", "c") == ["a", "b", "c"]
        assert policy.find_shortest_path(network, "c", "a") is None


# ── Cycle Tests ──────────────────────────────────────────────────────


class TestCycles:
    """Cycles terminate without infinite loops."""

    def test_three_cycle(self, policy):
        network = _network([("a", "b"), ("b", "c"), ("c", "a")])
        path = policy.compute_trust_path(network, "a", "c")
        assert path.path == ("a", "b", "c")
        assert path.hop_count == 2

    def test_cycle_without_target(self, policy):
        network = _network([("a", "b"), ("b", "a")], providers=["a", "b", "z"])
        assert not policy.compute_trust_path(network, "a", "z").reachable

    def test_self_loop(self, policy):
        network = _network([("a", "a"), ("a", "b")])
        assert policy.compute_trust_path(network, "a", "b").path == ("a", "b")

    def test_dense_cyclic_graph(self, policy):
        ids = [f"p{i}" for i in range(30)]
        edges = [(s, t) for s in ids for t in ids if s != t]
        network = _network(edges)
        path = policy.compute_trust_path(network, "p0", "p29")
        assert path.hop_count == 1


# ── Depth Bound Tests ────────────────────────────────────────────────


class TestDepthBound:
    """Targets at max_path_length hops or more are not found."""

    def test_path_just_inside_bound(self, policy):
        network = _chain(MAX_PATH_LENGTH - 1)
        path = policy.compute_trust_path(network, "n0", f"n{MAX_PATH_LENGTH - 1}")
        assert path.reachable
        assert path.hop_count == MAX_PATH_LENGTH - 1

    def test_path_at_bound(self, policy):
        network = _chain(MAX_PATH_LENGTH)
        path = policy.compute_trust_path(network, "n0", f"n{MAX_PATH_LENGTH}")
        assert not path.reachable

    def test_path_beyond_bound(self, policy):
        network = _chain(MAX_PATH_LENGTH + 1)
        path = policy.compute_trust_path(network, "n0", f"n{MAX_PATH_LENGTH + 1}")
        assert not path.reachable

    def test_custom_bound(self):
        network = _chain(3)
        bounded = PeerToPeerPolicy(max_path_length=3)
        assert bounded.compute_trust_path(network, "n0", "n2").reachable
        assert not bounded.compute_trust_path(network, "n0", "n3").reachable
        assert PeerToPeerPolicy(max_path_length=4).compute_trust_path(network, "n0", "n3").reachable

    def test_long_cycle_bounded(self, policy):
        size = 50
        edges = [(f"n{i}", f"n{(i + 1) % size}") for i in range(size)]
        network = _network(edges)
        assert not policy.compute_trust_path(network, "n0", "n25").reachable
        assert policy.compute_trust_path(network, "n0", "n5").hop_count == 5


# ── Invalid Input Tests ──────────────────────────────────────────────


class TestInvalidInput:

    def test_none_network(self, policy):
        path = policy.compute_trust_path(None, "a", "b")
        assert not path.reachable
        assert path.hop_count == -1

    def test_none_endpoints(self, policy):
        network = _network([("a", "b")])
        path = policy.compute_trust_path(network, None, None)
        assert (path.source_provider, path.target_provider) == ("unknown", "unknown")

    def test_unhashable_endpoints(self, policy):
        network = _network([("a", "b")])
        path = policy.compute_trust_path(network, ["a"], ["a"])
        assert not path.reachable
        assert (path.source_provider, path.target_provider) == ("unknown", "unknown")
        assert not policy.compute_trust_path(network, "a", 7).reachable

    def test_unknown_provider(self, policy):
        network = _network([("a", "b")])
        assert not policy.compute_trust_path(network, "a", "zzz").reachable
        assert not policy.compute_trust_path(network, "zzz", "b").reachable

    def test_same_provider(self, policy):
        network = _network([("a", "b"), ("b", "a")])
        for provider_id in network.providers:
            path = policy.compute_trust_path(network, provider_id, provider_id)
            assert path.path == (provider_id,)
            assert path.hop_count == 0


# ── Validation Tests ─────────────────────────────────────────────────


class TestValidateTopology:

    def test_none(self, policy):
        assert policy.validate_topology(None) is False

    def test_acyclic(self, policy):
        assert policy.validate_topology(_network([("a", "b")]))

    def test_cycles_allowed(self, policy):
        assert policy.validate_topology(_network([("a", "b"), ("b", "a")]))

    def test_empty_network(self, policy):
        assert policy.validate_topology(TrustNetworkBuilder("p2p", "peer-to-peer").build())


class TestHasCycles:
    """Informational cycle detection."""

    def test_none(self):
        assert has_cycles(None) is False

    def test_acyclic(self):
        assert not has_cycles(_network([("a", "b"), ("b", "c"), ("a", "c")]))

    def test_cycle(self):
        assert has_cycles(_network([("a", "b"), ("b", "c"), ("c", "a")]))

    def test_self_loop(self):
        assert has_cycles(_network([("a", "a")]))

    def test_diamond_is_acyclic(self):
        assert not has_cycles(_network([("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")]))

    def test_deep_chain(self):
        # Deep enough to overflow a recursive DFS
        assert not has_cycles(_chain(5000))


class TestBuildAdjacency:

    def test_edge_order_kept(self):
        network = _network([("a", "c"), ("a", "b")], providers=["a", "b", "c"])
        assert build_adjacency(network) == {"a": ["c", "b"]}
