# -*- encoding: utf-8 -*-
"""
fedtrust Trust Network Model - Immutable federation graph value objects.

A trust network is a directed graph where:
- Nodes are identity providers (ProviderNode)
- Edges are trust relationships between providers (TrustEdge)
- The network carries a topology type that selects the routing policy

Flow:
    config document ──→ NetworkConfigLoader ──→ TrustNetwork ──→ TopologyPolicy
                                                                   └─→ TrustPath

Every object here is frozen. Collections are exposed as tuples, frozensets
or MappingProxyType views, so a snapshot can be shared across threads and
replaced wholesale on reload instead of being mutated.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union


HUB_AND_SPOKE = "hub-and-spoke"
PEER_TO_PEER = "peer-to-peer"
DEFAULT_TOPOLOGY_TYPE = HUB_AND_SPOKE


class TrustLevel(str, Enum):
    """Level of trust carried by a trust relationship."""
    EXPLICIT = "explicit"       # Directly configured
    TRANSITIVE = "transitive"   # Derived through intermediate providers

    @classmethod
    def parse(cls, value: Union["TrustLevel", str, None]) -> "TrustLevel":
        """
        Parse a trust level case-insensitively.

        None and the empty string map to EXPLICIT.

        Raises:
            ValueError: If the value names no known level
        """
        if isinstance(value, TrustLevel):
            return value
        if not value:
            return cls.EXPLICIT
        return cls(value.strip().lower())


class RoleKind(str, Enum):
    """Tag of a ProviderRole."""
    HUB = "hub"
    SPOKE = "spoke"
    PEER = "peer"
    OTHER = "other"


@dataclass(frozen=True)
class ProviderRole:
    """
    Topology-significant role of a provider.

    A closed set of known tags (hub, spoke, peer) plus OTHER, which keeps
    the raw configured string so unrecognized roles survive a round trip.

    Attributes:
        kind: The role tag
        value: Raw role string (only meaningful for OTHER)
    """
    kind: RoleKind
    value: str = ""

    @classmethod
    def parse(cls, role: Union["ProviderRole", str, None]) -> "ProviderRole":
        """
        Parse a configured role string.

        Known tags match case-insensitively. None and blank strings mean
        spoke, the default role for an unannotated provider.
        """
        if isinstance(role, ProviderRole):
            return role
        if role is None or not role.strip():
            return SPOKE
        normalized = role.strip().lower()
        for kind in (RoleKind.HUB, RoleKind.SPOKE, RoleKind.PEER):
            if normalized == kind.value:
                return _KNOWN_ROLES[kind]
        return cls(RoleKind.OTHER, role)

    @property
    def is_hub(self) -> bool:
        return self.kind is RoleKind.HUB

    def __str__(self) -> str:
        if self.kind is RoleKind.OTHER:
            return self.value
        return self.kind.value


HUB = ProviderRole(RoleKind.HUB)
SPOKE = ProviderRole(RoleKind.SPOKE)
PEER = ProviderRole(RoleKind.PEER)

_KNOWN_ROLES: dict[RoleKind, ProviderRole] = {
    RoleKind.HUB: HUB,
    RoleKind.SPOKE: SPOKE,
    RoleKind.PEER: PEER,
}


def _freeze_strings(data: Optional[Mapping[str, Any]]) -> Mapping[str, str]:
    """Copy a mapping into a read-only view with string values."""
    if not data:
        return MappingProxyType({})
    return MappingProxyType({str(k): str(v) for k, v in data.items()})


@dataclass(frozen=True, eq=False)
class ProviderNode:
    """
    An identity provider in the trust network.

    Equality and hashing use provider_id only: two nodes with the same ID
    are the same provider even if their issuer or metadata differ.

    Attributes:
        provider_id: Unique provider identifier (primary key)
        issuer: OIDC issuer URL
        role: Topology role (hub, spoke, peer, or a custom tag)
        metadata: Opaque string metadata (jwks_uri, endpoints, contacts)
    """
    provider_id: str
    issuer: str
    role: ProviderRole = SPOKE
    metadata: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        if not self.provider_id:
            raise ValueError("provider_id cannot be empty")
        if not self.issuer:
            raise ValueError(f"issuer cannot be empty for provider {self.provider_id}")
        object.__setattr__(self, "role", ProviderRole.parse(self.role))
        object.__setattr__(self, "metadata", _freeze_strings(self.metadata))

    @property
    def is_hub(self) -> bool:
        return self.role.is_hub

    @property
    def jwks_uri(self) -> Optional[str]:
        return self.metadata.get("jwks_uri")

    @property
    def authorization_endpoint(self) -> Optional[str]:
        return self.metadata.get("authorization_endpoint")

    @property
    def token_endpoint(self) -> Optional[str]:
        return self.metadata.get("token_endpoint")

    @property
    def userinfo_endpoint(self) -> Optional[str]:
        return self.metadata.get("userinfo_endpoint")

    @property
    def organization(self) -> Optional[str]:
        return self.metadata.get("organization")

    def to_dict(self) -> dict:
        """Convert to the provider entry form used in network config."""
        result = {
            "issuer": self.issuer,
            "role": str(self.role),
        }
        if self.metadata:
            result["metadata"] = dict(self.metadata)
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ProviderNode):
            return NotImplemented
        return self.provider_id == other.provider_id

    def __hash__(self) -> int:
        return hash(self.provider_id)


@dataclass(frozen=True, eq=False)
class TrustEdge:
    """
    A directed trust relationship: from_provider trusts to_provider.

    The reverse direction is a separate edge. Equality uses the
    (from_provider, to_provider) pair, so a network never holds two edges
    between the same ordered pair regardless of level.
    """
    from_provider: str
    to_provider: str
    level: TrustLevel = TrustLevel.EXPLICIT

    def __post_init__(self):
        if not self.from_provider:
            raise ValueError("from_provider cannot be empty")
        if not self.to_provider:
            raise ValueError("to_provider cannot be empty")
        object.__setattr__(self, "level", TrustLevel.parse(self.level))

    @property
    def pair(self) -> tuple[str, str]:
        return (self.from_provider, self.to_provider)

    def to_dict(self) -> dict:
        return {
            "from": self.from_provider,
            "to": self.to_provider,
            "level": self.level.value,
        }

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TrustEdge):
            return NotImplemented
        return self.pair == other.pair

    def __hash__(self) -> int:
        return hash(self.pair)

    def __str__(self) -> str:
        return f"{self.from_provider} -> {self.to_provider} ({self.level.value})"


@dataclass(frozen=True, eq=False)
class TrustNetwork:
    """
    Immutable snapshot of a federation trust graph.

    Providers keep their insertion order, and trust relationships keep the
    order in which they were first added with duplicates dropped. Policies
    that pick "the first" candidate depend on these orders.

    Equality is by (network_id, version): two snapshots of the same network
    built from the same registry version are interchangeable.

    Attributes:
        network_id: Unique network identifier
        topology_type: Routing policy identifier ("hub-and-spoke", "peer-to-peer")
        providers: Read-only mapping of provider_id → ProviderNode
        trust_relationships: Tuple of unique TrustEdge in insertion order
        version: Provenance marker (registry timestamp, defaults to build time)
        metadata: Read-only network-level string metadata
    """
    network_id: str
    topology_type: str = DEFAULT_TOPOLOGY_TYPE
    providers: Mapping[str, ProviderNode] = field(default_factory=lambda: MappingProxyType({}))
    trust_relationships: tuple[TrustEdge, ...] = ()
    version: Optional[datetime] = None
    metadata: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    _pairs: frozenset = field(default=frozenset(), init=False, repr=False)

    def __post_init__(self):
        if not self.network_id:
            raise ValueError("network_id cannot be empty")
        if not self.topology_type:
            object.__setattr__(self, "topology_type", DEFAULT_TOPOLOGY_TYPE)

        providers = self.providers
        if not isinstance(providers, Mapping):
            providers = {node.provider_id: node for node in providers}
        object.__setattr__(self, "providers", MappingProxyType(dict(providers)))

        # dict.fromkeys dedups on TrustEdge equality, keeping first occurrence
        edges = tuple(dict.fromkeys(self.trust_relationships))
        object.__setattr__(self, "trust_relationships", edges)
        object.__setattr__(self, "_pairs", frozenset(e.pair for e in edges))

        if self.version is None:
            object.__setattr__(self, "version", datetime.now(timezone.utc))
        object.__setattr__(self, "metadata", _freeze_strings(self.metadata))

    def is_member(self, provider_id: Optional[str]) -> bool:
        """Check if a provider is a member of this network."""
        return provider_id is not None and provider_id in self.providers

    def get_provider(self, provider_id: Optional[str]) -> Optional[ProviderNode]:
        """Get a provider node by ID, or None if absent."""
        if provider_id is None:
            return None
        return self.providers.get(provider_id)

    def has_trust_relationship(self, from_provider: str, to_provider: str) -> bool:
        """Check for a direct trust edge from_provider → to_provider."""
        return (from_provider, to_provider) in self._pairs

    def outgoing(self, provider_id: str) -> tuple[str, ...]:
        """Providers that provider_id directly trusts, in edge order."""
        return tuple(
            e.to_provider for e in self.trust_relationships
            if e.from_provider == provider_id
        )

    def hubs(self) -> tuple[ProviderNode, ...]:
        """All hub nodes, in provider map order."""
        return tuple(node for node in self.providers.values() if node.is_hub)

    def provider_count(self) -> int:
        return len(self.providers)

    def edge_count(self) -> int:
        return len(self.trust_relationships)

    def to_dict(self) -> dict:
        """Render as a network configuration document."""
        result = {
            "network_id": self.network_id,
            "topology_type": self.topology_type,
            "registry_version": self.version.isoformat(),
            "providers": {
                pid: node.to_dict() for pid, node in self.providers.items()
            },
            "trust_relationships": [e.to_dict() for e in self.trust_relationships],
        }
        if self.metadata:
            result["metadata"] = dict(self.metadata)
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TrustNetwork):
            return NotImplemented
        return (self.network_id, self.version) == (other.network_id, other.version)

    def __hash__(self) -> int:
        return hash((self.network_id, self.version))

    def __repr__(self) -> str:
        return (
            f"TrustNetwork(network_id={self.network_id!r}, "
            f"topology_type={self.topology_type!r}, "
            f"providers={len(self.providers)}, "
            f"trust_relationships={len(self.trust_relationships)}, "
            f"version={self.version.isoformat()})"
        )


class TrustNetworkBuilder:
    """
    Accumulates providers and edges, then freezes them into a TrustNetwork.

    Adding a provider with an existing ID replaces it; adding an edge that
    already exists (same from/to) is ignored.

    Usage:
        network = (
            TrustNetworkBuilder("fed-1")
            .add_provider("hub-a", "https://hub-a.example", "hub")
            .add_provider("b", "https://b.example")
            .add_trust_relationship("b", "hub-a")
            .build()
        )
    """

    def __init__(self, network_id: str = "", topology_type: str = DEFAULT_TOPOLOGY_TYPE):
        self._network_id = network_id
        self._topology_type = topology_type
        self._providers: dict[str, ProviderNode] = {}
        self._edges: dict[TrustEdge, None] = {}
        self._metadata: dict[str, str] = {}
        self._version: Optional[datetime] = None

    def network_id(self, network_id: str) -> "TrustNetworkBuilder":
        self._network_id = network_id
        return self

    def topology_type(self, topology_type: str) -> "TrustNetworkBuilder":
        self._topology_type = topology_type
        return self

    def add_provider(
        self,
        provider: Union[ProviderNode, str],
        issuer: str = "",
        role: Union[ProviderRole, str, None] = None,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> "TrustNetworkBuilder":
        """Add a ProviderNode, or build one from its fields."""
        if not isinstance(provider, ProviderNode):
            provider = ProviderNode(
                provider_id=provider,
                issuer=issuer,
                role=role,
                metadata=metadata,
            )
        self._providers[provider.provider_id] = provider
        return self

    def add_trust_relationship(
        self,
        edge: Union[TrustEdge, str],
        to_provider: str = "",
        level: Union[TrustLevel, str, None] = TrustLevel.EXPLICIT,
    ) -> "TrustNetworkBuilder":
        """Add a TrustEdge, or build one from (from_provider, to_provider, level)."""
        if not isinstance(edge, TrustEdge):
            edge = TrustEdge(edge, to_provider, level)
        self._edges.setdefault(edge, None)
        return self

    def metadata(self, key: str, value: str) -> "TrustNetworkBuilder":
        self._metadata[key] = value
        return self

    def version(self, version: Optional[datetime]) -> "TrustNetworkBuilder":
        self._version = version
        return self

    def build(self) -> TrustNetwork:
        return TrustNetwork(
            network_id=self._network_id,
            topology_type=self._topology_type,
            providers=self._providers,
            trust_relationships=tuple(self._edges),
            version=self._version,
            metadata=self._metadata,
        )
