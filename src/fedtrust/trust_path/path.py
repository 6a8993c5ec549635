# -*- encoding: utf-8 -*-
"""
fedtrust TrustPath - Result of a trust path computation.

A trust path is an ordered sequence of provider IDs forming a chain of
trust from a source provider to a target provider. An unreachable result
carries an empty path; callers gating a federation redirect must treat
reachable=False as a denial.
"""

from dataclasses import dataclass
from typing import Sequence

UNKNOWN_PROVIDER = "unknown"


@dataclass(frozen=True)
class TrustPath:
    """
    An immutable trust path between two providers.

    Equality covers the whole route, not just the endpoints: two results
    with the same source and target but different intermediaries differ.

    Attributes:
        source_provider: Provider the request originates at
        target_provider: Provider the request must reach
        path: Provider IDs from source to target (empty iff unreachable)
        reachable: Whether a trust path exists
    """
    source_provider: str
    target_provider: str
    path: tuple[str, ...] = ()
    reachable: bool = False

    def __post_init__(self):
        if self.source_provider is None:
            raise ValueError("source_provider cannot be None")
        if self.target_provider is None:
            raise ValueError("target_provider cannot be None")
        object.__setattr__(self, "path", tuple(self.path or ()))

    @classmethod
    def unreachable(cls, source: str, target: str) -> "TrustPath":
        """Build an unreachable result for (source, target)."""
        return cls(source_provider=source, target_provider=target)

    @classmethod
    def of(cls, path: Sequence[str]) -> "TrustPath":
        """
        Build a reachable result from a non-empty route.

        The first element is the source, the last is the target.
        """
        if not path:
            raise ValueError("a reachable path needs at least one provider")
        return cls(
            source_provider=path[0],
            target_provider=path[-1],
            path=tuple(path),
            reachable=True,
        )

    @property
    def hop_count(self) -> int:
        """Number of trust edges traversed; 0 for source == target, -1 if unreachable."""
        if not self.reachable:
            return -1
        return max(0, len(self.path) - 1)

    @property
    def intermediaries(self) -> tuple[str, ...]:
        """Providers strictly between source and target."""
        return self.path[1:-1]

    def to_dict(self) -> dict:
        return {
            "source": self.source_provider,
            "target": self.target_provider,
            "path": list(self.path),
            "reachable": self.reachable,
            "hop_count": self.hop_count,
        }

    def to_mermaid(self) -> str:
        """Render the route as a Mermaid flowchart."""
        lines = ["graph LR"]
        if not self.reachable:
            lines.append(
                f"    {self.source_provider} -. unreachable .-> {self.target_provider}"
            )
        elif len(self.path) == 1:
            lines.append(f"    {self.path[0]}")
        else:
            for src, tgt in zip(self.path, self.path[1:]):
                lines.append(f"    {src} -->|trusts| {tgt}")
        return "\n".join(lines)

    def __str__(self) -> str:
        if not self.reachable:
            return f"{self.source_provider} -> {self.target_provider} (unreachable)"
        return " -> ".join(self.path)
