"""Player and group models."""

from dataclasses import dataclass, field
from typing import Optional

from team_balancer.utils.role_normalizer import normalize_role


@dataclass(frozen=True)
class Player:
    """A player on a roster.

    Only ``positions[0]`` (the primary role) is used for balancing; the
    remaining entries are informational.
    """

    id: str
    name: str
    positions: tuple[str, ...]
    score: Optional[float] = None
    is_present: bool = True
    group_id: Optional[str] = None

    def __post_init__(self):
        # Accept any sequence but store an immutable tuple
        object.__setattr__(self, "positions", tuple(self.positions))
        if not self.positions:
            raise ValueError(f"Player {self.id} must have at least one position")

    @property
    def primary_role(self) -> Optional[str]:
        """Normalized primary role, or None if unrecognized."""
        return normalize_role(self.positions[0])

    @property
    def score_or_zero(self) -> float:
        return self.score if self.score is not None else 0.0

    def with_presence(self, is_present: bool) -> "Player":
        """Copy of this player with a different presence flag."""
        return Player(
            id=self.id,
            name=self.name,
            positions=self.positions,
            score=self.score,
            is_present=is_present,
            group_id=self.group_id,
        )

    @classmethod
    def from_row(cls, row: dict) -> "Player":
        """Build a player from a store row.

        Accepts both the remote column names (``nom``, ``est_present``) and
        the local ones (``name``, ``is_present``).
        """
        score = row.get("score")
        return cls(
            id=str(row["id"]),
            name=row.get("name") or row.get("nom") or "",
            positions=tuple(row.get("positions") or ()),
            score=float(score) if score is not None else None,
            is_present=bool(row.get("is_present", row.get("est_present", False))),
            group_id=str(row["group_id"]) if row.get("group_id") is not None else None,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "positions": list(self.positions),
            "primary_role": self.primary_role,
            "score": self.score,
            "is_present": self.is_present,
            "group_id": self.group_id,
        }


@dataclass
class Group:
    """A named roster of players; one group is active at a time."""

    id: str
    name: str
    players: list[Player] = field(default_factory=list)

    @property
    def present_players(self) -> list[Player]:
        return [p for p in self.players if p.is_present]
