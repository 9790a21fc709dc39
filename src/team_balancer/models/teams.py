"""Balancing modes and team assignment results."""

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Iterable

from team_balancer.models.player import Player


class BalanceMode(str, Enum):
    """Ordering strategy used within each role group."""

    RANDOM = "random"  # Uniform shuffle
    SCORE_WEIGHTED = "score_weighted"  # Jittered score, descending


class SkillLevel(int, Enum):
    """Score presets offered when adding a player."""

    TOP = 9
    CONFIRMED = 7
    AVERAGE = 5
    BEGINNER = 3


class UnknownRolePolicy(str, Enum):
    """What to do with players whose primary role is not recognized."""

    REJECT = "reject"
    EXCLUDE = "exclude"


def team_average_score(team: Iterable[Player]) -> float:
    """Average score of a team, rounded to one decimal.

    Halves round up (2.25 -> 2.3). Players without a score count as zero.
    An empty team reports 0.0.
    """
    players = list(team)
    if not players:
        return 0.0
    average = sum(p.score_or_zero for p in players) / len(players)
    return float(Decimal(str(average)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class TeamAssignment:
    """The two teams produced by one balancing run. Never persisted."""

    team_a: tuple[Player, ...]
    team_b: tuple[Player, ...]
    mode: BalanceMode
    excluded: tuple[Player, ...] = field(default_factory=tuple)

    @property
    def sizes(self) -> tuple[int, int]:
        return len(self.team_a), len(self.team_b)

    def summary(self) -> dict:
        """Per-team size and average score for display."""
        return {
            "team_a": {
                "size": len(self.team_a),
                "average_score": team_average_score(self.team_a),
            },
            "team_b": {
                "size": len(self.team_b),
                "average_score": team_average_score(self.team_b),
            },
        }
