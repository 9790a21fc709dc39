"""Splits a snapshot of present players into two balanced teams."""

import logging
import random
from typing import Optional, Sequence

from team_balancer.exceptions import UnknownRoleError
from team_balancer.models.player import Player
from team_balancer.models.teams import BalanceMode, TeamAssignment, UnknownRolePolicy
from team_balancer.utils.role_normalizer import ROLE_ORDER

logger = logging.getLogger(__name__)

DEFAULT_SCORE_JITTER = 0.5


class TeamBalancer:
    """Assigns players to two teams by role, score and a random draw.

    The random generator is injected so runs can be reproduced; pass either
    ``rng`` or ``seed``. Each call works on its own copy of the input.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        score_jitter: float = DEFAULT_SCORE_JITTER,
        unknown_role_policy: UnknownRolePolicy = UnknownRolePolicy.REJECT,
    ):
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both")
        if score_jitter < 0:
            raise ValueError("score_jitter must be non-negative")
        self.rng = rng if rng is not None else random.Random(seed)
        self.score_jitter = score_jitter
        self.unknown_role_policy = UnknownRolePolicy(unknown_role_policy)

    def balance(
        self,
        players: Sequence[Player],
        mode: Optional[BalanceMode] = None,
    ) -> TeamAssignment:
        """Split players into two teams.

        Args:
            players: Players to assign. Presence is not checked; the caller
                passes present players only.
            mode: Ordering within each role group. None picks
                SCORE_WEIGHTED when any player has a score, RANDOM otherwise.

        Returns:
            TeamAssignment whose team sizes differ by at most one

        Raises:
            UnknownRoleError: If a player's primary role is unrecognized and
                the policy is REJECT
        """
        mode = self.resolve_mode(players, mode)
        groups, excluded = self._group_by_role(players)

        team_a: list[Player] = []
        team_b: list[Player] = []

        # One coin flip per run; the flag carries across role groups
        pick_a = self.rng.random() < 0.5

        for role in ROLE_ORDER:
            for player in self._order_group(groups[role], mode):
                if pick_a:
                    team_a.append(player)
                else:
                    team_b.append(player)
                pick_a = not pick_a

        team_a, team_b = ensure_numeric_balance(team_a, team_b)

        logger.debug(
            f"Balanced {len(team_a) + len(team_b)} players ({mode.value}): "
            f"{len(team_a)} vs {len(team_b)}, {len(excluded)} excluded"
        )
        return TeamAssignment(
            team_a=tuple(team_a),
            team_b=tuple(team_b),
            mode=mode,
            excluded=tuple(excluded),
        )

    @staticmethod
    def resolve_mode(
        players: Sequence[Player], mode: Optional[BalanceMode] = None
    ) -> BalanceMode:
        """Explicit mode, or score-weighted when scores are available."""
        if mode is not None:
            return BalanceMode(mode)
        if any(p.score is not None for p in players):
            return BalanceMode.SCORE_WEIGHTED
        return BalanceMode.RANDOM

    def _group_by_role(
        self, players: Sequence[Player]
    ) -> tuple[dict[str, list[Player]], list[Player]]:
        """Partition players by primary role in ROLE_ORDER."""
        groups: dict[str, list[Player]] = {role: [] for role in ROLE_ORDER}
        unknown: list[Player] = []

        for player in players:
            role = player.primary_role
            if role is None:
                unknown.append(player)
            else:
                groups[role].append(player)

        if unknown:
            if self.unknown_role_policy == UnknownRolePolicy.REJECT:
                raise UnknownRoleError([p.id for p in unknown])
            logger.warning(
                "Excluding players with unknown primary role: "
                + ", ".join(f"{p.name} ({p.positions[0]})" for p in unknown)
            )

        return groups, unknown

    def _order_group(self, group: list[Player], mode: BalanceMode) -> list[Player]:
        ordered = list(group)
        if mode == BalanceMode.RANDOM:
            self.rng.shuffle(ordered)
            return ordered

        # Jitter keeps repeated runs on the same roster from producing the same split
        jittered = [
            (p.score_or_zero + self.rng.uniform(-self.score_jitter, self.score_jitter), p)
            for p in ordered
        ]
        jittered.sort(key=lambda item: item[0], reverse=True)
        return [p for _, p in jittered]


def balance(
    players: Sequence[Player],
    mode: Optional[BalanceMode] = None,
    rng: Optional[random.Random] = None,
) -> TeamAssignment:
    """Balance with a one-off TeamBalancer using the default settings."""
    return TeamBalancer(rng=rng).balance(players, mode=mode)


def ensure_numeric_balance(
    team_a: list[Player], team_b: list[Player]
) -> tuple[list[Player], list[Player]]:
    """Move the most recently added players until sizes differ by at most one.

    Each team is treated as a stack: pop from the larger, push onto the
    smaller. Works in place and returns both lists.
    """
    while abs(len(team_a) - len(team_b)) > 1:
        if len(team_a) > len(team_b):
            team_b.append(team_a.pop())
        else:
            team_a.append(team_b.pop())
    return team_a, team_b
