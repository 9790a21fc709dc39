"""Data models for the team balancer."""

from team_balancer.models.player import Group, Player
from team_balancer.models.teams import (
    BalanceMode,
    SkillLevel,
    TeamAssignment,
    UnknownRolePolicy,
    team_average_score,
)

__all__ = [
    "Group",
    "Player",
    "BalanceMode",
    "SkillLevel",
    "TeamAssignment",
    "UnknownRolePolicy",
    "team_average_score",
]
