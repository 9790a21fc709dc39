"""Utility modules for team_balancer."""

from team_balancer.utils.role_normalizer import (
    CANONICAL_ROLES,
    ROLE_ALIASES,
    ROLE_ORDER,
    normalize_role,
    normalize_role_strict,
    is_valid_role,
    role_priority,
)

__all__ = [
    "CANONICAL_ROLES",
    "ROLE_ALIASES",
    "ROLE_ORDER",
    "normalize_role",
    "normalize_role_strict",
    "is_valid_role",
    "role_priority",
]
