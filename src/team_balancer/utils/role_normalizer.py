"""Centralized role normalization utility.

All role normalization in the codebase should use this module to ensure
consistency. The canonical format is lowercase: goalkeeper, defender,
midfielder, forward.
"""

from typing import Optional

# Canonical roles - the standard format used throughout the application
CANONICAL_ROLES = frozenset({"goalkeeper", "defender", "midfielder", "forward"})

# Comprehensive mapping from any known role format to canonical lowercase
ROLE_ALIASES: dict[str, str] = {
    # Goalkeeper variations
    "goalkeeper": "goalkeeper",
    "goalie": "goalkeeper",
    "keeper": "goalkeeper",
    "gk": "goalkeeper",
    "gardien": "goalkeeper",

    # Defender variations
    "defender": "defender",
    "defence": "defender",
    "defense": "defender",
    "back": "defender",
    "df": "defender",
    "def": "defender",
    "défenseur": "defender",
    "defenseur": "defender",

    # Midfielder variations
    "midfielder": "midfielder",
    "midfield": "midfielder",
    "mid": "midfielder",
    "mf": "midfielder",
    "milieu": "midfielder",

    # Forward variations
    "forward": "forward",
    "striker": "forward",
    "attacker": "forward",
    "fw": "forward",
    "st": "forward",
    "attaquant": "forward",
}

# Fixed priority order used for allocation passes and display
ROLE_ORDER = ["goalkeeper", "defender", "midfielder", "forward"]


def normalize_role(role: Optional[str]) -> Optional[str]:
    """Normalize a role string to canonical lowercase format.

    Args:
        role: Role string in any known format (e.g., "GK", "Défenseur", "mid")

    Returns:
        Normalized role string (goalkeeper/defender/midfielder/forward)
        or None if invalid/None

    Examples:
        >>> normalize_role("GK")
        'goalkeeper'
        >>> normalize_role("Attaquant")
        'forward'
        >>> normalize_role(None)
        None
    """
    if not isinstance(role, str):
        return None

    return ROLE_ALIASES.get(role.strip().lower())


def normalize_role_strict(role: str) -> str:
    """Normalize a role string, raising ValueError if unknown.

    Args:
        role: Role string in any known format

    Returns:
        Normalized role string

    Raises:
        ValueError: If role is not recognized
    """
    normalized = normalize_role(role)
    if normalized is None:
        raise ValueError(f"Unknown role: {role}")
    return normalized


def is_valid_role(role: Optional[str]) -> bool:
    """Check if a role string is valid (can be normalized)."""
    return normalize_role(role) is not None


def role_priority(role: Optional[str]) -> int:
    """Position of a role in ROLE_ORDER; unknown roles sort last (99)."""
    normalized = normalize_role(role)
    return ROLE_ORDER.index(normalized) if normalized else 99
