"""Roster storage backends."""

from team_balancer.repositories.roster_store import (
    MemoryRosterStore,
    RosterStore,
    get_roster_store,
)

__all__ = ["MemoryRosterStore", "RosterStore", "get_roster_store"]
