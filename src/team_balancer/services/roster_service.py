"""In-memory roster state synchronized with a roster store."""

import logging
from typing import Optional, Sequence

from team_balancer.exceptions import (
    GroupNotFoundError,
    PlayerNotFoundError,
    RosterStoreError,
)
from team_balancer.models.player import Group, Player
from team_balancer.repositories.roster_store import RosterStore
from team_balancer.utils.role_normalizer import normalize_role_strict

logger = logging.getLogger(__name__)


def _player_from_row(row: dict) -> Player:
    try:
        return Player.from_row(row)
    except (KeyError, TypeError, ValueError) as e:
        logger.error(f"Malformed player row {row.get('id')!r}: {e}")
        raise RosterStoreError(f"Malformed player row {row.get('id')!r}: {e}") from e


class RosterService:
    """Owns the loaded groups and the active group.

    Presence toggles are local until ``sync()`` persists them. Every method
    that talks to the store only updates local state after the store call
    succeeded.
    """

    def __init__(self, store: RosterStore):
        self.store = store
        self._groups: list[Group] = []
        self._active_group_id: Optional[str] = None
        self._loaded = False

    @property
    def is_loaded(self) -> bool:
        """True once a snapshot has been fetched successfully."""
        return self._loaded

    @property
    def groups(self) -> tuple[Group, ...]:
        return tuple(self._groups)

    @property
    def active_group_id(self) -> Optional[str]:
        return self._active_group_id

    @property
    def active_group(self) -> Optional[Group]:
        for group in self._groups:
            if group.id == self._active_group_id:
                return group
        return None

    @property
    def active_players(self) -> tuple[Player, ...]:
        group = self.active_group
        return tuple(group.players) if group else ()

    async def load(self) -> None:
        """Fetch a fresh snapshot of groups and players from the store.

        Raises:
            RosterStoreError: If the store fails or returns a malformed row;
                the previously loaded state is kept
        """
        groups_data = await self.store.fetch_groups()
        players_data = await self.store.fetch_players()

        players = [_player_from_row(p) for p in players_data]
        groups = [
            Group(
                id=str(g["id"]),
                name=g["name"],
                players=[p for p in players if p.group_id == str(g["id"])],
            )
            for g in groups_data
        ]

        self._groups = groups
        self._loaded = True
        if self.active_group is None:
            self._active_group_id = groups[0].id if groups else None

        logger.info(
            f"Loaded {len(groups)} groups, {len(players_data)} players "
            f"(active group: {self._active_group_id})"
        )

    def switch_group(self, group_id: str) -> Group:
        for group in self._groups:
            if group.id == group_id:
                self._active_group_id = group_id
                return group
        raise GroupNotFoundError(group_id)

    def list_present_players(self) -> tuple[Player, ...]:
        """Immutable snapshot of the active group's present players."""
        return tuple(p for p in self.active_players if p.is_present)

    def _require_active_group(self) -> Group:
        group = self.active_group
        if group is None:
            raise GroupNotFoundError(str(self._active_group_id))
        return group

    async def add_player(
        self,
        name: str,
        positions: Sequence[str],
        score: Optional[float] = None,
    ) -> Player:
        """Add a present player to the active group.

        Raises:
            ValueError: If the name is blank, positions is empty or a role
                tag is not recognized
        """
        name = name.strip()
        if not name:
            raise ValueError("Player name must not be empty")
        if not positions:
            raise ValueError("At least one position is required")
        roles = [normalize_role_strict(p) for p in positions]
        group = self._require_active_group()

        row = await self.store.insert_player(
            {
                "name": name,
                "positions": roles,
                "score": score,
                "is_present": True,
                "group_id": group.id,
            }
        )
        await self.load()
        return _player_from_row(row)

    def toggle_presence(self, player_id: str) -> Player:
        """Flip a player's presence flag locally."""
        group = self._require_active_group()
        for i, player in enumerate(group.players):
            if player.id == player_id:
                toggled = player.with_presence(not player.is_present)
                group.players[i] = toggled
                return toggled
        raise PlayerNotFoundError(player_id)

    async def reset_presences(self) -> None:
        """Mark every player of the active group absent, remotely then locally."""
        group = self._require_active_group()
        await self.store.update_presence([p.id for p in group.players], False)
        group.players = [p.with_presence(False) for p in group.players]

    async def sync(self) -> int:
        """Persist the active group's players in one batch.

        Returns:
            Number of player rows written
        """
        group = self._require_active_group()
        rows = [
            {
                "id": p.id,
                "name": p.name,
                "positions": list(p.positions),
                "score": p.score,
                "is_present": p.is_present,
                "group_id": group.id,
            }
            for p in group.players
        ]
        await self.store.upsert_players(rows)
        logger.info(f"Synced {len(rows)} players of group {group.id}")
        return len(rows)

    async def delete_player(self, player_id: str) -> None:
        if not any(p.id == player_id for p in self.active_players):
            raise PlayerNotFoundError(player_id)
        await self.store.delete_player(player_id)
        await self.load()
