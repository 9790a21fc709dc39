"""Domain exceptions.

Raised by the balancer, the roster service and the roster stores; the API
layer maps each one to an HTTP status.
"""


class TeamBalancerError(Exception):
    """Base class for all team balancer errors."""


class UnknownRoleError(TeamBalancerError, ValueError):
    """One or more players have a primary role outside the four known roles."""

    def __init__(self, player_ids: list[str]):
        self.player_ids = player_ids
        super().__init__(
            f"Players with unknown primary role: {', '.join(player_ids)}"
        )


class RosterStoreError(TeamBalancerError):
    """The roster store could not be read or written."""


class GroupNotFoundError(TeamBalancerError):
    """Group does not exist in the loaded roster."""

    def __init__(self, group_id: str):
        self.group_id = group_id
        super().__init__(f"Group {group_id} not found")


class PlayerNotFoundError(TeamBalancerError):
    """Player does not exist in the active group."""

    def __init__(self, player_id: str):
        self.player_id = player_id
        super().__init__(f"Player {player_id} not found")
