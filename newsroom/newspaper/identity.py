"""
Identity Resolver Module

Maps opaque Sleeper identifiers to display names. Pure lookups, no I/O.
Resolution is total: unknown roster or player ids degrade to placeholder
names and never raise.
"""

from typing import Any, Dict, List, Optional

from loguru import logger

from newsroom.newspaper.events import Identity, PlayerRef


def _text(value: Any) -> str:
    """Stringify a field, treating None and non-scalars as empty."""
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value).strip()
    return ''


class OwnerDirectory:
    """Roster id -> owner identity lookup built from league users and rosters."""

    def __init__(self, users: List[Dict], rosters: List[Dict]):
        """
        Args:
            users: League users (user_id, username, display_name, metadata.team_name)
            rosters: League rosters (roster_id, owner_id)
        """
        self.user_by_id = {
            str(user.get('user_id')): user
            for user in users or []
            if isinstance(user, dict)
        }
        self.identity_by_roster: Dict[str, Identity] = {}

        for roster in rosters or []:
            if not isinstance(roster, dict) or roster.get('roster_id') is None:
                continue
            roster_id = str(roster['roster_id'])
            user = self.user_by_id.get(str(roster.get('owner_id')))
            self.identity_by_roster[roster_id] = self._build_identity(roster_id, user)

        logger.debug(f"OwnerDirectory built for {len(self.identity_by_roster)} rosters")

    @staticmethod
    def _build_identity(roster_id: str, user: Optional[Dict]) -> Identity:
        user = user or {}
        metadata = user.get('metadata') if isinstance(user.get('metadata'), dict) else {}

        display_name = _text(user.get('display_name'))
        username = _text(user.get('username'))

        team = _text(metadata.get('team_name')) or display_name or username or f"Team {roster_id}"
        gm = display_name or username or 'GM'
        handle = f"@{username}" if username else ''

        return Identity(team=team, gm=gm, handle=handle)

    def lookup(self, roster_id: Any) -> Optional[Identity]:
        """Identity for a roster in the league, None for unknown rosters."""
        return self.identity_by_roster.get(str(roster_id))

    def resolve_owner(self, roster_id: Any) -> Identity:
        """
        Identity for a roster, with placeholders for unknown rosters.

        Args:
            roster_id: Sleeper roster id (int or str)

        Returns:
            Identity - never raises
        """
        identity = self.lookup(roster_id)
        if identity is None:
            logger.debug(f"Unknown roster {roster_id}, using placeholder identity")
            identity = self._build_identity(str(roster_id), None)
        return identity


def resolve_player(players: Dict[str, Dict], player_id: Any) -> PlayerRef:
    """
    Resolve a Sleeper player id to a display name, team and position.

    Name preference: full_name, then first + last name, then "Player {id}".
    Position prefers the first fantasy position over the generic field.

    Args:
        players: Player dictionary keyed by player id
        player_id: Sleeper player id

    Returns:
        PlayerRef - never raises
    """
    player = (players or {}).get(str(player_id))
    if not isinstance(player, dict):
        return PlayerRef(name=f"Player {player_id}")

    name = _text(player.get('full_name'))
    if not name:
        parts = [_text(player.get('first_name')), _text(player.get('last_name'))]
        name = ' '.join(part for part in parts if part)

    fantasy_positions = player.get('fantasy_positions')
    position = ''
    if isinstance(fantasy_positions, list) and fantasy_positions:
        position = _text(fantasy_positions[0])

    return PlayerRef(
        name=name or f"Player {player_id}",
        team=_text(player.get('team')),
        position=position or _text(player.get('position'))
    )
