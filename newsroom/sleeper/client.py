"""
Sleeper Client Module

Read-only client for the Sleeper league API. Assembles the raw bundle the
newsroom works from: league metadata, users, rosters, a recent window of
transactions and the full player dictionary.

Failure policy:
- League, users, rosters and players are required; any HTTP or transport
  error propagates.
- Transaction rounds are collected best-effort; a failed round is skipped
  and counted.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests
from loguru import logger


@dataclass
class CollectResult:
    """Items gathered by a best-effort collect plus how many units were skipped."""
    items: List[Any] = field(default_factory=list)
    skipped: int = 0


@dataclass
class LeagueBundle:
    """Raw league data for one newsroom run."""
    league: Dict
    users: List[Dict]
    rosters: List[Dict]
    txns: List[Dict]
    players: Dict[str, Dict]
    skipped_rounds: int = 0


def recent_rounds(season_length: Optional[int], window: int = 6, default_length: int = 30) -> List[int]:
    """
    Pick the most recent rounds to poll, newest first.

    Args:
        season_length: League season length (falls back to default_length when missing)
        window: Number of rounds to look back (default: 6)
        default_length: Season length used when the league does not report one

    Returns:
        List of positive round numbers, e.g. [30, 29, 28, 27, 26, 25]
    """
    try:
        length = int(season_length) if season_length else default_length
    except (TypeError, ValueError):
        logger.warning(f"Unusable season_length {season_length!r}, using {default_length}")
        length = default_length

    return [length - i for i in range(window) if length - i > 0]


class SleeperClient:
    """Client for the Sleeper league API."""

    def __init__(
        self,
        base_url: str = 'https://api.sleeper.app/v1',
        sport: str = 'nba',
        user_agent: str = 'rabkl-bot',
        timeout: int = 30,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize Sleeper client.

        Args:
            base_url: Sleeper API root (default: https://api.sleeper.app/v1)
            sport: Sport key for the player dictionary (default: nba)
            user_agent: User-Agent header sent with every request
            timeout: Request timeout in seconds (default: 30)
            session: Optional requests session (a new one is created if omitted)
        """
        self.base_url = base_url.rstrip('/')
        self.sport = sport
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({'User-Agent': user_agent})

        logger.info(f"Initialized SleeperClient: {self.base_url}, sport: {self.sport}")

    def get_json(self, path: str) -> Any:
        """
        GET a Sleeper endpoint and decode its JSON body.

        Raises:
            requests.exceptions.RequestException: On transport errors or non-2xx responses
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug(f"GET {url}")

        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"GET {url} failed: {e}")
            raise

    def get_league(self, league_id: str) -> Dict:
        return self.get_json(f"league/{league_id}")

    def get_users(self, league_id: str) -> List[Dict]:
        return self.get_json(f"league/{league_id}/users")

    def get_rosters(self, league_id: str) -> List[Dict]:
        return self.get_json(f"league/{league_id}/rosters")

    def get_transactions(self, league_id: str, round_number: int) -> List[Dict]:
        return self.get_json(f"league/{league_id}/transactions/{round_number}")

    def get_players(self, sport: Optional[str] = None) -> Dict[str, Dict]:
        """Full player dictionary keyed by player id (several MB for most sports)."""
        return self.get_json(f"players/{sport or self.sport}")

    def collect_transactions(self, league_id: str, rounds: List[int]) -> CollectResult:
        """
        Fetch transactions round by round, skipping rounds that fail.

        Args:
            league_id: Sleeper league ID
            rounds: Round numbers to fetch, in order

        Returns:
            CollectResult with all transactions and the number of skipped rounds
        """
        result = CollectResult()

        for round_number in rounds:
            try:
                txns = self.get_transactions(league_id, round_number)
            except (requests.exceptions.RequestException, ValueError):
                logger.debug(f"Skipping transactions for round {round_number}")
                result.skipped += 1
                continue

            if not isinstance(txns, list):
                logger.debug(f"Round {round_number} returned {type(txns).__name__}, skipping")
                result.skipped += 1
                continue

            result.items.extend(txns)

        return result

    def fetch_bundle(self, league_id: str, window: int = 6, default_season_length: int = 30) -> LeagueBundle:
        """
        Retrieve everything needed to normalize recent league activity.

        Args:
            league_id: Sleeper league ID
            window: Number of recent rounds to poll
            default_season_length: Used when the league has no season_length

        Returns:
            LeagueBundle

        Raises:
            requests.exceptions.RequestException: If league, users, rosters or players fail
        """
        logger.info(f"Fetching league bundle for {league_id}")

        league = self.get_league(league_id) or {}
        users = self.get_users(league_id) or []
        rosters = self.get_rosters(league_id) or []

        rounds = recent_rounds(league.get('season_length'), window, default_season_length)
        collected = self.collect_transactions(league_id, rounds)
        logger.info(
            f"Collected {len(collected.items)} transactions from rounds {rounds} "
            f"({collected.skipped} skipped)"
        )

        players = self.get_players() or {}
        logger.info(f"Loaded {len(players)} players, {len(users)} users, {len(rosters)} rosters")

        return LeagueBundle(
            league=league,
            users=users,
            rosters=rosters,
            txns=collected.items,
            players=players,
            skipped_rounds=collected.skipped
        )

    def health_check(self, league_id: str) -> bool:
        """
        Check the league is reachable.

        Returns:
            True if the league endpoint answered, False otherwise
        """
        try:
            league = self.get_league(league_id)
            logger.info(f"Sleeper health check: OK ({(league or {}).get('name', league_id)})")
            return True
        except requests.exceptions.RequestException as e:
            logger.error(f"Sleeper health check failed: {e}")
            return False
