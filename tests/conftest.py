"""Shared test fixtures."""
from unittest.mock import MagicMock

import pytest
import requests

from newsroom.sleeper.client import LeagueBundle


def make_response(payload=None, status=200):
    """Mock requests.Response returning payload as JSON."""
    response = MagicMock()
    response.status_code = status
    response.json.return_value = payload
    response.content = b'{}' if payload is not None else b''
    if status >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(f"{status} Error")
    else:
        response.raise_for_status.return_value = None
    return response


@pytest.fixture
def users():
    return [
        {'user_id': 'u1', 'username': 'lakerfan', 'display_name': 'Laker Fan',
         'metadata': {'team_name': 'Showtime'}},
        {'user_id': 'u2', 'username': 'celtics4life', 'display_name': 'Cs Guy', 'metadata': {}},
        {'user_id': 'u3', 'display_name': None},
    ]


@pytest.fixture
def rosters():
    return [
        {'roster_id': 1, 'owner_id': 'u1'},
        {'roster_id': 2, 'owner_id': 'u2'},
        {'roster_id': 3, 'owner_id': 'u3'},
        {'roster_id': 4, 'owner_id': None},
    ]


@pytest.fixture
def players():
    return {
        '100': {'full_name': 'Player X', 'team': 'LAL', 'fantasy_positions': ['SF', 'PF'], 'position': 'F'},
        '200': {'full_name': 'Player Y', 'team': 'BOS', 'position': 'G'},
        '300': {'first_name': 'Nikola', 'last_name': 'Jokic', 'team': None, 'position': 'C'},
        '400': {'full_name': 'Role Player', 'team': 'DEN'},
    }


@pytest.fixture
def trade_txn():
    return {
        'transaction_id': 'tx1',
        'type': 'trade',
        'created': 1736250000000,
        'roster_ids': [1, 2],
        'adds': {'100': 1},
        'drops': {'200': 2},
    }


@pytest.fixture
def make_bundle(users, rosters, players):
    def _make(txns, skipped_rounds=0):
        return LeagueBundle(
            league={'league_id': 'L1', 'season_length': 30},
            users=users,
            rosters=rosters,
            txns=txns,
            players=players,
            skipped_rounds=skipped_rounds
        )
    return _make
