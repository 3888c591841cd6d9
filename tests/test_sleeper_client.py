"""Tests for the Sleeper client and bundle assembly."""
from unittest.mock import MagicMock

import pytest
import requests

from newsroom.sleeper.client import SleeperClient, recent_rounds
from tests.conftest import make_response

BASE = 'https://api.sleeper.app/v1'


def routed_session(routes):
    """Session whose get() answers from a {url: response-or-exception} map."""
    session = MagicMock()
    session.headers = {}

    def get(url, timeout=None):
        outcome = routes[url]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    session.get.side_effect = get
    return session


def league_routes(league=None, rounds=None):
    routes = {
        f"{BASE}/league/L1": make_response(league if league is not None else {'season_length': 8}),
        f"{BASE}/league/L1/users": make_response([{'user_id': 'u1'}]),
        f"{BASE}/league/L1/rosters": make_response([{'roster_id': 1, 'owner_id': 'u1'}]),
        f"{BASE}/players/nba": make_response({'100': {'full_name': 'Player X'}}),
    }
    for number, outcome in (rounds or {}).items():
        routes[f"{BASE}/league/L1/transactions/{number}"] = outcome
    return routes


@pytest.mark.parametrize('season_length, expected', [
    (30, [30, 29, 28, 27, 26, 25]),
    (3, [3, 2, 1]),
    (None, [30, 29, 28, 27, 26, 25]),
    (0, [30, 29, 28, 27, 26, 25]),
    ('18', [18, 17, 16, 15, 14, 13]),
    ('weird', [30, 29, 28, 27, 26, 25]),
])
def test_recent_rounds(season_length, expected):
    assert recent_rounds(season_length) == expected


def test_user_agent_header_is_set():
    session = routed_session({})

    SleeperClient(session=session)

    assert session.headers['User-Agent'] == 'rabkl-bot'


def test_get_json_raises_on_http_error():
    session = routed_session({f"{BASE}/league/L1": make_response({}, status=404)})

    with pytest.raises(requests.exceptions.HTTPError):
        SleeperClient(session=session).get_league('L1')


def test_collect_transactions_skips_failed_rounds():
    session = routed_session({
        f"{BASE}/league/L1/transactions/3": make_response([{'transaction_id': 'a'}]),
        f"{BASE}/league/L1/transactions/2": make_response({}, status=500),
        f"{BASE}/league/L1/transactions/1": requests.exceptions.ConnectionError('down'),
        f"{BASE}/league/L1/transactions/0": make_response(None),
    })

    result = SleeperClient(session=session).collect_transactions('L1', [3, 2, 1, 0])

    assert result.items == [{'transaction_id': 'a'}]
    assert result.skipped == 3


def test_fetch_bundle_collects_recent_rounds_in_order():
    rounds = {
        8: make_response([{'transaction_id': 'r8'}]),
        7: make_response([]),
        6: make_response({}, status=503),
        5: make_response([{'transaction_id': 'r5a'}, {'transaction_id': 'r5b'}]),
        4: make_response([]),
        3: make_response([]),
    }
    session = routed_session(league_routes(rounds=rounds))

    bundle = SleeperClient(session=session).fetch_bundle('L1')

    assert [txn['transaction_id'] for txn in bundle.txns] == ['r8', 'r5a', 'r5b']
    assert bundle.skipped_rounds == 1
    assert bundle.players == {'100': {'full_name': 'Player X'}}
    assert bundle.users == [{'user_id': 'u1'}]
    assert bundle.rosters == [{'roster_id': 1, 'owner_id': 'u1'}]


@pytest.mark.parametrize('failing', ['league/L1/users', 'league/L1/rosters', 'players/nba'])
def test_fetch_bundle_propagates_required_failures(failing):
    routes = league_routes(league={'season_length': 1}, rounds={1: make_response([])})
    routes[f"{BASE}/{failing}"] = make_response({}, status=500)

    with pytest.raises(requests.exceptions.HTTPError):
        SleeperClient(session=routed_session(routes)).fetch_bundle('L1')


def test_health_check():
    ok = SleeperClient(session=routed_session({f"{BASE}/league/L1": make_response({'name': 'RABKL'})}))
    down = SleeperClient(session=routed_session({f"{BASE}/league/L1": requests.exceptions.Timeout()}))

    assert ok.health_check('L1') is True
    assert down.health_check('L1') is False
