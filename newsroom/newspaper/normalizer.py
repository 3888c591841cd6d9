"""
Event Normalizer Module

Converts the raw, loosely-typed Sleeper transaction stream into canonical
domain events:
- trade -> TradeEvent with one asset move per add and per drop (never paired)
- free_agent / waiver -> SigningEvent, only when something was added or dropped
- anything else is ignored

Output order follows input order.
"""

from datetime import datetime
from typing import Callable, Dict, List, Optional

from loguru import logger

from newsroom.newspaper.events import (
    SIGNING_TYPES,
    TRADE_TYPE,
    AssetMove,
    DomainEvent,
    RawTransaction,
    SigningEvent,
    TradeEvent,
    to_roster_id,
)
from newsroom.newspaper.identity import OwnerDirectory, resolve_player
from newsroom.sleeper.client import LeagueBundle


def normalize_trade(
    txn: RawTransaction,
    directory: OwnerDirectory,
    players: Dict[str, Dict],
    now: Optional[datetime] = None
) -> TradeEvent:
    """Build a TradeEvent; rosters missing from the league are left out of actors."""
    roster_ids = list(dict.fromkeys(str(rid) for rid in txn.roster_ids))
    actors = [identity for identity in (directory.lookup(rid) for rid in roster_ids) if identity]

    assets = []
    for player_id, roster_id in txn.adds.items():
        assets.append(AssetMove(roster_id=to_roster_id(roster_id), incoming=resolve_player(players, player_id).name))
    for player_id, roster_id in txn.drops.items():
        assets.append(AssetMove(roster_id=to_roster_id(roster_id), outgoing=resolve_player(players, player_id).name))

    return TradeEvent(
        event_id=txn.transaction_id,
        timestamp=txn.timestamp(now),
        actors=actors,
        assets=assets
    )


def normalize_signing(
    txn: RawTransaction,
    directory: OwnerDirectory,
    players: Dict[str, Dict],
    now: Optional[datetime] = None
) -> Optional[SigningEvent]:
    """Build a SigningEvent for the first roster, None when nothing moved."""
    roster_ids = txn.roster_ids
    actors = [directory.resolve_owner(roster_ids[0])] if roster_ids else []

    adds = [resolve_player(players, player_id).name for player_id in txn.adds]
    drops = [resolve_player(players, player_id).name for player_id in txn.drops]

    if not adds and not drops:
        return None

    return SigningEvent(
        event_id=txn.transaction_id,
        timestamp=txn.timestamp(now),
        actors=actors,
        adds=adds,
        drops=drops
    )


def normalize_events(
    bundle: LeagueBundle,
    now: Optional[Callable[[], datetime]] = None
) -> List[DomainEvent]:
    """
    Normalize a league bundle's transactions into domain events.

    Args:
        bundle: Raw league bundle from SleeperClient.fetch_bundle()
        now: Optional clock used for transactions without a creation time

    Returns:
        List of TradeEvent / SigningEvent in transaction order
    """
    directory = OwnerDirectory(bundle.users, bundle.rosters)
    players = bundle.players or {}
    events: List[DomainEvent] = []
    ignored = 0

    for record in bundle.txns or []:
        if not isinstance(record, dict):
            ignored += 1
            continue

        txn = RawTransaction(record)
        moment = now() if now else None

        if txn.type == TRADE_TYPE:
            events.append(normalize_trade(txn, directory, players, moment))
        elif txn.type in SIGNING_TYPES:
            event = normalize_signing(txn, directory, players, moment)
            if event is not None:
                events.append(event)
            else:
                ignored += 1
        else:
            ignored += 1

    logger.info(f"Normalized {len(events)} events from {len(bundle.txns or [])} transactions ({ignored} ignored)")
    return events
