"""
Event Model

Typed view over raw Sleeper transactions and the canonical events the
newsroom writes about.

Raw transaction payloads are loosely typed: adds/drops may be missing or
null, roster ids may arrive as ints or strings and `created` may be absent.
RawTransaction exposes total accessors that always return typed defaults.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from loguru import logger

TRADE_TYPE = 'trade'
SIGNING_TYPES = ('free_agent', 'waiver')


class EventType(str, Enum):
    TRADE = 'TRADE'
    SIGNING = 'SIGNING'


@dataclass(frozen=True)
class Identity:
    """Display identity of a roster's owner."""
    team: str
    gm: str
    handle: str = ''

    def to_dict(self) -> Dict[str, str]:
        return {'team': self.team, 'gm': self.gm, 'username': self.handle}


@dataclass(frozen=True)
class PlayerRef:
    name: str
    team: str = ''
    position: str = ''


@dataclass(frozen=True)
class AssetMove:
    """A single player entering (incoming) or leaving (outgoing) a roster in a trade."""
    roster_id: Optional[int]
    incoming: Optional[str] = None
    outgoing: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'roster_id': self.roster_id}
        if self.incoming is not None:
            data['in'] = self.incoming
        if self.outgoing is not None:
            data['out'] = self.outgoing
        return data


@dataclass
class TradeEvent:
    event_id: str
    timestamp: str
    actors: List[Identity] = field(default_factory=list)
    assets: List[AssetMove] = field(default_factory=list)
    type: EventType = field(default=EventType.TRADE, init=False)

    @property
    def incoming(self) -> List[str]:
        """Names of players received, in asset order."""
        return [asset.incoming for asset in self.assets if asset.incoming]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'event_id': self.event_id,
            'timestamp': self.timestamp,
            'type': self.type.value,
            'actors': [actor.to_dict() for actor in self.actors],
            'assets': [asset.to_dict() for asset in self.assets],
        }


@dataclass
class SigningEvent:
    event_id: str
    timestamp: str
    actors: List[Identity] = field(default_factory=list)
    adds: List[str] = field(default_factory=list)
    drops: List[str] = field(default_factory=list)
    type: EventType = field(default=EventType.SIGNING, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'event_id': self.event_id,
            'timestamp': self.timestamp,
            'type': self.type.value,
            'actors': [actor.to_dict() for actor in self.actors],
            'adds': list(self.adds),
            'drops': list(self.drops),
        }


DomainEvent = Union[TradeEvent, SigningEvent]


def to_roster_id(value: Any) -> Optional[int]:
    """Coerce a roster id to int, None when it is not numeric."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a Z suffix."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec='milliseconds').replace('+00:00', 'Z')


@dataclass
class RawTransaction:
    """Total accessor view over one raw Sleeper transaction record."""
    record: Dict[str, Any]

    @property
    def type(self) -> str:
        value = self.record.get('type')
        return value if isinstance(value, str) else ''

    @property
    def transaction_id(self) -> str:
        value = self.record.get('transaction_id')
        return str(value) if value not in (None, '') else 'unknown'

    @property
    def created(self) -> Optional[int]:
        """Creation time in epoch milliseconds, None when absent or zero."""
        value = self.record.get('created')
        if isinstance(value, bool):
            return None
        try:
            millis = int(value)
        except (TypeError, ValueError):
            return None
        return millis or None

    @property
    def roster_ids(self) -> List[Any]:
        value = self.record.get('roster_ids')
        return list(value) if isinstance(value, (list, tuple)) else []

    @property
    def adds(self) -> Dict[str, Any]:
        value = self.record.get('adds')
        return dict(value) if isinstance(value, dict) else {}

    @property
    def drops(self) -> Dict[str, Any]:
        value = self.record.get('drops')
        return dict(value) if isinstance(value, dict) else {}

    def timestamp(self, now: Optional[datetime] = None) -> str:
        """
        Event timestamp as ISO-8601.

        Uses the record's creation time; falls back to `now` (or the wall
        clock) when the record has none, so reruns on the same data may differ.
        """
        if self.created is not None:
            try:
                return format_timestamp(datetime.fromtimestamp(self.created / 1000, tz=timezone.utc))
            except (OverflowError, OSError, ValueError):
                logger.warning(f"Transaction {self.transaction_id} has out-of-range created={self.created}")
        return format_timestamp(now or datetime.now(timezone.utc))
