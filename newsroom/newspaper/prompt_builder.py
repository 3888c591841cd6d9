"""
Prompt Builder Module

Constructs the chat messages sent to the text-generation service for
delegated copy. The system message fixes tone and constraints; the user
message carries the serialized event so the model only reports facts it
was given.
"""

import json
from typing import Dict, List

from newsroom.newspaper.events import DomainEvent

SYSTEM_PROMPT = (
    "You are RABKL newsroom copy editor. Woj/Shams tone with slight parody. "
    "Headlines <= 90 chars. Facts only based on inputs."
)

MAX_HEADLINE_LENGTH = 90


def serialize_event(event: DomainEvent) -> str:
    """Compact JSON payload for one event."""
    return json.dumps(event.to_dict(), ensure_ascii=False, separators=(',', ':'))


def build_event_prompt(event: DomainEvent) -> str:
    """
    Build the user prompt for one event.

    Args:
        event: TradeEvent or SigningEvent

    Returns:
        Prompt string asking for a headline line followed by the body
    """
    return (
        f"Create headline (<={MAX_HEADLINE_LENGTH} chars) and 1-2 paragraph body "
        f"for this event: {serialize_event(event)}"
    )


def build_messages(event: DomainEvent, system_prompt: str = SYSTEM_PROMPT) -> List[Dict[str, str]]:
    """Two-message conversation (system + user) for the chat completions API."""
    return [
        {'role': 'system', 'content': system_prompt},
        {'role': 'user', 'content': build_event_prompt(event)},
    ]
