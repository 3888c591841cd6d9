"""
Copy Generator Module

Produces headline, body and tags for a single event. Two interchangeable
strategies share the same interface:

- TemplateCopyGenerator: deterministic string templates, never fails
- AICopyGenerator: delegates to the text-generation service

The strategy is picked once at startup from configuration
(create_copy_generator), never per event.

Expected completion format from the model:
    First non-empty line is the headline

    Remaining lines are the body
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from loguru import logger

from newsroom.config import NewsroomConfig
from newsroom.newspaper.events import DomainEvent, EventType, TradeEvent
from newsroom.newspaper.openai_client import OpenAIClient
from newsroom.newspaper.prompt_builder import build_messages

FALLBACK_BODY = 'Office review.'
MAX_HEADLINERS = 3

HEADLINE_EDGES = re.compile(r'^["\'#\s]+|["\'#\s]+$')
HEADLINE_MARKER = re.compile(r'^headline\s*:\s*', re.IGNORECASE)


@dataclass
class ArticleCopy:
    """User-facing copy for one event."""
    title: str
    body: str
    tags: List[str] = field(default_factory=list)


def actor_teams(event: DomainEvent) -> List[str]:
    return [actor.team for actor in event.actors if actor and actor.team]


def build_tags(event: DomainEvent) -> List[str]:
    """Event type plus every actor's team name."""
    return [event.type.value.lower(), *actor_teams(event)]


def parse_completion(raw_text: str) -> Tuple[str, str]:
    """
    Split model output into headline and body.

    Args:
        raw_text: Raw completion text

    Returns:
        Tuple of (headline, body); body falls back to a placeholder when empty

    Raises:
        ValueError: If the completion contains no text at all
    """
    lines = [line for line in (raw_text or '').split('\n') if line.strip()]
    if not lines:
        raise ValueError("Empty completion, no headline to parse")

    headline = HEADLINE_EDGES.sub('', lines[0])
    headline = HEADLINE_EDGES.sub('', HEADLINE_MARKER.sub('', headline))
    body = '\n'.join(lines[1:]).strip() or FALLBACK_BODY

    return headline, body


class CopyGenerator(ABC):
    """Base class for copy strategies."""

    @abstractmethod
    def generate(self, event: DomainEvent) -> ArticleCopy:
        """Return copy for one event."""
        pass


class TemplateCopyGenerator(CopyGenerator):
    """Deterministic copy from string templates."""

    def generate(self, event: DomainEvent) -> ArticleCopy:
        if event.type == EventType.TRADE:
            return self._trade_copy(event)
        return self._signing_copy(event)

    @staticmethod
    def _trade_copy(event: TradeEvent) -> ArticleCopy:
        teams = actor_teams(event)
        team_a = teams[0] if len(teams) > 0 else 'Team A'
        team_b = teams[1] if len(teams) > 1 else 'Team B'
        incoming = ', '.join(event.incoming[:MAX_HEADLINERS])

        return ArticleCopy(
            title=f"{team_a} and {team_b} agree to trade",
            body=(
                f"League sources confirm a trade between {team_a} and {team_b}. "
                f"Headliners include {incoming or 'multiple assets'}. "
                f"Early grade pending Office review."
            ),
            tags=['trade', team_a, team_b]
        )

    @staticmethod
    def _signing_copy(event) -> ArticleCopy:
        teams = actor_teams(event)
        team = teams[0] if teams else 'Team'
        adds = ', '.join(event.adds)
        drops = ', '.join(event.drops)
        dropped = f"; dropped {drops}" if drops else ''

        return ArticleCopy(
            title=f"{team} roster move",
            body=f"According to league circles, {team} completed a transaction: added {adds or '—'}{dropped}.",
            tags=['signing', team]
        )


class AICopyGenerator(CopyGenerator):
    """Copy written by the text-generation service; tags are still built locally."""

    def __init__(self, client: OpenAIClient, model: Optional[str] = None):
        self.client = client
        self.model = model

    def generate(self, event: DomainEvent) -> ArticleCopy:
        """
        Generate copy for one event.

        Raises:
            requests.exceptions.RequestException: On a non-success response from the service
            ValueError: If the completion is empty
        """
        logger.info(f"Requesting AI copy for {event.type.value} {event.event_id}")
        text = self.client.chat_completion(build_messages(event), model=self.model)
        title, body = parse_completion(text)

        logger.debug(f"AI headline: {title}")
        return ArticleCopy(title=title, body=body, tags=build_tags(event))


def create_copy_generator(config: NewsroomConfig, client: Optional[OpenAIClient] = None) -> CopyGenerator:
    """
    Factory picking the copy strategy from configuration.

    Args:
        config: Newsroom configuration
        client: Optional pre-built OpenAI client

    Returns:
        AICopyGenerator when an OpenAI key is configured, TemplateCopyGenerator otherwise
    """
    if not config.use_ai:
        logger.info("No OpenAI key configured, using template copy")
        return TemplateCopyGenerator()

    client = client or OpenAIClient(
        api_key=config.openai_api_key,
        base_url=config.openai_base_url,
        default_model=config.openai_model,
        timeout=config.request_timeout
    )
    logger.info(f"Using AI copy with model {config.openai_model}")
    return AICopyGenerator(client, model=config.openai_model)
