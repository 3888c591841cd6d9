"""
Newsroom Pipeline

End-to-end orchestration of one newsroom run:
1. Fetch the league bundle from Sleeper
2. Normalize transactions into events
3. Take the first few events
4. Generate copy and write an article for each, one at a time

Runs are stateless: nothing records what was already published, every run
works from the same recent window of rounds. A failure while generating or
writing an event aborts the rest of the batch.
"""

from typing import Dict, List, Optional

from loguru import logger

from newsroom.config import NewsroomConfig
from newsroom.newspaper.article_writer import ArticleWriter
from newsroom.newspaper.copy_generator import CopyGenerator, create_copy_generator
from newsroom.newspaper.normalizer import normalize_events
from newsroom.sleeper.client import SleeperClient


def create_sleeper_client(config: NewsroomConfig) -> SleeperClient:
    return SleeperClient(
        base_url=config.sleeper_base_url,
        sport=config.sport,
        user_agent=config.user_agent,
        timeout=config.request_timeout
    )


def run_newsroom(
    config: NewsroomConfig,
    client: Optional[SleeperClient] = None,
    generator: Optional[CopyGenerator] = None,
    writer: Optional[ArticleWriter] = None
) -> Dict:
    """
    Run the newsroom once.

    Args:
        config: Newsroom configuration
        client: Optional Sleeper client (built from config if omitted)
        generator: Optional copy strategy (picked from config if omitted)
        writer: Optional article writer (writes under config.output_dir if omitted)

    Returns:
        Dict with: {
            'transactions': int,
            'events': int,
            'skipped_rounds': int,
            'written': List[str]
        }

    Raises:
        requests.exceptions.RequestException: If a required fetch or the copy service fails
        OSError: If an article cannot be written
    """
    logger.info("RABKL newsroom starting…")

    client = client or create_sleeper_client(config)
    generator = generator or create_copy_generator(config)
    writer = writer or ArticleWriter(output_root=config.output_dir)

    bundle = client.fetch_bundle(
        config.league_id,
        window=config.recent_rounds,
        default_season_length=config.default_season_length
    )
    events = normalize_events(bundle)

    results = {
        'transactions': len(bundle.txns),
        'events': len(events),
        'skipped_rounds': bundle.skipped_rounds,
        'written': [],
    }

    if not events:
        logger.info("No new events found.")
        return results

    batch = events[:config.max_events]
    logger.info(f"Writing {len(batch)} of {len(events)} events")

    written: List[str] = results['written']
    for i, event in enumerate(batch, 1):
        logger.info(f"[{i}/{len(batch)}] {event.type.value} {event.event_id}")
        copy = generator.generate(event)
        path = writer.write(event, copy)
        written.append(str(path))

    logger.info(f"Done. {len(written)} files written")
    return results
