"""
Article Writer Module

Renders an event and its copy into a Markdown article with front-matter and
writes it under the run's dated content directory:

    content/{YYYY}/{MM}/{DD}/{slug}-{event_id}.md

The directory comes from the run date, not the event date, so every article
written in one run lands in the same directory. Existing files at the same
path are overwritten.
"""

import json
from datetime import date
from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger
from slugify import slugify

from newsroom.config import FRONT_MATTER_CONFIG
from newsroom.newspaper.copy_generator import ArticleCopy
from newsroom.newspaper.events import DomainEvent

MAX_SLUG_LENGTH = 90
MAX_STEM_LENGTH = 100
DEFAULT_SLUG = 'update'


def make_slug(title: Optional[str]) -> str:
    """
    Generate URL-friendly slug from a headline.

    Args:
        title: Article headline

    Returns:
        Lowercase ASCII slug, at most 90 characters, "update" when nothing is left
    """
    # non-ASCII letters are separators, not transliterated; so are commas
    # between digits and apostrophes
    slug = slugify(
        title or '',
        allow_unicode=True,
        regex_pattern=r'[^a-z0-9]+',
        entities=False,
        decimal=False,
        hexadecimal=False,
        replacements=[(',', '-'), ("'", '-')]
    )
    return slug[:MAX_SLUG_LENGTH] or DEFAULT_SLUG


def make_file_stem(title: Optional[str], event_id: str) -> str:
    return f"{make_slug(title)}-{event_id}"[:MAX_STEM_LENGTH]


def content_dir_for(run_date: date, root: Path = Path('.')) -> Path:
    """Dated content directory, e.g. content/2025/01/07."""
    return Path(root) / 'content' / f"{run_date.year:04d}" / f"{run_date.month:02d}" / f"{run_date.day:02d}"


def _quote(value: str) -> str:
    """Double-quoted scalar (valid JSON and YAML)."""
    return json.dumps(value, ensure_ascii=False)


def render_front_matter(event: DomainEvent, copy: ArticleCopy, front_matter: Optional[Dict] = None) -> str:
    """
    Build the front-matter block.

    Args:
        event: Source event (provides the date)
        copy: Article copy (provides title and tags)
        front_matter: Constant fields (hero image, brand logo, theme); defaults to FRONT_MATTER_CONFIG

    Returns:
        Front-matter text, delimited by --- lines and followed by a blank line
    """
    front_matter = front_matter or FRONT_MATTER_CONFIG
    tags: List[str] = list(copy.tags or [])

    lines = [
        '---',
        f"title: {_quote(copy.title)}",
        f"date: {_quote(event.timestamp)}",
        f"tags: {json.dumps(tags, ensure_ascii=False, separators=(',', ':'))}",
        f"hero_image: {_quote(front_matter['hero_image'])}",
        f"brand_logo: {_quote(front_matter['brand_logo'])}",
        'theme:',
    ]
    for key, colour in front_matter['theme'].items():
        lines.append(f"  {key}: {_quote(colour)}")
    lines.extend(['---', ''])

    return '\n'.join(lines)


def render_article(event: DomainEvent, copy: ArticleCopy, front_matter: Optional[Dict] = None) -> str:
    return f"{render_front_matter(event, copy, front_matter)}\n{copy.body}\n"


class ArticleWriter:
    """Writes articles for one run into the run date's content directory."""

    def __init__(
        self,
        output_root: Path = Path('.'),
        run_date: Optional[date] = None,
        front_matter: Optional[Dict] = None
    ):
        """
        Args:
            output_root: Directory that holds content/ (default: current directory)
            run_date: Date used for the directory (default: today, fixed for the writer's lifetime)
            front_matter: Constant front-matter fields (default: FRONT_MATTER_CONFIG)
        """
        self.output_root = Path(output_root)
        self.run_date = run_date or date.today()
        self.front_matter = front_matter or FRONT_MATTER_CONFIG

    @property
    def content_dir(self) -> Path:
        return content_dir_for(self.run_date, self.output_root)

    def path_for(self, event: DomainEvent, copy: ArticleCopy) -> Path:
        return self.content_dir / f"{make_file_stem(copy.title, event.event_id)}.md"

    def write(self, event: DomainEvent, copy: ArticleCopy) -> Path:
        """
        Write one article, overwriting any file already at its path.

        Returns:
            Path of the written file

        Raises:
            OSError: If the directory or file cannot be written
        """
        self.content_dir.mkdir(parents=True, exist_ok=True)

        path = self.path_for(event, copy)
        path.write_text(render_article(event, copy, self.front_matter), encoding='utf-8')

        logger.info(f"wrote {path}")
        return path
