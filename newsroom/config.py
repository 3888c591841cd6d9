"""Newsroom configuration"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

# Log sinks shared by the CLI and the web app; relative to the working directory
LOG_DIR = Path("logs")
LOG_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"

DEFAULT_LEAGUE_ID = "1228186433580171264"

# Front-matter constants written into every article
FRONT_MATTER_CONFIG = {
    'hero_image': '/images/trade-hero.png',
    'brand_logo': '/brand/logo.svg',

    # Order matters - fields are rendered in this order
    'theme': {
        'background': '#FDF6E3',
        'secondary': '#FAF3DD',
        'primary': '#0B1D3A',
        'accent_red': '#B22234',
        'accent_gold': '#F2B300',
    },
}


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    """Read a whole-number setting; blank or unset gives the default."""
    raw = (env.get(key) or '').strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be a whole number, got {raw!r}")


@dataclass(frozen=True)
class NewsroomConfig:
    """Settings for one newsroom run, built once at process start."""

    # Sleeper league data
    league_id: str = DEFAULT_LEAGUE_ID
    sport: str = 'nba'
    sleeper_base_url: str = 'https://api.sleeper.app/v1'
    recent_rounds: int = 6
    default_season_length: int = 30

    # Copy generation (template strategy when no key is set)
    openai_api_key: str = ''
    openai_base_url: str = 'https://api.openai.com/v1'
    openai_model: str = 'gpt-4o-mini'

    # Publishing
    github_token: str = ''
    github_repo: str = 'johnnybassanelli/RABKL-newsroom'
    github_branch: str = 'main'
    deploy_hook_url: str = ''

    # Output
    output_dir: Path = Path('.')
    max_events: int = 5

    # HTTP
    request_timeout: int = 30
    user_agent: str = 'rabkl-bot'

    def __post_init__(self):
        if self.max_events < 0:
            raise ValueError(f"max_events must be zero or more, got {self.max_events}")

    @property
    def use_ai(self) -> bool:
        """True when copy should be delegated to the text-generation service."""
        return bool(self.openai_api_key)

    @property
    def can_publish(self) -> bool:
        return bool(self.github_token and self.deploy_hook_url)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "NewsroomConfig":
        """
        Build configuration from environment variables.

        Args:
            environ: Mapping to read from (default: os.environ)
            **overrides: Explicit values that win over the environment (None is ignored)

        Returns:
            NewsroomConfig instance
        """
        env = os.environ if environ is None else environ

        values = {
            'league_id': env.get('SLEEPER_LEAGUE_ID') or DEFAULT_LEAGUE_ID,
            'sport': env.get('SLEEPER_SPORT') or 'nba',
            'openai_api_key': env.get('OPENAI_API_KEY', ''),
            'openai_model': env.get('OPENAI_MODEL') or 'gpt-4o-mini',
            'github_token': env.get('GITHUB_TOKEN', ''),
            'github_repo': env.get('GITHUB_REPO') or 'johnnybassanelli/RABKL-newsroom',
            'github_branch': env.get('GITHUB_BRANCH') or 'main',
            'deploy_hook_url': env.get('VERCEL_DEPLOY_HOOK', ''),
            'output_dir': Path(env.get('NEWSROOM_OUTPUT_DIR') or '.'),
            'max_events': _env_int(env, 'NEWSROOM_MAX_EVENTS', 5),
        }

        values.update({key: value for key, value in overrides.items() if value is not None})
        if not isinstance(values['output_dir'], Path):
            values['output_dir'] = Path(values['output_dir'])

        return cls(**values)
