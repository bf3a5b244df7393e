"""
Runtime configuration for curriculex.

Values come from the environment, optionally seeded from a .env file in the
project root (python-dotenv).
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


PROJECT_ROOT = Path(__file__).parent.parent

DEFAULT_CONTENT_PATH = PROJECT_ROOT / "data" / "curriculum.yaml"
DEFAULT_CONNECTOR_IDS = frozenset({"va", "ham", "vali"})
DEFAULT_LOG_LEVEL = "INFO"

ENV_CONTENT_PATH = "CURRICULEX_CONTENT_PATH"
ENV_CONNECTOR_IDS = "CURRICULEX_CONNECTOR_IDS"
ENV_LOG_LEVEL = "CURRICULEX_LOG_LEVEL"


def parse_connector_ids(raw: Optional[str]) -> frozenset[str]:
    """Parse a comma separated connector list, falling back to the defaults."""
    if raw is None or not raw.strip():
        return DEFAULT_CONNECTOR_IDS
    return frozenset(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class IndexSettings:
    """Settings for loading content and building the index."""
    content_path: Path = DEFAULT_CONTENT_PATH
    connector_ids: frozenset[str] = DEFAULT_CONNECTOR_IDS
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "IndexSettings":
        """
        Build settings from the process environment.

        Args:
            env_file: Optional .env file to load first (default: PROJECT_ROOT/.env).
                Variables already set in the environment take precedence.

        Returns:
            IndexSettings with defaults for anything not configured
        """
        load_dotenv(env_file or PROJECT_ROOT / ".env")

        content_path = os.environ.get(ENV_CONTENT_PATH)
        return cls(
            content_path=Path(content_path) if content_path else DEFAULT_CONTENT_PATH,
            connector_ids=parse_connector_ids(os.environ.get(ENV_CONNECTOR_IDS)),
            log_level=os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper(),
        )
