"""Configuration management for msg-harvest."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
dotenv_path = Path.cwd() / ".env"
if dotenv_path.exists():
    load_dotenv(dotenv_path)
else:
    load_dotenv()


def _split_csv(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


def _log_level(value: str) -> str:
    """Normalize a level name, falling back to INFO for unknown names."""
    name = value.strip().upper()
    return name if isinstance(logging.getLevelName(name), int) else "INFO"


@dataclass(frozen=True)
class HarvestConfig:
    """Tunable heuristics and export limits."""

    signature_window: int  # trailing body characters searched for a phone number
    max_cell_chars: int  # body cells longer than this are truncated
    truncation_marker: str
    phone_prefixes: tuple[str, ...]  # loose fallback phone prefixes
    collision_retry_cap: int  # bundle name attempts before a random token is used
    log_level: str

    @classmethod
    def from_env(cls, prefix: str = "MSG_HARVEST") -> "HarvestConfig":
        """Load configuration from environment variables.

        Args:
            prefix: Environment variable prefix (e.g., "MSG_HARVEST")

        Returns:
            HarvestConfig instance
        """
        return cls(
            signature_window=int(os.getenv(f"{prefix}_SIGNATURE_WINDOW", "2000")),
            max_cell_chars=int(os.getenv(f"{prefix}_MAX_CELL_CHARS", "32000")),
            truncation_marker=os.getenv(f"{prefix}_TRUNCATION_MARKER", "...[TRUNCATED]"),
            phone_prefixes=_split_csv(os.getenv(f"{prefix}_PHONE_PREFIXES", "+61,04,02,03")),
            collision_retry_cap=int(os.getenv(f"{prefix}_COLLISION_RETRY_CAP", "10000")),
            log_level=_log_level(os.getenv(f"{prefix}_LOG_LEVEL", "INFO")),
        )


DEFAULT_CONFIG = HarvestConfig.from_env("MSG_HARVEST")
