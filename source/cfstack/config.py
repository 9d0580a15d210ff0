# ABOUTME: Configuration management for cfstack
# ABOUTME: Loads and saves default AWS profile, region, bucket and polling settings

"""Configuration management for cfstack."""

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_PROFILE = "default"
DEFAULT_REGION = "us-west-2"
DEFAULT_POLL_INTERVAL = 5


@dataclass
class Config:
    """Defaults applied when a command is run without --profile or --region."""

    profile: str = DEFAULT_PROFILE
    region: str = DEFAULT_REGION
    bucket: str | None = None  # Overrides the derived cf-templates-<account>-<region> name
    poll_interval: int = DEFAULT_POLL_INTERVAL

    CONFIG_DIR = Path.home() / ".cfstack"
    CONFIG_FILE = CONFIG_DIR / "config.json"

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create configuration from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        config = cls(**{key: value for key, value in data.items() if key in known})
        config.poll_interval = _positive_interval(config.poll_interval)
        return config

    @classmethod
    def load(cls, path: Path | None = None) -> "Config":
        """Load configuration from file."""
        path = path or cls.CONFIG_FILE

        if path.exists():
            try:
                with open(path) as f:
                    return cls.from_dict(json.load(f))
            except (OSError, ValueError, TypeError) as e:
                # If config is corrupted, start fresh
                logger.warning("Could not load config %s: %s", path, e)

        return cls()

    def save(self, path: Path | None = None) -> None:
        """Save configuration to file."""
        path = path or self.CONFIG_FILE
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)


def _positive_interval(value: Any) -> int:
    """Whole seconds of at least 1, or the default for anything else."""
    try:
        interval = int(value)
    except (TypeError, ValueError):
        interval = 0
    if interval < 1:
        logger.warning("Ignoring poll_interval %r, using %ss", value, DEFAULT_POLL_INTERVAL)
        return DEFAULT_POLL_INTERVAL
    return interval
