"""Configuration for advent77."""

import os
from dataclasses import dataclass
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path


def _default_data_file() -> Traversable:
    """Locate the bundled advent.dat via importlib.resources."""
    return resources.files("advent77") / "data" / "advent.dat"


@dataclass
class Config:
    """Application configuration."""

    data_file: Path | None = None
    seed: int | None = None
    database_url: str | None = None
    log_level: str = "WARNING"
    log_file: Path | None = None
    json_logs: bool = False

    @property
    def data_path(self) -> Path | Traversable:
        return self.data_file or _default_data_file()

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        data_file = os.getenv("ADVENTURE_DATA_FILE")
        seed = os.getenv("ADVENTURE_SEED")
        log_file = os.getenv("ADVENTURE_LOG_FILE")

        return cls(
            data_file=Path(data_file) if data_file else None,
            seed=int(seed) if seed else None,
            database_url=os.getenv("ADVENTURE_DATABASE_URL") or None,
            log_level=os.getenv("ADVENTURE_LOG_LEVEL", cls.log_level),
            log_file=Path(log_file) if log_file else None,
            json_logs=os.getenv("ADVENTURE_JSON_LOGS", "").lower()
            in ("true", "1", "yes"),
        )
