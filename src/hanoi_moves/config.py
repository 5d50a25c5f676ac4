"""Configuration management for the application."""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .models import ExportConfig
from .sequencer import (
    DEFAULT_BUFFER,
    DEFAULT_DESTINATION,
    DEFAULT_HEIGHT,
    DEFAULT_SOURCE,
    MoveSequencer,
)

# Load environment variables from .env file
load_dotenv()


def _int_from_env(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _bool_from_env(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() in ("true", "1", "yes")


@dataclass
class SequencerConfig:
    """Tower height and pole labels."""

    height: int = DEFAULT_HEIGHT
    source: str = DEFAULT_SOURCE
    destination: str = DEFAULT_DESTINATION
    buffer: str = DEFAULT_BUFFER

    @classmethod
    def from_env(cls) -> "SequencerConfig":
        """Load sequencer configuration from environment variables."""
        return cls(
            height=_int_from_env("HANOI_HEIGHT", DEFAULT_HEIGHT),
            source=os.getenv("HANOI_SOURCE", DEFAULT_SOURCE),
            destination=os.getenv("HANOI_DESTINATION", DEFAULT_DESTINATION),
            buffer=os.getenv("HANOI_BUFFER", DEFAULT_BUFFER),
        )

    def build(self) -> MoveSequencer:
        """Create a fresh sequencer for this tower."""
        return MoveSequencer(self.height, self.source, self.destination, self.buffer)


def get_sequencer_config() -> SequencerConfig:
    """Get sequencer configuration."""
    return SequencerConfig.from_env()


def get_export_config() -> ExportConfig:
    """Load export configuration from environment variables."""
    return ExportConfig(
        batch_size=_int_from_env("HANOI_BATCH_SIZE", 1000),
        compression=os.getenv("HANOI_COMPRESSION", "snappy"),
        output_file=Path(os.getenv("HANOI_OUTPUT_FILE", "moves.parquet")),
        enable_csv_verification=_bool_from_env("HANOI_CSV_VERIFICATION", False),
    )


def is_verbose() -> bool:
    """Whether debug logging was requested."""
    return _bool_from_env("HANOI_VERBOSE", False)
