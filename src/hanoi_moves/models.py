"""Data models and configuration classes."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, NamedTuple

SUPPORTED_COMPRESSIONS = ("snappy", "gzip", "zstd", "brotli", "lz4", "none")


class Phase(str, Enum):
    """Position of a sequencer in its move-generation state machine."""

    BASIS = "basis"
    FIRST_DELEGATION = "first_delegation"
    IN_BETWEEN = "in_between"
    SECOND_DELEGATION = "second_delegation"
    TERMINAL = "terminal"


class Move(NamedTuple):
    """A single move of the topmost disc from one pole to another."""

    source: str
    destination: str

    def __str__(self) -> str:
        return f"{self.source}->{self.destination}"

    def to_dict(self) -> Dict[str, str]:
        """Convert move to dictionary."""
        return {"source": self.source, "destination": self.destination}


@dataclass
class ExportConfig:
    """Move export configuration."""

    batch_size: int = 1000
    compression: str = "snappy"
    output_file: Path = field(default_factory=lambda: Path("moves.parquet"))
    enable_csv_verification: bool = False

    @classmethod
    def default(cls) -> "ExportConfig":
        """Create default configuration."""
        return cls()

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.output_file = Path(self.output_file)
        if self.batch_size <= 0:
            raise ValueError("batch_size must be positive")
        if self.compression not in SUPPORTED_COMPRESSIONS:
            raise ValueError(
                f"compression must be one of {', '.join(SUPPORTED_COMPRESSIONS)}"
            )


@dataclass
class WriteStatistics:
    """Statistics for write operations."""

    total_rows: int = 0
    total_batches: int = 0
    file_size_bytes: int = 0
    elapsed_time: float = 0.0
