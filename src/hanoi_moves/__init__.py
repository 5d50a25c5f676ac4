"""Hanoi Moves - Lazily enumerate and stream Towers of Hanoi solutions."""

__version__ = "0.1.0"

from .models import Move, Phase
from .sequencer import (
    InvalidHeightError,
    InvalidPolesError,
    MoveSequencer,
    SequenceExhaustedError,
    iter_moves,
    recursive_moves,
)

__all__ = [
    "Move",
    "Phase",
    "MoveSequencer",
    "InvalidHeightError",
    "InvalidPolesError",
    "SequenceExhaustedError",
    "iter_moves",
    "recursive_moves",
]
