"""Processing classes for turning a move stream into DataFrames."""

import logging
from typing import Iterable, Iterator, List, Optional

import pandas as pd

from .models import Move
from .protocols import LoggerProtocol

MOVE_COLUMNS = ["step", "source", "destination", "batch_number"]


class MoveBatcher:
    """
    Batches moves into groups for efficient processing.

    Single Responsibility: Group moves into batches.
    """

    def __init__(self, batch_size: int = 1000):
        """
        Initialize batcher.

        Args:
            batch_size: Number of moves per batch
        """
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")
        self.batch_size = batch_size

    def batch(self, moves: Iterable[Move]) -> Iterator[List[Move]]:
        """
        Batch moves into groups.

        Args:
            moves: Iterable of moves, typically a MoveSequencer

        Yields:
            Lists of moves (batches)
        """
        batch: List[Move] = []
        for move in moves:
            batch.append(move)
            if len(batch) >= self.batch_size:
                yield batch
                batch = []

        # Yield remaining moves
        if batch:
            yield batch


class MoveFrameTransformer:
    """
    Transforms move batches into pandas DataFrames.

    Single Responsibility: Convert move batches to DataFrames with stable types.
    """

    def __init__(self, logger: Optional[LoggerProtocol] = None):
        self._logger = logger or logging.getLogger(__name__)

    def transform(self, batches: Iterable[List[Move]]) -> Iterator[pd.DataFrame]:
        """
        Transform batches to DataFrames.

        Args:
            batches: Iterable of move batches

        Yields:
            DataFrames with step, source, destination and batch_number columns
        """
        next_step = 1
        for batch_num, batch in enumerate(batches, 1):
            df = pd.DataFrame(
                {
                    "step": pd.Series(
                        range(next_step, next_step + len(batch)), dtype="int64"
                    ),
                    "source": pd.Series([m.source for m in batch], dtype="object"),
                    "destination": pd.Series(
                        [m.destination for m in batch], dtype="object"
                    ),
                }
            )
            df["batch_number"] = batch_num
            next_step += len(batch)

            if self._logger:
                self._logger.info(
                    f"Created DataFrame batch {batch_num} with {len(df)} moves"
                )
            yield df
