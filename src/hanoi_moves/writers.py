"""Writer classes for Parquet and CSV move files."""

import logging
import time
from pathlib import Path
from typing import Iterator, Optional

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from .models import WriteStatistics
from .processors import MOVE_COLUMNS
from .protocols import LoggerProtocol

MOVE_SCHEMA = pa.schema(
    [
        ("step", pa.int64()),
        ("source", pa.string()),
        ("destination", pa.string()),
        ("batch_number", pa.int64()),
    ]
)


class MoveFrameValidator:
    """
    Checks that consecutive frames form one unbroken move sequence.

    Single Responsibility: Enforce the move file layout before anything is written.
    """

    def __init__(self):
        self.next_step = 1

    def check(self, df: pd.DataFrame) -> None:
        """
        Validate a frame and advance the expected step.

        Raises:
            ValueError: On a column mismatch, a step gap or a move that
                stays on its pole
        """
        if list(df.columns) != MOVE_COLUMNS:
            raise ValueError(
                f"Move frame column mismatch: expected {MOVE_COLUMNS}, got {list(df.columns)}"
            )
        if df.empty:
            return

        expected = list(range(self.next_step, self.next_step + len(df)))
        if df["step"].tolist() != expected:
            raise ValueError(
                f"Move frame step gap: expected steps {self.next_step}..{expected[-1]}, "
                f"got {df['step'].iloc[0]}..{df['step'].iloc[-1]}"
            )

        idle = df["source"] == df["destination"]
        if idle.any():
            raise ValueError(
                f"Move at step {df.loc[idle, 'step'].iloc[0]} does not change pole"
            )

        self.next_step += len(df)


class ParquetMoveWriter:
    """
    Writes move DataFrames to a Parquet file, one row group per frame.

    Single Responsibility: Handle Parquet file writing operations.
    Uses context manager pattern for resource management.
    """

    def __init__(
        self,
        output_path: Path,
        compression: str = "snappy",
        logger: Optional[LoggerProtocol] = None,
    ):
        """
        Initialize Parquet writer.

        Args:
            output_path: Path to output Parquet file
            compression: Compression codec
            logger: Logger instance
        """
        self.output_path = Path(output_path)
        self.compression = compression
        self._logger = logger or logging.getLogger(__name__)
        self._writer: Optional[pq.ParquetWriter] = None
        self._validator = MoveFrameValidator()
        self._total_rows = 0

    def __enter__(self):
        """Enter context manager."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager and close writer."""
        self.close()

    def write(self, dataframes: Iterator[pd.DataFrame]) -> WriteStatistics:
        """
        Write dataframes to Parquet file.

        Args:
            dataframes: Iterator of DataFrames to write

        Returns:
            WriteStatistics with operation details

        Raises:
            RuntimeError: If the iterator yields no DataFrame
            ValueError: If a frame breaks the move sequence
        """
        start_time = time.time()
        batch_count = 0

        for df in dataframes:
            self._validator.check(df)
            table = pa.Table.from_pandas(df, schema=MOVE_SCHEMA, preserve_index=False)

            # Initialize writer on first batch
            if self._writer is None:
                self._writer = pq.ParquetWriter(
                    str(self.output_path),
                    table.schema,
                    compression=self.compression,
                )

            self._writer.write_table(table)
            self._total_rows += len(df)
            batch_count += 1

            if self._logger:
                self._logger.debug(f"Written {len(df)} moves (total: {self._total_rows})")

        if batch_count == 0:
            raise RuntimeError("No moves written")

        # Footer must be flushed before the file size is meaningful
        self.close()

        elapsed_time = time.time() - start_time
        file_size = self.output_path.stat().st_size if self.output_path.exists() else 0

        if self._logger:
            self._logger.info(
                f"Successfully wrote {self._total_rows} total moves to {self.output_path}"
            )

        return WriteStatistics(
            total_rows=self._total_rows,
            total_batches=batch_count,
            file_size_bytes=file_size,
            elapsed_time=elapsed_time,
        )

    def close(self):
        """Close the Parquet writer."""
        if self._writer:
            self._writer.close()
            self._writer = None


class CSVMoveWriter:
    """
    Writes move frames to a CSV file with the fixed move header.

    The header is written when the context is entered, so even a file
    with no moves carries the layout. Frames are validated before any
    of their rows reach the file.
    """

    def __init__(
        self,
        output_path: Path,
        logger: Optional[LoggerProtocol] = None,
    ):
        """
        Initialize CSV writer.

        Args:
            output_path: Path to output CSV file
            logger: Logger instance
        """
        self.output_path = Path(output_path)
        self._logger = logger or logging.getLogger(__name__)
        self._file_handle = None
        self._validator = MoveFrameValidator()
        self.total_rows = 0
        self.total_batches = 0

    def __enter__(self):
        """Open the file and write the header."""
        self._file_handle = open(self.output_path, "w", newline="", encoding="utf-8")
        self._file_handle.write(",".join(MOVE_COLUMNS) + "\n")
        if self._logger:
            self._logger.info(f"Writing moves to CSV: {self.output_path}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager and close file."""
        self.close()

    def write_frame(self, df: pd.DataFrame) -> None:
        """
        Append one validated frame of moves.

        Raises:
            RuntimeError: If used outside a context manager
            ValueError: If the frame breaks the move sequence
        """
        if not self._file_handle:
            raise RuntimeError("CSVMoveWriter must be used as context manager")

        self._validator.check(df)
        df.to_csv(self._file_handle, index=False, header=False, lineterminator="\n")
        self.total_rows += len(df)
        self.total_batches += 1

    def write(self, dataframes: Iterator[pd.DataFrame]) -> WriteStatistics:
        """
        Write every frame of a stream.

        Args:
            dataframes: Iterator of move DataFrames

        Returns:
            WriteStatistics with operation details
        """
        start_time = time.time()
        for df in dataframes:
            self.write_frame(df)
        return self.statistics(time.time() - start_time)

    def statistics(self, elapsed_time: float) -> WriteStatistics:
        """Summarise what has been written so far."""
        if self._file_handle:
            self._file_handle.flush()
        file_size = self.output_path.stat().st_size if self.output_path.exists() else 0

        if self._logger:
            self._logger.info(
                f"Successfully wrote {self.total_rows} total moves to CSV: {self.output_path}"
            )

        return WriteStatistics(
            total_rows=self.total_rows,
            total_batches=self.total_batches,
            file_size_bytes=file_size,
            elapsed_time=elapsed_time,
        )

    def close(self):
        """Close the CSV file."""
        if self._file_handle:
            self._file_handle.close()
            self._file_handle = None


class DualMoveWriter:
    """
    Mirrors the Parquet stream into a CSV copy frame by frame.

    Each frame is appended to the CSV file as it passes on to the Parquet
    writer, so no frame is buffered and both files hold the same moves.
    """

    def __init__(
        self,
        parquet_writer: ParquetMoveWriter,
        csv_writer: Optional[CSVMoveWriter] = None,
    ):
        """
        Initialize dual writer.

        Args:
            parquet_writer: Parquet writer instance
            csv_writer: Optional CSV writer instance, already entered
        """
        self.parquet_writer = parquet_writer
        self.csv_writer = csv_writer

    def _mirrored(self, dataframes: Iterator[pd.DataFrame]) -> Iterator[pd.DataFrame]:
        for df in dataframes:
            self.csv_writer.write_frame(df)
            yield df

    def write(self, dataframes: Iterator[pd.DataFrame]) -> WriteStatistics:
        """
        Write the stream to Parquet, and to CSV when a CSV writer is set.

        Returns:
            WriteStatistics from the Parquet write
        """
        if not self.csv_writer:
            return self.parquet_writer.write(dataframes)

        parquet_stats = self.parquet_writer.write(self._mirrored(dataframes))
        csv_stats = self.csv_writer.statistics(parquet_stats.elapsed_time)

        if csv_stats.total_rows != parquet_stats.total_rows:
            raise RuntimeError(
                f"CSV copy has {csv_stats.total_rows} moves, Parquet has {parquet_stats.total_rows}"
            )
        return parquet_stats
