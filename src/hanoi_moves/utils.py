"""Utility classes for reading move files and profiling."""

import gc
import logging
import os
import time
import tracemalloc
from pathlib import Path
from typing import Callable, Dict, Iterator, Optional

import pandas as pd
import psutil
import pyarrow.parquet as pq

from .models import Move
from .protocols import LoggerProtocol


def format_bytes(bytes_value: float) -> str:
    """Format bytes to human-readable format."""
    for unit in ["B", "KB", "MB", "GB"]:
        if abs(bytes_value) < 1024.0:
            return f"{bytes_value:.2f} {unit}"
        bytes_value /= 1024.0
    return f"{bytes_value:.2f} TB"


class ParquetMoveReader:
    """
    Reads move files written by ParquetMoveWriter.

    Single Responsibility: Handle Parquet file reading operations.
    """

    def __init__(self, logger: Optional[LoggerProtocol] = None):
        """
        Initialize Parquet reader.

        Args:
            logger: Logger instance
        """
        self._logger = logger or logging.getLogger(__name__)

    def read_moves(self, parquet_path: Path) -> Iterator[Move]:
        """
        Stream moves back from a Parquet file, one row group at a time.

        Args:
            parquet_path: Path to Parquet file

        Yields:
            Moves in step order
        """
        parquet_file = pq.ParquetFile(str(parquet_path))
        if self._logger:
            self._logger.debug(
                f"Reading {parquet_file.metadata.num_rows} moves in "
                f"{parquet_file.num_row_groups} row groups from {parquet_path}"
            )

        for index in range(parquet_file.num_row_groups):
            table = parquet_file.read_row_group(index, columns=["source", "destination"])
            sources = table.column("source").to_pylist()
            destinations = table.column("destination").to_pylist()
            for source, destination in zip(sources, destinations):
                yield Move(source, destination)

    def read_frame(self, parquet_path: Path) -> pd.DataFrame:
        """Read a whole move file into a DataFrame."""
        df = pd.read_parquet(parquet_path)
        if self._logger:
            self._logger.info(f"Read {len(df):,} moves from {parquet_path}")
        return df


class MoveFileComparator:
    """
    Compares a Parquet move file with its CSV copy.

    Single Responsibility: Compare files and report differences.
    """

    def __init__(self, logger: Optional[LoggerProtocol] = None):
        """
        Initialize file comparator.

        Args:
            logger: Logger instance
        """
        self._logger = logger or logging.getLogger(__name__)
        self._reader = ParquetMoveReader(logger)

    def compare(self, parquet_path: Path, csv_path: Path) -> bool:
        """
        Compare the two files row by row.

        Args:
            parquet_path: Path to Parquet file
            csv_path: Path to CSV file

        Returns:
            True if files match, False otherwise
        """
        if self._logger:
            self._logger.info(f"Comparing move files: {parquet_path} vs {csv_path}")

        df_parquet = self._reader.read_frame(parquet_path)
        df_csv = pd.read_csv(csv_path, dtype={"source": str, "destination": str})

        if df_parquet.shape != df_csv.shape:
            if self._logger:
                self._logger.error(
                    f"Files have different shapes: {df_parquet.shape} vs {df_csv.shape}"
                )
            return False

        if list(df_parquet.columns) != list(df_csv.columns):
            if self._logger:
                self._logger.error(
                    f"Files have different columns: {list(df_parquet.columns)} vs {list(df_csv.columns)}"
                )
            return False

        # Row order is the move order, so no sorting here
        mismatches = (
            (df_parquet.astype(str).reset_index(drop=True) != df_csv.astype(str))
            .any(axis=1)
            .sum()
        )
        if mismatches:
            if self._logger:
                self._logger.error(f"Files contain different moves: {mismatches} rows differ")
            return False

        if self._logger:
            self._logger.info(
                f"Files match! {len(df_parquet):,} moves × {len(df_parquet.columns)} columns"
            )
        return True


class MemoryProfiler:
    """
    Profiles memory usage for operations.

    Single Responsibility: Track and report memory statistics.
    """

    def __init__(self, logger: Optional[LoggerProtocol] = None):
        """
        Initialize memory profiler.

        Args:
            logger: Logger instance
        """
        self._logger = logger or logging.getLogger(__name__)

    def profile(self, operation_name: str, operation_func: Callable[[], object]) -> Dict:
        """
        Profile memory usage of an operation.

        Args:
            operation_name: Name of the operation
            operation_func: Function to execute

        Returns:
            Dictionary with memory statistics
        """
        gc.collect()

        tracemalloc.start()
        try:
            start_time = time.time()
            operation_func()
            elapsed_time = time.time() - start_time
            current_mem, peak_mem = tracemalloc.get_traced_memory()
        finally:
            tracemalloc.stop()

        process = psutil.Process(os.getpid())
        mem_info = process.memory_info()

        stats = {
            "operation": operation_name,
            "elapsed_time": elapsed_time,
            "current_memory": current_mem,
            "peak_memory": peak_mem,
            "rss": mem_info.rss,
            "vms": mem_info.vms,
            "memory_percent": process.memory_percent(),
        }

        if self._logger:
            self._logger.info(
                f"{operation_name}: peak {format_bytes(peak_mem)} in {elapsed_time:.2f}s"
            )

        return stats
