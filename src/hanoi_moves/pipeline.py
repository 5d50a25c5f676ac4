"""Pipeline orchestrator classes."""

import logging
import time
from pathlib import Path
from typing import Dict, Optional

import pandas as pd

from .config import SequencerConfig
from .models import ExportConfig, WriteStatistics
from .processors import MOVE_COLUMNS, MoveBatcher, MoveFrameTransformer
from .protocols import LoggerProtocol
from .sequencer import MoveSequencer, recursive_moves
from .utils import MemoryProfiler, MoveFileComparator, format_bytes
from .writers import CSVMoveWriter, DualMoveWriter, ParquetMoveWriter


class MoveExportPipeline:
    """
    Streams the moves of a sequencer into a Parquet file.

    Single Responsibility: Coordinate all pipeline components.
    At most one batch of moves and one DataFrame are alive at a time, and
    the sequencer itself keeps O(height) state.
    """

    def __init__(
        self,
        sequencer: MoveSequencer,
        config: ExportConfig,
        logger: Optional[LoggerProtocol] = None,
    ):
        """
        Initialize pipeline.

        Args:
            sequencer: Fresh sequencer whose moves are exported
            config: Export configuration
            logger: Logger instance
        """
        self.sequencer = sequencer
        self.config = config
        self._logger = logger or logging.getLogger(__name__)

        self.batcher = MoveBatcher(config.batch_size)
        self.transformer = MoveFrameTransformer(self._logger)

    @property
    def csv_path(self) -> Path:
        """CSV copy written next to the Parquet file when verification is on."""
        return self.config.output_file.with_suffix(".csv")

    def execute(self) -> WriteStatistics:
        """
        Execute the complete pipeline.

        Returns:
            WriteStatistics with operation results

        Raises:
            RuntimeError: If the sequencer has no moves left, or CSV
                verification finds a mismatch
        """
        if self._logger:
            self._logger.info(
                f"Exporting {self.sequencer.total_moves:,} moves for height "
                f"{self.sequencer.height} "
                f"({self.sequencer.source}->{self.sequencer.destination}) "
                f"to {self.config.output_file}"
            )
            self._logger.info(f"Batch size: {self.config.batch_size} moves per batch")

        start_time = time.time()

        # Build generator pipeline
        batches = self.batcher.batch(self.sequencer)
        dataframes = self.transformer.transform(batches)

        with ParquetMoveWriter(
            self.config.output_file, self.config.compression, self._logger
        ) as parquet_writer:
            if self.config.enable_csv_verification:
                with CSVMoveWriter(self.csv_path, self._logger) as csv_writer:
                    stats = DualMoveWriter(parquet_writer, csv_writer).write(dataframes)
            else:
                stats = parquet_writer.write(dataframes)

        if self._logger:
            self._logger.info(f"Pipeline completed in {time.time() - start_time:.2f} seconds")

        if self.config.enable_csv_verification:
            self._verify_output()

        return stats

    def _verify_output(self):
        """Verify the Parquet file against the CSV copy."""
        comparator = MoveFileComparator(self._logger)
        if not comparator.compare(self.config.output_file, self.csv_path):
            raise RuntimeError(
                f"Verification failed: {self.config.output_file} does not match {self.csv_path}"
            )


class EagerMoveExportPipeline:
    """
    Materialising approach for comparison.

    Solves the tower recursively into a list of 2**height - 1 moves and
    writes a single DataFrame. NOT recommended for tall towers.
    """

    def __init__(
        self,
        config: SequencerConfig,
        output_file: Path,
        compression: str = "snappy",
        logger: Optional[LoggerProtocol] = None,
    ):
        """
        Initialize eager pipeline.

        Args:
            config: Tower to solve
            output_file: Output file path
            compression: Compression codec
            logger: Logger instance
        """
        self.config = config
        self.output_file = Path(output_file)
        self.compression = compression
        self._logger = logger or logging.getLogger(__name__)

    def execute(self) -> WriteStatistics:
        """
        Execute pipeline without streaming.

        Returns:
            WriteStatistics with operation results
        """
        start_time = time.time()

        moves = recursive_moves(
            self.config.height,
            self.config.source,
            self.config.destination,
            self.config.buffer,
        )
        if self._logger:
            self._logger.warning(f"Loaded all {len(moves):,} moves into memory")

        df = pd.DataFrame(
            {
                "step": pd.Series(range(1, len(moves) + 1), dtype="int64"),
                "source": pd.Series([m.source for m in moves], dtype="object"),
                "destination": pd.Series([m.destination for m in moves], dtype="object"),
            }
        )
        df["batch_number"] = 1
        df = df[MOVE_COLUMNS]

        df.to_parquet(
            self.output_file, compression=self.compression, engine="pyarrow", index=False
        )

        elapsed = time.time() - start_time
        file_size = self.output_file.stat().st_size if self.output_file.exists() else 0

        if self._logger:
            self._logger.info(
                f"Wrote {len(df)} moves to {self.output_file} in {elapsed:.2f} seconds"
            )

        return WriteStatistics(
            total_rows=len(df),
            total_batches=1,
            file_size_bytes=file_size,
            elapsed_time=elapsed,
        )


class PipelineComparator:
    """
    Compares streaming vs materialising exports.

    Single Responsibility: Compare pipeline performance and memory usage.
    """

    def __init__(self, logger: Optional[LoggerProtocol] = None):
        """
        Initialize comparator.

        Args:
            logger: Logger instance
        """
        self._logger = logger or logging.getLogger(__name__)
        self.profiler = MemoryProfiler(logger)

    def compare(
        self,
        sequencer_config: SequencerConfig,
        export_config: ExportConfig,
        eager_output: Path,
    ) -> Dict[str, Dict]:
        """
        Profile both approaches on the same tower.

        Args:
            sequencer_config: Tower to export
            export_config: Configuration for the streaming pipeline
            eager_output: Output path for the eager pipeline

        Returns:
            Profiler statistics keyed by "lazy" and "eager"
        """
        lazy_pipeline = MoveExportPipeline(
            sequencer_config.build(), export_config, self._logger
        )
        lazy_stats = self.profiler.profile("Streaming export", lazy_pipeline.execute)

        eager_pipeline = EagerMoveExportPipeline(
            sequencer_config, eager_output, export_config.compression, self._logger
        )
        eager_stats = self.profiler.profile("Eager export", eager_pipeline.execute)

        self._log_comparison(lazy_stats, eager_stats)
        return {"lazy": lazy_stats, "eager": eager_stats}

    def _log_comparison(self, lazy_stats: Dict, eager_stats: Dict):
        """Log comparison results."""
        if self._logger:
            peak_diff = eager_stats["peak_memory"] - lazy_stats["peak_memory"]
            self._logger.info(
                f"Peak Memory Usage:\n"
                f"  Streaming:  {format_bytes(lazy_stats['peak_memory'])}\n"
                f"  Eager:      {format_bytes(eager_stats['peak_memory'])}\n"
                f"  Difference: {format_bytes(peak_diff)}"
            )
            self._logger.info(
                f"Execution Time:\n"
                f"  Streaming:  {lazy_stats['elapsed_time']:.2f} seconds\n"
                f"  Eager:      {eager_stats['elapsed_time']:.2f} seconds"
            )
