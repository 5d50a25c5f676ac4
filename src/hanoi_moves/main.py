"""Main entry point: export the configured tower's moves to Parquet."""

import logging
import sys

from .config import get_export_config, get_sequencer_config, is_verbose
from .models import WriteStatistics
from .pipeline import MoveExportPipeline
from .utils import format_bytes

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Configure logging.

    Args:
        verbose: Enable verbose logging
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def print_summary(height: int, stats: WriteStatistics, output_file: str):
    """Print summary statistics.

    Args:
        height: Tower height
        stats: Statistics from the Parquet write
        output_file: Path of the written file
    """
    print("\n" + "=" * 80)
    print("EXECUTION SUMMARY")
    print("=" * 80)
    print(f"  Tower height: {height}")
    print(f"  Moves written: {stats.total_rows:,}")
    print(f"  Row groups: {stats.total_batches}")
    print(f"  File size: {format_bytes(stats.file_size_bytes)}")
    print(f"  Time taken: {stats.elapsed_time:.2f} seconds")
    print(f"  File path: {output_file}")
    print("=" * 80)


def main() -> int:
    """Main execution function."""
    setup_logging(is_verbose())

    try:
        sequencer_config = get_sequencer_config()
        export_config = get_export_config()
        sequencer = sequencer_config.build()

        stats = MoveExportPipeline(sequencer, export_config).execute()
    except (ValueError, RuntimeError, OSError) as e:
        logger.error(f"Export failed: {e}", exc_info=True)
        return 1

    print_summary(sequencer_config.height, stats, str(export_config.output_file))
    return 0


if __name__ == "__main__":
    sys.exit(main())
