"""Tests for writers module."""

import tempfile
from pathlib import Path

import pandas as pd
import pyarrow.parquet as pq
import pytest

from hanoi_moves.processors import MoveBatcher, MoveFrameTransformer
from hanoi_moves.sequencer import MoveSequencer
from hanoi_moves.writers import (
    CSVMoveWriter,
    DualMoveWriter,
    MoveFrameValidator,
    ParquetMoveWriter,
)


def move_frames(height, batch_size):
    batches = MoveBatcher(batch_size).batch(MoveSequencer(height))
    return MoveFrameTransformer().transform(batches)


def test_parquet_writer_row_groups():
    """Test that every frame becomes one row group."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "moves.parquet"

        with ParquetMoveWriter(output_path) as writer:
            stats = writer.write(move_frames(5, batch_size=10))

        assert stats.total_rows == 31
        assert stats.total_batches == 4
        assert stats.file_size_bytes > 0
        assert output_path.exists()

        metadata = pq.ParquetFile(str(output_path)).metadata
        assert metadata.num_rows == 31
        assert metadata.num_row_groups == 4


def test_parquet_writer_without_frames():
    """Test that an empty frame stream raises error."""
    with tempfile.TemporaryDirectory() as tmpdir:
        writer = ParquetMoveWriter(Path(tmpdir) / "moves.parquet")

        with pytest.raises(RuntimeError, match="No moves written"):
            writer.write(iter([]))

        writer.close()


def test_parquet_writer_compression():
    """Test that the configured codec is used."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "moves.parquet"

        with ParquetMoveWriter(output_path, compression="gzip") as writer:
            writer.write(move_frames(3, batch_size=100))

        column = pq.ParquetFile(str(output_path)).metadata.row_group(0).column(0)
        assert column.compression == "GZIP"


def test_csv_writer_requires_context_manager():
    """Test that writing without entering the context raises error."""
    with tempfile.TemporaryDirectory() as tmpdir:
        writer = CSVMoveWriter(Path(tmpdir) / "moves.csv")

        with pytest.raises(RuntimeError, match="context manager"):
            writer.write(move_frames(2, batch_size=10))


def test_csv_writer_single_header():
    """Test that the header is written once across batches."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "moves.csv"

        with CSVMoveWriter(output_path) as writer:
            stats = writer.write(move_frames(3, batch_size=2))

        df = pd.read_csv(output_path)
        assert stats.total_rows == 7
        assert stats.total_batches == 4
        assert len(df) == 7
        assert df["step"].tolist() == list(range(1, 8))
        assert output_path.read_text().count("step") == 1


def test_dual_writer_writes_both():
    """Test that both formats receive every move."""
    with tempfile.TemporaryDirectory() as tmpdir:
        parquet_path = Path(tmpdir) / "moves.parquet"
        csv_path = Path(tmpdir) / "moves.csv"

        with ParquetMoveWriter(parquet_path) as parquet_writer:
            with CSVMoveWriter(csv_path) as csv_writer:
                stats = DualMoveWriter(parquet_writer, csv_writer).write(
                    move_frames(4, batch_size=5)
                )

        assert stats.total_rows == 15
        assert len(pd.read_parquet(parquet_path)) == 15
        assert len(pd.read_csv(csv_path)) == 15


def test_csv_writer_header_without_moves():
    """Test that an empty stream still leaves the move header."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "moves.csv"

        with CSVMoveWriter(output_path) as writer:
            stats = writer.write(iter([]))

        assert stats.total_rows == 0
        assert output_path.read_text() == "step,source,destination,batch_number\n"


def test_csv_writer_rejects_foreign_columns():
    """Test that frames without the move layout are refused."""
    with tempfile.TemporaryDirectory() as tmpdir:
        output_path = Path(tmpdir) / "moves.csv"
        df = pd.DataFrame({"id": [1, 2], "name": ["Alice", "Bob"]})

        with CSVMoveWriter(output_path) as writer:
            with pytest.raises(ValueError, match="column mismatch"):
                writer.write_frame(df)

        assert len(pd.read_csv(output_path)) == 0


def test_parquet_writer_rejects_step_gap():
    """Test that frames must continue the step numbering."""
    frames = list(move_frames(4, batch_size=5))

    with tempfile.TemporaryDirectory() as tmpdir:
        with ParquetMoveWriter(Path(tmpdir) / "moves.parquet") as writer:
            with pytest.raises(ValueError, match="step gap"):
                writer.write(iter([frames[0], frames[2]]))


def test_validator_rejects_idle_move():
    """Test that a move must leave its pole."""
    df = pd.DataFrame(
        {
            "step": [1, 2],
            "source": ["A", "B"],
            "destination": ["C", "B"],
            "batch_number": [1, 1],
        }
    )

    with pytest.raises(ValueError, match="step 2 does not change pole"):
        MoveFrameValidator().check(df)


def test_validator_tracks_steps_across_frames():
    """Test that the expected step advances with each frame."""
    validator = MoveFrameValidator()

    for df in move_frames(3, batch_size=3):
        validator.check(df)

    assert validator.next_step == 8
