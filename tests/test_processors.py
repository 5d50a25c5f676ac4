"""Tests for processors module."""

import pytest

from hanoi_moves.models import Move
from hanoi_moves.processors import MOVE_COLUMNS, MoveBatcher, MoveFrameTransformer
from hanoi_moves.sequencer import MoveSequencer


def test_batcher_rejects_non_positive_size():
    """Test that batch size must be positive."""
    with pytest.raises(ValueError, match="batch_size must be positive"):
        MoveBatcher(batch_size=0)


def test_batcher_splits_sequence():
    """Test batching a 15-move sequence into groups of 4."""
    batcher = MoveBatcher(batch_size=4)

    batches = list(batcher.batch(MoveSequencer(4)))

    assert [len(b) for b in batches] == [4, 4, 4, 3]
    assert [m for b in batches for m in b] == list(MoveSequencer(4))


def test_batcher_exact_multiple():
    """Test that no empty trailing batch is produced."""
    batcher = MoveBatcher(batch_size=7)

    batches = list(batcher.batch(MoveSequencer(3)))

    assert len(batches) == 1
    assert len(batches[0]) == 7


def test_batcher_is_lazy():
    """Test that batching only pulls the moves it needs."""
    sequencer = MoveSequencer(10)
    batches = MoveBatcher(batch_size=5).batch(sequencer)

    first = next(batches)

    assert len(first) == 5
    assert sequencer.has_more()


def test_transformer_columns_and_steps():
    """Test DataFrame layout and continuous step numbering."""
    batches = [
        [Move("A", "B"), Move("A", "C")],
        [Move("B", "C")],
    ]

    frames = list(MoveFrameTransformer().transform(batches))

    assert len(frames) == 2
    assert list(frames[0].columns) == MOVE_COLUMNS
    assert frames[0]["step"].tolist() == [1, 2]
    assert frames[1]["step"].tolist() == [3]
    assert frames[1]["source"].tolist() == ["B"]
    assert frames[1]["destination"].tolist() == ["C"]
    assert frames[0]["batch_number"].tolist() == [1, 1]
    assert frames[1]["batch_number"].tolist() == [2]
    assert str(frames[0]["step"].dtype) == "int64"
