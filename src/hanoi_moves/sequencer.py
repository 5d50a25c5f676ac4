"""Lazy, resumable enumeration of Towers of Hanoi moves."""

import logging
from typing import List, Optional

from .models import Move, Phase
from .protocols import LoggerProtocol

DEFAULT_HEIGHT = 3
DEFAULT_SOURCE = "A"
DEFAULT_DESTINATION = "C"
DEFAULT_BUFFER = "B"


class InvalidHeightError(ValueError):
    """Raised when a tower height is not a positive integer."""


class InvalidPolesError(ValueError):
    """Raised when the source, destination and buffer poles are not distinct."""


class SequenceExhaustedError(RuntimeError):
    """Raised when a move is requested from a finished sequencer."""


def _validate(height: int, source: str, destination: str, buffer: str) -> None:
    if isinstance(height, bool) or not isinstance(height, int) or height < 1:
        raise InvalidHeightError(f"Only positive heights are supported: {height!r}")
    if len({source, destination, buffer}) != 3:
        raise InvalidPolesError(
            f"Poles must be distinct: {source!r}, {destination!r}, {buffer!r}"
        )


class MoveSequencer:
    """
    Enumerates the moves solving a Towers of Hanoi tower of a given height.

    The classic solution for height n is split in three parts:

    * move the top n-1 discs from source to buffer, using destination as spare
    * move the largest disc from source to destination
    * move the n-1 discs from buffer to destination, using source as spare

    Instead of recursing eagerly, the sequencer keeps its progress in a
    phase and in at most one child sequencer of height n-1 that handles the
    sub-tower currently being moved. Only the chain from the root to the
    active leaf is alive, so memory stays O(height) while the sequence has
    2**height - 1 moves.

    The sequencer is its own iterator and cannot be restarted.
    """

    def __init__(
        self,
        height: int = DEFAULT_HEIGHT,
        source: str = DEFAULT_SOURCE,
        destination: str = DEFAULT_DESTINATION,
        buffer: str = DEFAULT_BUFFER,
        logger: Optional[LoggerProtocol] = None,
        *,
        _nested: bool = False,
        _first_child: Optional["MoveSequencer"] = None,
    ):
        """
        Initialize sequencer.

        Args:
            height: Number of discs to move (must be >= 1)
            source: Pole the tower starts on
            destination: Pole the tower must end on
            buffer: Spare pole
            logger: Logger instance (defaults to module logger)

        Raises:
            InvalidHeightError: If height is not a positive integer
            InvalidPolesError: If the three poles are not distinct
        """
        _validate(height, source, destination, buffer)

        self._height = height
        self._source = source
        self._destination = destination
        self._buffer = buffer
        # Only the outermost sequencer reports progress
        self._logger = None if _nested else (logger or logging.getLogger(__name__))

        self._child: Optional["MoveSequencer"] = None
        if height == 1:
            self._phase = Phase.BASIS
        else:
            # First sub-tower goes to the buffer, destination is the spare
            if _first_child is None:
                _first_child = _build_chain(height - 1, source, buffer, destination)
            self._child = _first_child
            self._phase = Phase.FIRST_DELEGATION

    @property
    def height(self) -> int:
        return self._height

    @property
    def source(self) -> str:
        return self._source

    @property
    def destination(self) -> str:
        return self._destination

    @property
    def buffer(self) -> str:
        return self._buffer

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def total_moves(self) -> int:
        """Number of moves a fresh sequencer of this height produces."""
        return 2 ** self._height - 1

    @property
    def depth(self) -> int:
        """Number of live sequencers on the ownership chain, this one included."""
        if self._phase is Phase.TERMINAL:
            return 0
        depth = 0
        node = self
        while node is not None:
            depth += 1
            node = node._child
        return depth

    def has_more(self) -> bool:
        """Return True while at least one move remains."""
        return self._phase is not Phase.TERMINAL

    def next_move(self) -> Move:
        """
        Produce the next move and advance the state machine.

        A call in a delegation phase is forwarded down the ownership chain
        to the sequencer in BASIS or IN_BETWEEN, which emits the move. On
        the way back every owner whose child has just run out releases it
        and leaves its delegation phase. The chain is walked with a loop,
        so tall towers do not hit the recursion limit.

        Returns:
            The next Move in canonical order

        Raises:
            SequenceExhaustedError: If every move has already been produced
        """
        if self._phase is Phase.TERMINAL:
            raise SequenceExhaustedError(
                f"No more moves for height {self._height} "
                f"({self._source}->{self._destination})"
            )

        owners: List["MoveSequencer"] = []
        node = self
        while node._phase in _DELEGATING:
            owners.append(node)
            node = node._child
        move = node._emit()

        for owner in reversed(owners):
            if owner._child.has_more():
                break
            owner._child = None
            if owner._phase is Phase.FIRST_DELEGATION:
                owner._enter(Phase.IN_BETWEEN)
            else:
                owner._enter(Phase.TERMINAL)
        return move

    def _emit(self) -> Move:
        if self._phase is Phase.IN_BETWEEN:
            # Second sub-tower goes from the buffer, source is the spare
            self._child = _build_chain(
                self._height - 1, self._buffer, self._destination, self._source
            )
            self._enter(Phase.SECOND_DELEGATION)
        else:
            self._enter(Phase.TERMINAL)
        return Move(self._source, self._destination)

    def _enter(self, phase: Phase) -> None:
        if self._logger:
            self._logger.debug(
                f"Sequencer height={self._height}: {self._phase.value} -> {phase.value}"
            )
        self._phase = phase

    def __iter__(self) -> "MoveSequencer":
        return self

    def __next__(self) -> Move:
        if not self.has_more():
            raise StopIteration
        return self.next_move()

    def __repr__(self) -> str:
        return (
            f"MoveSequencer(height={self._height}, source={self._source!r}, "
            f"destination={self._destination!r}, buffer={self._buffer!r}, "
            f"phase={self._phase.value})"
        )


_DELEGATING = (Phase.FIRST_DELEGATION, Phase.SECOND_DELEGATION)


def _build_chain(height: int, source: str, destination: str, buffer: str) -> MoveSequencer:
    """Build a fresh nested sequencer and its first-delegation chain bottom-up."""
    levels = []
    for level in range(height, 0, -1):
        levels.append((level, source, destination, buffer))
        source, destination, buffer = source, buffer, destination

    child = None
    for level, src, dst, buf in reversed(levels):
        child = MoveSequencer(level, src, dst, buf, _nested=True, _first_child=child)
    return child


def iter_moves(
    height: int = DEFAULT_HEIGHT,
    source: str = DEFAULT_SOURCE,
    destination: str = DEFAULT_DESTINATION,
    buffer: str = DEFAULT_BUFFER,
) -> MoveSequencer:
    """Create a sequencer for the given tower."""
    return MoveSequencer(height, source, destination, buffer)


def recursive_moves(
    height: int = DEFAULT_HEIGHT,
    source: str = DEFAULT_SOURCE,
    destination: str = DEFAULT_DESTINATION,
    buffer: str = DEFAULT_BUFFER,
) -> List[Move]:
    """
    Eager recursive solution, materialising every move in a list.

    Memory grows with 2**height; use MoveSequencer for large towers.
    """
    _validate(height, source, destination, buffer)

    moves: List[Move] = []

    def solve(n: int, src: str, dst: str, buf: str) -> None:
        if n == 0:
            return
        solve(n - 1, src, buf, dst)
        moves.append(Move(src, dst))
        solve(n - 1, buf, dst, src)

    solve(height, source, destination, buffer)
    return moves
