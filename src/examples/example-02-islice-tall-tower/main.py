"""
Example 02: itertools.islice on a Tall Tower

A 64-disc tower needs 2**64 - 1 moves. The sequencer only keeps one
sub-problem per disc alive, so you can look at any prefix of the solution.
"""

from itertools import islice

from hanoi_moves import MoveSequencer


if __name__ == "__main__":
    sequencer = MoveSequencer(64)

    print(f"Total moves: {sequencer.total_moves:,}")
    print(f"Live sequencers: {sequencer.depth}")

    print("\nFirst 10 moves:")
    for move in islice(sequencer, 10):
        print(f"  {move}")

    print("\nMoves 1001-1006:")
    print(f"  {[str(m) for m in islice(sequencer, 990, 996)]}")

    print(f"\nLive sequencers: {sequencer.depth}")
    print("\n✅ islice() walks into the sequence without materializing it!")
