"""
Example 01: Pulling Moves One at a Time

A MoveSequencer hands out moves on demand. has_more() tells you whether
another move exists, next_move() produces it. It is also a plain iterator.
"""

from hanoi_moves import MoveSequencer


if __name__ == "__main__":
    sequencer = MoveSequencer()  # 3 discs, A -> C using B

    print("Explicit protocol:")
    step = 1
    while sequencer.has_more():
        move = sequencer.next_move()
        print(f"  {step}: {move}   (phase now: {sequencer.phase.value})")
        step += 1

    print("\nIterator protocol:")
    for move in MoveSequencer(2, "left", "right", "middle"):
        print(f"  {move}")

    print("\n✅ Moves are produced lazily, one call at a time!")
