"""
Guess Evaluator

Implements the Wordle letter evaluation algorithm for words of any length.
"""

from collections import Counter
from typing import List, Sequence
from ..models.game import TileStatus


def evaluate(target: Sequence[str], guess: Sequence[str]) -> List[TileStatus]:
    """
    Classifies every position of ``guess`` against ``target``.

    Exact matches are resolved first so that a letter already placed
    correctly is never also reported as present elsewhere. Remaining
    occurrences are then handed out left to right.

    Args:
        target: The answer word
        guess: The submitted word, same length as ``target``

    Returns:
        List[TileStatus]: One of CORRECT, PRESENT or ABSENT per position

    Raises:
        ValueError: If the words differ in length
    """
    target_chars = ''.join(target).upper()
    guess_chars = ''.join(guess).upper()

    if len(target_chars) != len(guess_chars):
        raise ValueError(
            f"Guess length {len(guess_chars)} does not match target length {len(target_chars)}"
        )

    remaining = Counter(target_chars)
    result = [TileStatus.ABSENT] * len(guess_chars)

    # First pass: exact position matches
    for i, (t, g) in enumerate(zip(target_chars, guess_chars)):
        if g == t:
            result[i] = TileStatus.CORRECT
            remaining[g] -= 1

    # Second pass: misplaced letters, limited by what is left over
    for i, g in enumerate(guess_chars):
        if result[i] is TileStatus.CORRECT:
            continue
        if remaining[g] > 0:
            result[i] = TileStatus.PRESENT
            remaining[g] -= 1

    return result


def is_winning_result(statuses: Sequence[TileStatus]) -> bool:
    """True when every position is CORRECT."""
    return bool(statuses) and all(status is TileStatus.CORRECT for status in statuses)
