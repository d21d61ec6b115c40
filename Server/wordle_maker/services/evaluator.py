"""
Guess Evaluation

Scores guesses against the solution and folds the results into the
per-letter knowledge used to color the on-screen keyboard.
"""

from collections import Counter
from typing import List, Optional

from ..models.game import GuessEvaluation, KnowledgeMap, LetterStatus


def evaluate_guess(guess: str, solution: str) -> GuessEvaluation:
    """
    Implements the two-pass Wordle letter evaluation.

    Exact matches are marked first and every unmatched solution letter is
    counted; the second pass hands out PRESENT marks only while that count
    lasts, so repeated letters are never over-reported.

    Args:
        guess: Uppercase guess, same length as solution
        solution: Uppercase secret word

    Returns:
        One LetterStatus per position

    Raises:
        ValueError: If the lengths differ
    """
    if len(guess) != len(solution):
        raise ValueError(f"Guess has {len(guess)} letters, solution has {len(solution)}")

    result: List[Optional[LetterStatus]] = [None] * len(solution)
    remaining: Counter = Counter()

    # First pass: exact position matches
    for i, letter in enumerate(solution):
        if guess[i] == letter:
            result[i] = LetterStatus.CORRECT
        else:
            remaining[letter] += 1

    # Second pass: present letters and misses
    for i, letter in enumerate(guess):
        if result[i] is not None:
            continue
        if remaining[letter] > 0:
            result[i] = LetterStatus.PRESENT
            remaining[letter] -= 1
        else:
            result[i] = LetterStatus.ABSENT

    return tuple(result)


def fold_knowledge(current: KnowledgeMap, guess: str, evaluation: GuessEvaluation) -> KnowledgeMap:
    """
    Returns a new knowledge map with one evaluated guess merged in.

    A letter's status only moves up (absent < present < correct); an equal
    rank is overwritten by the newer observation. The input is not modified.
    """
    merged = dict(current)
    for letter, status in zip(guess, evaluation):
        previous = merged.get(letter)
        previous_rank = previous.rank if previous is not None else 0
        if status.rank >= previous_rank:
            merged[letter] = status
    return merged
