"""
Game Configuration Constants Module

This module defines all game configuration constants for custom puzzles.
All game parameters are centralized here to enable easy modification.
"""

from typing import Dict, Final, FrozenSet, Tuple

# Secret word bounds
MIN_WORD_LENGTH: Final[int] = 3
MAX_WORD_LENGTH: Final[int] = 25

# Guess budget bounds
MIN_GUESSES: Final[int] = 1
MAX_GUESSES: Final[int] = 12
DEFAULT_MAX_GUESSES: Final[int] = 6
"""
Guess budget used when a puzzle does not carry one.
Type: Final[int] - Immutable to prevent accidental modification
"""

# Alphabet variants; only English is playable for now
DEFAULT_LANGUAGE: Final[str] = 'en'
SUPPORTED_LANGUAGES: Final[FrozenSet[str]] = frozenset({DEFAULT_LANGUAGE})
ALPHABET: Final[str] = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ'

KEYBOARD_ROWS: Final[Tuple[str, ...]] = ('QWERTYUIOP', 'ASDFGHJKL', 'ZXCVBNM')

# Letter knowledge ranks, a letter never drops to a lower rank
STATUS_PRIORITY: Final[Dict[str, int]] = {'absent': 1, 'present': 2, 'correct': 3}

# Puzzle token format
PAYLOAD_VERSION: Final[int] = 1
NONCE_SIZE: Final[int] = 12  # 96-bit AES-GCM nonce
VALID_KEY_SIZES: Final[Tuple[int, ...]] = (16, 24, 32)

# Result sharing
SHARE_TITLE: Final[str] = 'Secret Wordle'
SHARE_EMOJI: Final[Dict[str, str]] = {'correct': '🟩', 'present': '🟨', 'absent': '⬛'}


def get_rule_summary() -> dict:
    """
    Returns the puzzle rules the creation flow advertises to clients.

    Returns:
        dict: word length bounds, guess bounds and the default guess budget
    """
    return {
        'min_word_length': MIN_WORD_LENGTH,
        'max_word_length': MAX_WORD_LENGTH,
        'min_guesses': MIN_GUESSES,
        'max_guesses': MAX_GUESSES,
        'default_max_guesses': DEFAULT_MAX_GUESSES,
        'languages': sorted(SUPPORTED_LANGUAGES),
        'keyboard_rows': list(KEYBOARD_ROWS),
    }
