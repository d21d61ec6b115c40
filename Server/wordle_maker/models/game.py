"""
Game Data Models

Contains all puzzle and game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..config.game_settings import (
    ALPHABET, DEFAULT_LANGUAGE, DEFAULT_MAX_GUESSES, MAX_GUESSES, MAX_WORD_LENGTH,
    MIN_GUESSES, MIN_WORD_LENGTH, SHARE_EMOJI, SHARE_TITLE, STATUS_PRIORITY,
    SUPPORTED_LANGUAGES
)
from ..errors import InvalidDefinition
from ..utils.helpers import clamp_guesses, sanitize_word


class LetterStatus(Enum):
    """Per-position result of scoring a guess."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"

    @property
    def rank(self) -> int:
        return STATUS_PRIORITY[self.value]


class SessionStatus(Enum):
    """Lifecycle of a game session."""
    IDLE = "idle"
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionStatus.WON, SessionStatus.LOST)


# One status per letter of the guess, in position order
GuessEvaluation = Tuple[LetterStatus, ...]

# Letter -> best status seen so far
KnowledgeMap = Dict[str, LetterStatus]


@dataclass(frozen=True)
class PuzzleDefinition:
    """
    A custom puzzle: the secret word plus play parameters.

    Instances are validated on construction, so an invalid definition
    can never exist. Use from_creator_input() for raw form values.
    """
    solution: str
    max_guesses: int = DEFAULT_MAX_GUESSES
    title: str = ''
    hint: str = ''
    language: str = DEFAULT_LANGUAGE

    def __post_init__(self):
        if not isinstance(self.solution, str) or not self.solution:
            raise InvalidDefinition("Secret word must contain letters.")
        if any(letter not in ALPHABET for letter in self.solution):
            raise InvalidDefinition("Secret word must contain only letters A-Z.")
        if not MIN_WORD_LENGTH <= len(self.solution) <= MAX_WORD_LENGTH:
            raise InvalidDefinition(
                f"Word length must be between {MIN_WORD_LENGTH} and {MAX_WORD_LENGTH} letters."
            )
        if isinstance(self.max_guesses, bool) or not isinstance(self.max_guesses, int):
            raise InvalidDefinition("Max guesses must be a whole number.")
        if not MIN_GUESSES <= self.max_guesses <= MAX_GUESSES:
            raise InvalidDefinition(f"Max guesses must be between {MIN_GUESSES} and {MAX_GUESSES}.")
        if not isinstance(self.title, str) or not isinstance(self.hint, str):
            raise InvalidDefinition("Title and hint must be text.")
        if not isinstance(self.language, str) or self.language not in SUPPORTED_LANGUAGES:
            raise InvalidDefinition(f"Unsupported language '{self.language}'.")

    @property
    def word_length(self) -> int:
        return len(self.solution)

    @classmethod
    def from_creator_input(cls,
                           word: str,
                           max_guesses=None,
                           title: Optional[str] = None,
                           hint: Optional[str] = None) -> 'PuzzleDefinition':
        """
        Builds a definition from the creation form.

        Args:
            word: Raw secret word; non-letters are stripped and case is folded
            max_guesses: Requested guess budget, clamped into range (blank uses the default)
            title: Optional display title
            hint: Optional clue shown to the player

        Returns:
            PuzzleDefinition ready for encoding

        Raises:
            InvalidDefinition: If the word is empty or has an unsupported length
        """
        solution = sanitize_word(word or '')
        if not solution:
            raise InvalidDefinition("Secret word must contain letters.")
        return cls(
            solution=solution,
            max_guesses=clamp_guesses(max_guesses),
            title=(title or '').strip(),
            hint=(hint or '').strip(),
            language=DEFAULT_LANGUAGE,
        )


@dataclass(frozen=True)
class WinSummary:
    """Compact result of a solved puzzle, shareable as plain text."""
    guess_count: int
    max_guesses: int
    rows: Tuple[GuessEvaluation, ...]

    def to_share_text(self, title: str = SHARE_TITLE) -> str:
        lines = [''.join(SHARE_EMOJI[status.value] for status in row) for row in self.rows]
        return '\n'.join([f"{title} {self.guess_count}/{self.max_guesses}", *lines])


@dataclass
class GameState:
    """Read-only snapshot of a session handed to the presentation layer."""
    game_id: Optional[str]
    status: str
    word_length: int
    max_guesses: int
    guesses: List[str]
    evaluations: List[List[str]]  # Letter status as string for JSON serialization
    letter_status: Dict[str, str]
    current_input: str
    title: str = ''
    hint: str = ''
    message: str = ''
    answer: Optional[str] = None  # Only included when game is over
    game_over: bool = field(init=False)

    def __post_init__(self):
        self.game_over = self.status in (SessionStatus.WON.value, SessionStatus.LOST.value)
