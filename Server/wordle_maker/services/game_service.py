"""
Game Service

Contains the game session engine for custom puzzles and the service that
keeps one session per player.
"""

import threading
import uuid
from typing import Dict, List, Optional, Tuple

from ..config.game_settings import ALPHABET
from ..errors import SessionNotActive, WrongLength
from ..models.game import (
    GameState, GuessEvaluation, KnowledgeMap, PuzzleDefinition, SessionStatus, WinSummary
)
from ..utils.helpers import sanitize_word
from .evaluator import evaluate_guess, fold_knowledge
from .puzzle_codec import PuzzleCodec

SUBMIT_KEYS = ('ENTER',)
DELETE_KEYS = ('BACKSPACE', 'DELETE')


class GameSession:
    """
    State machine for one player working through one puzzle.

    idle -> playing -> won | lost. Letter edits on a session that is not
    playing are ignored; submitting raises SessionNotActive. A rejected
    submission leaves the state exactly as it was.
    """

    def __init__(self, game_id: Optional[str] = None):
        self.game_id = game_id
        self.status = SessionStatus.IDLE
        self.definition: Optional[PuzzleDefinition] = None
        self._guesses: List[str] = []
        self._evaluations: List[GuessEvaluation] = []
        self._knowledge: KnowledgeMap = {}
        self._current_input = ''

    @property
    def guesses(self) -> Tuple[str, ...]:
        return tuple(self._guesses)

    @property
    def evaluations(self) -> Tuple[GuessEvaluation, ...]:
        return tuple(self._evaluations)

    @property
    def knowledge(self) -> KnowledgeMap:
        return dict(self._knowledge)

    @property
    def current_input(self) -> str:
        return self._current_input

    @property
    def is_playing(self) -> bool:
        return self.status is SessionStatus.PLAYING

    def start(self, definition: PuzzleDefinition) -> None:
        """Load a puzzle and reset all progress."""
        self.definition = definition
        self._guesses = []
        self._evaluations = []
        self._knowledge = {}
        self._current_input = ''
        self.status = SessionStatus.PLAYING

    def append_letter(self, letter: str) -> bool:
        """Append one letter to the pending guess. Returns True if the input changed."""
        if not self.is_playing or not isinstance(letter, str) or len(letter) != 1:
            return False
        letter = letter.upper()
        if letter not in ALPHABET or len(self._current_input) >= self.definition.word_length:
            return False
        self._current_input += letter
        return True

    def delete_letter(self) -> bool:
        if not self.is_playing or not self._current_input:
            return False
        self._current_input = self._current_input[:-1]
        return True

    def set_input(self, text: str) -> bool:
        """Replace the pending guess with sanitized free text, cut to the word length."""
        if not self.is_playing:
            return False
        self._current_input = sanitize_word(text or '')[:self.definition.word_length]
        return True

    def submit_guess(self) -> GuessEvaluation:
        """
        Scores the pending guess and advances the game.

        Returns:
            The evaluation appended to the history

        Raises:
            SessionNotActive: If no puzzle is being played
            WrongLength: If the pending guess is not exactly the word length
        """
        if not self.is_playing:
            raise SessionNotActive(self.status.value, 'submit a guess')

        guess = self._current_input
        solution = self.definition.solution
        if len(guess) != len(solution):
            raise WrongLength(len(solution), len(guess))

        evaluation = evaluate_guess(guess, solution)
        self._guesses.append(guess)
        self._evaluations.append(evaluation)
        self._knowledge = fold_knowledge(self._knowledge, guess, evaluation)
        self._current_input = ''

        if guess == solution:
            self.status = SessionStatus.WON
        elif len(self._guesses) >= self.definition.max_guesses:
            self.status = SessionStatus.LOST

        return evaluation

    def submit_word(self, word: str) -> GuessEvaluation:
        """
        Submits a whole word in one go, bypassing the pending input.

        Unlike set_input() nothing is cut off: a word that sanitizes to the
        wrong length is rejected and the pending input is kept.

        Raises:
            SessionNotActive: If no puzzle is being played
            WrongLength: If the sanitized word is not exactly the word length
        """
        if not self.is_playing:
            raise SessionNotActive(self.status.value, 'submit a guess')
        guess = sanitize_word(word or '')
        if len(guess) != self.definition.word_length:
            raise WrongLength(self.definition.word_length, len(guess))
        self._current_input = guess
        return self.submit_guess()

    def press_key(self, key: str) -> Optional[GuessEvaluation]:
        """
        Applies a single keypress: ENTER submits, BACKSPACE deletes, a letter appends.

        Returns:
            The new evaluation when the key submitted a guess, otherwise None
        """
        if not self.is_playing or not isinstance(key, str):
            return None
        key = key.upper()
        if key in SUBMIT_KEYS:
            return self.submit_guess()
        if key in DELETE_KEYS:
            self.delete_letter()
        else:
            self.append_letter(key)
        return None

    @property
    def status_message(self) -> str:
        if self.status is SessionStatus.WON:
            count = len(self._guesses)
            return f"You solved it in {count} guess{'' if count == 1 else 'es'}!"
        if self.status is SessionStatus.LOST:
            return f"Game over. The word was {self.definition.solution}."
        return ''

    def win_summary(self) -> Optional[WinSummary]:
        """Shareable result grid, only once the puzzle is solved."""
        if self.status is not SessionStatus.WON:
            return None
        return WinSummary(
            guess_count=len(self._guesses),
            max_guesses=self.definition.max_guesses,
            rows=tuple(self._evaluations),
        )

    def snapshot(self) -> GameState:
        """Returns the current game state (without revealing the answer mid-game)."""
        definition = self.definition
        return GameState(
            game_id=self.game_id,
            status=self.status.value,
            word_length=definition.word_length if definition else 0,
            max_guesses=definition.max_guesses if definition else 0,
            guesses=list(self._guesses),
            evaluations=[[status.value for status in row] for row in self._evaluations],
            letter_status={letter: status.value for letter, status in self._knowledge.items()},
            current_input=self._current_input,
            title=definition.title if definition else '',
            hint=definition.hint if definition else '',
            message=self.status_message,
            answer=definition.solution if self.status.is_terminal else None,
        )


class GameService:
    """
    Core game service managing multiple puzzle sessions.

    This class handles:
    - Puzzle creation and token encoding
    - Puzzle loading from share tokens
    - Session management with unique game IDs
    - Keypress and guess handling without exposing answers to clients
    """

    def __init__(self, codec: Optional[PuzzleCodec] = None):
        self.codec = codec or PuzzleCodec()
        self.games: Dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def create_puzzle(self, word: str, max_guesses=None, title: Optional[str] = None,
                      hint: Optional[str] = None) -> Tuple[PuzzleDefinition, str]:
        """
        Validates creator input and seals it into a puzzle token.

        Raises:
            InvalidDefinition: With a user-facing message when the input is rejected
        """
        definition = PuzzleDefinition.from_creator_input(word, max_guesses, title, hint)
        return definition, self.codec.encode(definition)

    def load_puzzle(self, token: str) -> str:
        """
        Decodes a puzzle token and starts a new session for it.

        Returns:
            str: Unique game ID for this session

        Raises:
            PuzzleCodecError: If the token cannot be decoded
        """
        definition = self.codec.decode(token)
        game_id = str(uuid.uuid4())
        session = GameSession(game_id)
        session.start(definition)
        with self._lock:
            self.games[game_id] = session
        return game_id

    def get_session(self, game_id: str) -> Optional[GameSession]:
        with self._lock:
            return self.games.get(game_id)

    def get_game_state(self, game_id: str) -> Optional[GameState]:
        session = self.get_session(game_id)
        return session.snapshot() if session else None

    def press_key(self, game_id: str, key: str) -> Tuple[Optional[GameState], str]:
        """
        Applies a keypress to a session.

        Returns:
            Tuple of (state, error_message); state is None if the game does not exist
        """
        session = self.get_session(game_id)
        if session is None:
            return None, "Game not found"
        try:
            session.press_key(key)
        except (WrongLength, SessionNotActive) as e:
            return session.snapshot(), str(e)
        return session.snapshot(), ""

    def make_guess(self, game_id: str, guess: Optional[str] = None) -> Tuple[Optional[GameState], str]:
        """
        Submits a whole guess (or the pending input when guess is None).

        Returns:
            Tuple of (state, error_message); state is None if the game does not exist
        """
        session = self.get_session(game_id)
        if session is None:
            return None, "Game not found"
        if not session.is_playing:
            return session.snapshot(), "Game is already over"

        try:
            if guess is None:
                session.submit_guess()
            else:
                session.submit_word(guess)
        except WrongLength as e:
            return session.snapshot(), str(e)
        return session.snapshot(), ""

    def get_win_summary(self, game_id: str) -> Optional[WinSummary]:
        session = self.get_session(game_id)
        return session.win_summary() if session else None

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a game session from memory.

        Returns:
            bool: True if game was deleted, False if not found
        """
        with self._lock:
            return self.games.pop(game_id, None) is not None


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(codec: Optional[PuzzleCodec] = None) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(codec)
    return _game_service
