"""
Error Types

Structured exceptions raised by the puzzle codec and the game session engine.
"""

from typing import Any, Dict


class WordleMakerError(Exception):
    """Base class for all application errors."""

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {'type': self.__class__.__name__, 'message': str(self)}


class ConfigurationError(WordleMakerError):
    """Raised when deployment configuration (e.g. the puzzle key) is unusable."""


class PuzzleCodecError(WordleMakerError):
    """
    Base class for every way a puzzle token can fail to decode.

    The concrete subclass is kept for diagnostics only. Anything shown to
    the player uses USER_MESSAGE so bad format and bad authentication look
    the same from outside.
    """

    USER_MESSAGE = 'Could not decode puzzle link. Double-check that the URL is complete.'
    kind = 'codec_error'


class MalformedInput(PuzzleCodecError):
    """Raised when transport text or the inner payload structure cannot be interpreted."""

    kind = 'malformed_input'


class AuthenticationFailure(PuzzleCodecError):
    """Raised when the AES-GCM tag does not verify (tampered, truncated or wrong key)."""

    kind = 'authentication_failure'


class InvalidDefinition(PuzzleCodecError):
    """Raised when puzzle fields violate the puzzle definition rules."""

    kind = 'invalid_definition'


class GameSessionError(WordleMakerError):
    """Base class for recoverable rejections from a game session."""


class WrongLength(GameSessionError):
    """Raised when a guess is submitted with the wrong number of letters."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Guesses must be {expected} letters.")

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload.update({'expected': self.expected, 'actual': self.actual})
        return payload


class SessionNotActive(GameSessionError):
    """Raised when a session that is idle or finished is asked to act."""

    def __init__(self, status: str, action: str):
        self.status = status
        self.action = action
        super().__init__(f"Cannot {action} while game is {status}")
