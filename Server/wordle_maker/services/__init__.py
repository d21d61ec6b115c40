"""
Services Package

Contains all business logic and service classes.
"""

from .cipher import AuthenticatedCipher, SealedPayload, get_cipher
from .evaluator import evaluate_guess, fold_knowledge
from .game_service import GameService, GameSession, get_game_service, initialize_game_service
from .puzzle_codec import PuzzleCodec, decode_puzzle, encode_puzzle

__all__ = [
    'AuthenticatedCipher', 'SealedPayload', 'get_cipher',
    'evaluate_guess', 'fold_knowledge',
    'GameService', 'GameSession', 'get_game_service', 'initialize_game_service',
    'PuzzleCodec', 'decode_puzzle', 'encode_puzzle'
]
