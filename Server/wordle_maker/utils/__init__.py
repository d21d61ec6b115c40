"""
Utilities Package

Contains utility functions and helper modules.
"""

from .helpers import (
    build_share_url, clamp_guesses, extract_token, get_user_identity, sanitize_word
)
from .game_logger import game_logger

__all__ = [
    'build_share_url', 'clamp_guesses', 'extract_token', 'get_user_identity',
    'sanitize_word', 'game_logger'
]
