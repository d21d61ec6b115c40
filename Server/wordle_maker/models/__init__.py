"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import (
    GameState, GuessEvaluation, KnowledgeMap, LetterStatus, PuzzleDefinition,
    SessionStatus, WinSummary
)

__all__ = [
    'GameState', 'GuessEvaluation', 'KnowledgeMap', 'LetterStatus',
    'PuzzleDefinition', 'SessionStatus', 'WinSummary'
]
