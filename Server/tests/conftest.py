"""Shared fixtures for the puzzle server tests."""

from __future__ import annotations

import os
import tempfile

# Keep test logs out of the working tree; must run before wordle_maker is imported
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="wordle_maker_logs_"))

import pytest

from wordle_maker import create_app
from wordle_maker.config import TestingConfig
from wordle_maker.models.game import PuzzleDefinition
from wordle_maker.services.cipher import AuthenticatedCipher
from wordle_maker.services.game_service import GameSession, initialize_game_service
from wordle_maker.services.puzzle_codec import PuzzleCodec


@pytest.fixture
def cipher() -> AuthenticatedCipher:
    return AuthenticatedCipher(bytes(range(32)))


@pytest.fixture
def codec(cipher) -> PuzzleCodec:
    return PuzzleCodec(cipher)


@pytest.fixture
def crane_session() -> GameSession:
    session = GameSession("test-game")
    session.start(PuzzleDefinition(solution="CRANE", max_guesses=6))
    return session


@pytest.fixture
def game_service():
    return initialize_game_service()


@pytest.fixture
def app_and_socketio(game_service):
    return create_app(TestingConfig)


@pytest.fixture
def client(app_and_socketio):
    app, _ = app_and_socketio
    return app.test_client()
