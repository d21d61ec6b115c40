"""
WebSocket Event Handlers

Streams keypresses into puzzle sessions and pushes the updated state back.
"""

from dataclasses import asdict

from flask import request
from flask_socketio import emit, join_room, leave_room

from ..errors import PuzzleCodecError
from ..services.game_service import get_game_service
from ..utils.game_logger import game_logger


def _room(game_id):
    return f"game_{game_id}"


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    @socketio.on('start_puzzle')
    def handle_start_puzzle(data):
        """Decode a puzzle token and join the new game's room."""
        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return

        token = (data or {}).get('token')
        if not token or not isinstance(token, str):
            emit('error', {'error': 'No puzzle in link'})
            return

        try:
            game_id = game_service.load_puzzle(token)
        except PuzzleCodecError as e:
            game_logger.log_game_event(
                None, 'puzzle_decode_failed', request.remote_addr,
                failure_kind=e.kind, detail=str(e), transport='websocket'
            )
            emit('error', {'error': PuzzleCodecError.USER_MESSAGE})
            return

        join_room(_room(game_id))
        game_logger.log_game_event(game_id, 'puzzle_loaded', request.remote_addr, transport='websocket')

        emit('game_state_update', {
            'success': True,
            'game_id': game_id,
            'state': asdict(game_service.get_game_state(game_id))
        })

    @socketio.on('key_press')
    def handle_key_press(data):
        """Apply one keypress and broadcast the new state to the game's room."""
        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return

        data = data or {}
        game_id = data.get('game_id')
        key = data.get('key')
        if not game_id or not isinstance(key, str):
            emit('error', {'error': 'Game ID and key are required'})
            return

        state, error = game_service.press_key(game_id, key)
        if state is None:
            emit('error', {'error': error})
            return

        # Sockets playing a game loaded over HTTP join its room on first use
        join_room(_room(game_id))

        payload = {
            'success': not error,
            'game_id': game_id,
            'state': asdict(state)
        }
        if error:
            # Rejections are transient and go to the sender only
            payload['error'] = error
            emit('game_state_update', payload)
            return

        emit('game_state_update', payload, room=_room(game_id))

        if state.game_over and key.upper() == 'ENTER':
            game_logger.log_game_event(
                game_id, 'game_won' if state.status == 'won' else 'game_lost', request.remote_addr,
                guesses_used=len(state.guesses), max_guesses=state.max_guesses, transport='websocket'
            )

    @socketio.on('leave_puzzle')
    def handle_leave_puzzle(data):
        """Leave a game's room and drop the session."""
        game_id = (data or {}).get('game_id')
        if not game_id:
            emit('error', {'error': 'Game ID is required'})
            return

        leave_room(_room(game_id))
        game_service = get_game_service()
        if game_service:
            game_service.delete_game(game_id)
        game_logger.logger.info(f"WebSocket: left puzzle game {game_id}")
