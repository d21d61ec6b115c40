"""
Game Controller

Handles all gameplay HTTP endpoints for loaded puzzles.
"""

from dataclasses import asdict

from flask import Blueprint, current_app, jsonify, request

from ..errors import PuzzleCodecError
from ..services.game_service import get_game_service
from ..utils.game_logger import game_logger
from ..utils.helpers import extract_token

game_bp = Blueprint('game', __name__)


def _service_unavailable():
    return jsonify({
        'success': False,
        'error': 'Game service unavailable'
    }), 500


def _game_not_found(action, game_id):
    error_response = {
        'success': False,
        'error': 'Game not found'
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 404


def _log_game_over(game_id, state, guess):
    if not state.game_over:
        return
    game_logger.log_game_event(
        game_id, 'game_won' if state.status == 'won' else 'game_lost', request.remote_addr,
        guesses_used=len(state.guesses), max_guesses=state.max_guesses, final_guess=guess
    )


@game_bp.route('/games', methods=['POST'])
def load_puzzle():
    """Decode a puzzle token (or share link) and start a game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True) or {}
        param = current_app.config.get('PUZZLE_PARAM', 'd')
        token = data.get('token') or extract_token(data.get('url'), param)

        game_logger.log_user_action(
            request, 'load_puzzle', token_length=len(token) if isinstance(token, str) else 0
        )

        if not token or not isinstance(token, str):
            error_response = {
                'success': False,
                'error': 'No puzzle in link'
            }
            game_logger.log_server_response(request, 'load_puzzle', False, error_response)
            return jsonify(error_response), 400

        try:
            game_id = game_service.load_puzzle(token)
        except PuzzleCodecError as e:
            # The failure kind is for the log only
            game_logger.log_game_event(
                None, 'puzzle_decode_failed', request.remote_addr,
                failure_kind=e.kind, detail=str(e)
            )
            error_response = {
                'success': False,
                'error': PuzzleCodecError.USER_MESSAGE
            }
            game_logger.log_server_response(request, 'load_puzzle', False, error_response)
            return jsonify(error_response), 400

        state = game_service.get_game_state(game_id)
        response_data = {
            'success': True,
            'game_id': game_id,
            'state': asdict(state)
        }

        game_logger.log_server_response(
            request, 'load_puzzle', True, response_data, game_id,
            word_length=state.word_length, max_guesses=state.max_guesses
        )
        game_logger.log_game_event(game_id, 'puzzle_loaded', request.remote_addr)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'load_puzzle')
        error_response = {
            'success': False,
            'error': PuzzleCodecError.USER_MESSAGE
        }
        game_logger.log_server_response(request, 'load_puzzle', False, error_response)
        return jsonify(error_response), 500


@game_bp.route('/games/<game_id>/state', methods=['GET'])
def get_state(game_id):
    """Get current game state."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'get_state', game_id)

        state = game_service.get_game_state(game_id)
        if state is None:
            return _game_not_found('get_state', game_id)

        response_data = {
            'success': True,
            'state': asdict(state)
        }
        game_logger.log_server_response(request, 'get_state', True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_state', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_state', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/games/<game_id>/key', methods=['POST'])
def press_key(game_id):
    """Apply a single keypress (letter, BACKSPACE or ENTER)."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True) or {}
        key = data.get('key')
        if not key or not isinstance(key, str):
            error_response = {
                'success': False,
                'error': 'Key is required'
            }
            game_logger.log_server_response(request, 'press_key', False, error_response, game_id)
            return jsonify(error_response), 400

        game_logger.log_user_action(request, 'press_key', game_id, key=key.upper()[:9])

        state, error = game_service.press_key(game_id, key)
        if state is None:
            return _game_not_found('press_key', game_id)

        response_data = {
            'success': not error,
            'state': asdict(state)
        }
        if error:
            response_data['error'] = error
        game_logger.log_server_response(request, 'press_key', not error, response_data, game_id)

        if key.upper() == 'ENTER' and not error:
            _log_game_over(game_id, state, state.guesses[-1] if state.guesses else None)

        return jsonify(response_data), 400 if error else 200

    except Exception as e:
        game_logger.log_error(request, e, 'press_key', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'press_key', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/games/<game_id>/guess', methods=['POST'])
def make_guess(game_id):
    """Submit a guess for evaluation; without a body the pending input is submitted."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        data = request.get_json(silent=True) or {}
        guess = data.get('guess')
        if guess is not None and not isinstance(guess, str):
            error_response = {
                'success': False,
                'error': 'Guess must be a valid string'
            }
            game_logger.log_server_response(request, 'submit_guess', False, error_response, game_id)
            return jsonify(error_response), 400

        game_logger.log_user_action(
            request, 'submit_guess', game_id,
            guess_length=len(guess) if guess is not None else None
        )

        state, error = game_service.make_guess(game_id, guess)
        if state is None:
            return _game_not_found('submit_guess', game_id)

        if error:
            error_response = {
                'success': False,
                'error': error,
                'state': asdict(state)
            }
            game_logger.log_server_response(
                request, 'submit_guess', False, error_response, game_id, validation_error=error
            )
            return jsonify(error_response), 400

        response_data = {
            'success': True,
            'state': asdict(state)
        }
        game_logger.log_server_response(
            request, 'submit_guess', True, response_data, game_id,
            round=len(state.guesses), game_over=state.game_over
        )
        _log_game_over(game_id, state, state.guesses[-1])

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'submit_guess', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'submit_guess', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/games/<game_id>/share', methods=['GET'])
def share_result(game_id):
    """Plain-text result grid for a solved puzzle."""
    game_service = get_game_service()
    if not game_service:
        return _service_unavailable()

    game_logger.log_user_action(request, 'share_result', game_id)

    if game_service.get_session(game_id) is None:
        return _game_not_found('share_result', game_id)

    summary = game_service.get_win_summary(game_id)
    if summary is None:
        error_response = {
            'success': False,
            'error': 'Results can only be shared after solving the puzzle'
        }
        game_logger.log_server_response(request, 'share_result', False, error_response, game_id)
        return jsonify(error_response), 400

    response_data = {
        'success': True,
        'guess_count': summary.guess_count,
        'max_guesses': summary.max_guesses,
        'text': summary.to_share_text()
    }
    game_logger.log_server_response(request, 'share_result', True, response_data, game_id)
    return jsonify(response_data)


@game_bp.route('/games/<game_id>', methods=['DELETE'])
def delete_game(game_id):
    """Delete a game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return _service_unavailable()

        game_logger.log_user_action(request, 'delete_game', game_id)

        success = game_service.delete_game(game_id)
        response_data = {
            'success': success
        }
        game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)

        return jsonify(response_data), 200 if success else 404

    except Exception as e:
        game_logger.log_error(request, e, 'delete_game', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'delete_game', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    game_service = get_game_service()

    response_data = {
        'status': 'healthy' if game_service else 'degraded',
        'active_games': len(game_service.games) if game_service else 0,
        'log_stats': game_logger.get_log_stats()
    }

    game_logger.log_server_response(request, 'health_check', True, response_data)
    return jsonify(response_data)
