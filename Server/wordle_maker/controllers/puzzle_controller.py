"""
Puzzle Controller

Handles the puzzle creation flow: validating the secret word and issuing
shareable links.
"""

from flask import Blueprint, current_app, jsonify, request

from ..config.game_settings import get_rule_summary
from ..errors import InvalidDefinition
from ..services.game_service import get_game_service
from ..utils.game_logger import game_logger
from ..utils.helpers import build_share_url

puzzle_bp = Blueprint('puzzle', __name__)


@puzzle_bp.route('/puzzles/rules', methods=['GET'])
def get_rules():
    """Word and guess limits for the creation form."""
    return jsonify({'success': True, 'rules': get_rule_summary()})


@puzzle_bp.route('/puzzles', methods=['POST'])
def create_puzzle():
    """Encrypt a new puzzle and return its share link."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        data = request.get_json(silent=True) or {}
        word = data.get('word')
        if not isinstance(word, str):
            word = ''

        game_logger.log_user_action(
            request, 'create_puzzle',
            word_length=len(word), has_title=bool(data.get('title')), has_hint=bool(data.get('hint'))
        )

        try:
            definition, token = game_service.create_puzzle(
                word, data.get('maxGuesses'), data.get('title'), data.get('hint')
            )
        except InvalidDefinition as e:
            error_response = {
                'success': False,
                'error': str(e)
            }
            game_logger.log_server_response(request, 'create_puzzle', False, error_response)
            return jsonify(error_response), 400

        base_url = current_app.config.get('SHARE_BASE_URL') or request.host_url
        param = current_app.config.get('PUZZLE_PARAM', 'd')
        response_data = {
            'success': True,
            'token': token,
            'share_url': build_share_url(base_url, token, param),
            'puzzle': {
                'word_length': definition.word_length,
                'max_guesses': definition.max_guesses,
                'title': definition.title,
                'hint': definition.hint,
                'language': definition.language
            }
        }

        game_logger.log_server_response(request, 'create_puzzle', True, response_data)
        game_logger.log_game_event(
            None, 'puzzle_created', request.remote_addr,
            word_length=definition.word_length, max_guesses=definition.max_guesses
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'create_puzzle')
        error_response = {
            'success': False,
            'error': 'Encryption failed. Please try again.'
        }
        game_logger.log_server_response(request, 'create_puzzle', False, error_response)
        return jsonify(error_response), 500
