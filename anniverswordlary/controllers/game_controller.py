"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from dataclasses import asdict
from flask import Blueprint, request, jsonify
from ..config.game_settings import (
    WORD_LENGTH, MAX_ROWS, NOT_ENOUGH_LETTERS_MESSAGE, get_keyboard_layout
)
from ..models.game import GameStatus
from ..services.game_service import get_game_service
from ..services.hint_service import get_hint_service
from ..utils.decorators import json_object_body, require_game
from ..utils.game_logger import game_logger
from ..utils.helpers import guess_from_payload, validate_guess_word

game_bp = Blueprint('game', __name__)


def _log_game_outcome(game_id, game, guess):
    """Record a GAME_EVENT when a submission ended the game."""
    if not game.is_over:
        return
    event = 'game_won' if game.status is GameStatus.WON else 'game_lost'
    game_logger.log_game_event(
        game_id, event, request.remote_addr,
        rows_used=game.current_row, target_word=game.target_word, final_guess=guess
    )


@game_bp.route('/new_game', methods=['POST'])
def new_game():
    """Create a new game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        game_logger.log_user_action(request, 'new_game')

        game_id = game_service.create_new_game()
        state = game_service.get_game_state(game_id)

        hint_service = get_hint_service()
        hint = hint_service.initial_hint(game_service.get_game(game_id).target_word) if hint_service else None

        response_data = {
            'success': True,
            'game_id': game_id,
            'state': state,
            'hint': hint
        }

        game_logger.log_server_response(
            request, 'new_game', True, response_data, game_id,
            word_length=state['word_length'], max_rows=state['max_rows']
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'new_game')
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'new_game', False, error_response)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/state', methods=['GET'])
@require_game
def get_state(game_id, game):
    """Get current game state."""
    try:
        game_logger.log_user_action(request, 'get_state', game_id)

        response_data = {
            'success': True,
            'state': get_game_service().get_game_state(game_id)
        }

        game_logger.log_server_response(
            request, 'get_state', True, response_data, game_id,
            current_row=game.current_row, status=game.status.value
        )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_state', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_state', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/key', methods=['POST'])
@require_game
@json_object_body
def press_key(game_id, game):
    """Apply one keystroke (letter, DEL/BACKSPACE or ENTER)."""
    try:
        data = request.get_json(silent=True) or {}
        key = data.get('key')
        if not isinstance(key, str) or not key:
            error_response = {
                'success': False,
                'error': 'Key is required'
            }
            game_logger.log_server_response(request, 'key_press', False, error_response, game_id)
            return jsonify(error_response), 400

        game_logger.log_user_action(request, 'key_press', game_id, key=key)

        # Typing dismisses a pending "Not enough letters"
        game.clear_message(NOT_ENOUGH_LETTERS_MESSAGE)
        result = game.press_key(key)
        if result is not None and result.accepted:
            _log_game_outcome(game_id, game, result.guess)

        response_data = {
            'success': True,
            'state': get_game_service().get_game_state(game_id),
            'result': result.to_dict() if result is not None else None
        }

        game_logger.log_server_response(request, 'key_press', True, response_data, game_id)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'key_press', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'key_press', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/guess', methods=['POST'])
@require_game
@json_object_body
def make_guess(game_id, game):
    """Submit the pending row, or a full word sent in the body, as a guess."""
    try:
        game_service = get_game_service()
        guess = guess_from_payload(request.get_json(silent=True))

        if game.is_over:
            error_response = {
                'success': False,
                'error': 'Game is already over'
            }
            game_logger.log_server_response(request, 'submit_guess', False, error_response, game_id)
            return jsonify(error_response), 400

        if guess is not None:
            error = validate_guess_word(guess, game.word_length)
            if error:
                error_response = {
                    'success': False,
                    'error': error
                }
                game_logger.log_server_response(
                    request, 'submit_guess', False, error_response, game_id,
                    validation_error=error, attempted_guess=guess
                )
                return jsonify(error_response), 400

        game_logger.log_user_action(
            request, 'submit_guess', game_id,
            guess=guess if guess is not None else game.pending_input
        )

        result = game_service.submit_guess(game_id, guess)
        state = game_service.get_game_state(game_id)

        if not result.accepted:
            error_response = {
                'success': False,
                'error': result.message,
                'state': state
            }
            game_logger.log_server_response(
                request, 'submit_guess', False, error_response, game_id,
                attempted_guess=result.guess
            )
            return jsonify(error_response), 400

        response_data = {
            'success': True,
            'state': state,
            'result': result.to_dict()
        }

        game_logger.log_server_response(
            request, 'submit_guess', True, response_data, game_id,
            guess=result.guess, row=game.current_row, status=game.status.value
        )
        _log_game_outcome(game_id, game, result.guess)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'submit_guess', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'submit_guess', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/reset', methods=['POST'])
@require_game
def reset_game(game_id, game):
    """Start a new game in an existing session."""
    try:
        game_logger.log_user_action(request, 'reset_game', game_id)

        state = get_game_service().reset_game(game_id)
        hint_service = get_hint_service()

        response_data = {
            'success': True,
            'state': state,
            'hint': hint_service.initial_hint(game.target_word) if hint_service else None
        }

        game_logger.log_server_response(request, 'reset_game', True, response_data, game_id)
        game_logger.log_game_event(game_id, 'game_reset', request.remote_addr, game_number=game.game_number)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'reset_game', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'reset_game', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/hint', methods=['POST'])
@require_game
def get_hint(game_id, game):
    """Ask the hint service for a hint about the current game."""
    try:
        hint_service = get_hint_service()
        if not hint_service:
            return jsonify({
                'success': False,
                'error': 'Hint service unavailable'
            }), 500

        if game.is_over:
            error_response = {
                'success': False,
                'error': 'Game is already over'
            }
            game_logger.log_server_response(request, 'get_hint', False, error_response, game_id)
            return jsonify(error_response), 400

        game_logger.log_user_action(request, 'get_hint', game_id, guesses_count=len(game.guesses))

        hint = hint_service.get_hint(game.target_word, game.guesses)

        response_data = {
            'success': True,
            'hint': hint
        }

        game_logger.log_server_response(request, 'get_hint', True, response_data, game_id)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_hint', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_hint', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>/word_info', methods=['GET'])
@require_game
def get_word_info(game_id, game):
    """Details about the answer, available once the game is over."""
    try:
        hint_service = get_hint_service()
        if not hint_service:
            return jsonify({
                'success': False,
                'error': 'Hint service unavailable'
            }), 500

        if not game.is_over:
            error_response = {
                'success': False,
                'error': 'Word details are only available after the game ends'
            }
            game_logger.log_server_response(request, 'get_word_info', False, error_response, game_id)
            return jsonify(error_response), 400

        game_logger.log_user_action(request, 'get_word_info', game_id)

        response_data = {
            'success': True,
            'word_info': asdict(hint_service.get_word_details(game.target_word))
        }

        game_logger.log_server_response(request, 'get_word_info', True, response_data, game_id)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_word_info', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'get_word_info', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/game/<game_id>', methods=['DELETE'])
def delete_game(game_id):
    """Delete a game session."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        game_logger.log_user_action(request, 'delete_game', game_id)

        success = game_service.delete_game(game_id)

        response_data = {
            'success': success
        }

        game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)

        if success:
            game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr)

        return jsonify(response_data), (200 if success else 404)

    except Exception as e:
        game_logger.log_error(request, e, 'delete_game', game_id)
        error_response = {
            'success': False,
            'error': str(e)
        }
        game_logger.log_server_response(request, 'delete_game', False, error_response, game_id)
        return jsonify(error_response), 500


@game_bp.route('/config', methods=['GET'])
def get_config():
    """Board dimensions and keyboard layout for the front end."""
    game_service = get_game_service()
    return jsonify({
        'success': True,
        'word_length': game_service.word_length if game_service else WORD_LENGTH,
        'max_rows': game_service.max_rows if game_service else MAX_ROWS,
        'keyboard': get_keyboard_layout()
    })


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    try:
        game_service = get_game_service()
        hint_service = get_hint_service()

        game_logger.log_user_action(request, 'health_check')

        response_data = {
            'status': 'healthy',
            'active_games': len(game_service.games) if game_service else 0,
            'log_stats': game_logger.get_log_stats(),
            'hints_enabled': bool(hint_service and hint_service.enabled)
        }

        game_logger.log_server_response(request, 'health_check', True, response_data)

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'health_check')
        error_response = {
            'status': 'error',
            'error': str(e)
        }
        game_logger.log_server_response(request, 'health_check', False, error_response)
        return jsonify(error_response), 500
