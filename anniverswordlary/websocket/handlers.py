"""
WebSocket Event Handlers

Handles all WebSocket events for real-time keyboard play.
"""

from dataclasses import asdict
from flask import request, current_app
from flask_socketio import emit, join_room, leave_room
from ..config.game_settings import NOT_ENOUGH_LETTERS_MESSAGE
from ..models.game import GameStatus
from ..services.game_service import get_game_service
from ..services.hint_service import get_hint_service
from ..utils.decorators import websocket_game_required
from ..utils.game_logger import game_logger
from ..utils.helpers import guess_from_payload, validate_guess_word

# Games created over a socket, keyed by the sid that created them
session_games = {}  # sid -> set of game ids


def game_room(game_id):
    return f"game_{game_id}"


def broadcast_game_state_update(socketio, game_id):
    """Send the latest snapshot of a game to everyone watching it."""
    game_service = get_game_service()
    if not game_service:
        return
    state = game_service.get_game_state(game_id)
    if state is None:
        return
    socketio.emit('game_state_update', {
        'success': True,
        'state': state
    }, to=game_room(game_id))


def deliver_hint(socketio, game_id, target_word, game_number, guesses):
    """
    Background task: fetch a hint and publish it if the game is still current.

    Returns:
        bool: True if the hint was emitted, False if it was discarded as stale
    """
    hint_service = get_hint_service()
    game_service = get_game_service()
    if not hint_service or not game_service:
        return False

    hint = hint_service.get_hint(target_word, guesses)

    if not game_service.is_current(game_id, target_word, game_number):
        game_logger.logger.info(f"Discarded stale hint for game {game_id} (game #{game_number})")
        return False

    socketio.emit('hint_update', {
        'game_id': game_id,
        'game_number': game_number,
        'hint': hint
    }, to=game_room(game_id))
    game_logger.log_game_event(game_id, 'hint_delivered', 'system', game_number=game_number)
    return True


def deliver_word_info(socketio, game_id, target_word, game_number):
    """Background task: fetch word details for a finished game."""
    hint_service = get_hint_service()
    game_service = get_game_service()
    if not hint_service or not game_service:
        return False

    word_info = hint_service.get_word_details(target_word)

    if not game_service.is_current(game_id, target_word, game_number):
        return False

    socketio.emit('word_info_update', {
        'game_id': game_id,
        'game_number': game_number,
        'word_info': asdict(word_info)
    }, to=game_room(game_id))
    return True


def clear_message_later(socketio, game_id, game_number, message, delay):
    """Background task: drop a transient message after ``delay`` seconds."""
    if delay > 0:
        socketio.sleep(delay)

    game_service = get_game_service()
    game = game_service.get_game(game_id) if game_service else None
    if game is None or game.game_number != game_number:
        return False

    if game.clear_message(message):
        broadcast_game_state_update(socketio, game_id)
        return True
    return False


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    def handle_submit_result(game_id, game, result):
        """Shared follow-up for ENTER key presses and full-word submissions."""
        if result.accepted:
            if game.is_over:
                event = 'game_won' if game.status is GameStatus.WON else 'game_lost'
                game_logger.log_game_event(
                    game_id, event, request.remote_addr,
                    rows_used=game.current_row, target_word=game.target_word,
                    final_guess=result.guess
                )
        elif result.message == NOT_ENOUGH_LETTERS_MESSAGE:
            emit('guess_rejected', {
                'game_id': game_id,
                'error': result.message
            })
            socketio.start_background_task(
                clear_message_later, socketio, game_id, game.game_number,
                result.message, current_app.config.get('MESSAGE_CLEAR_SECONDS', 1.0)
            )

    @socketio.on('connect')
    def handle_connect():
        """Handle WebSocket connection."""
        game_logger.logger.info(f"WebSocket: client connected ({request.sid})")

    @socketio.on('disconnect')
    def handle_disconnect(reason=None):
        """Handle WebSocket disconnection."""
        game_logger.logger.info(f"WebSocket: client disconnected ({request.sid})")

        game_service = get_game_service()
        owned = session_games.pop(request.sid, set())
        if not game_service:
            return
        for game_id in owned:
            if game_service.delete_game(game_id):
                game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr, reason='disconnect')

    @socketio.on('join_game')
    def handle_join_game(data=None):
        """Attach to an existing game, or start a new one if none is given."""
        try:
            game_service = get_game_service()
            if not game_service:
                emit('error', {'error': 'Game service unavailable'})
                return

            game_id = data.get('game_id') if isinstance(data, dict) else None
            if not game_id or game_service.get_game(game_id) is None:
                game_id = game_service.create_new_game()
                session_games.setdefault(request.sid, set()).add(game_id)
                game_logger.log_user_action(request, 'new_game', game_id, transport='websocket')

            join_room(game_room(game_id))

            hint_service = get_hint_service()
            game = game_service.get_game(game_id)

            emit('game_state_update', {
                'success': True,
                'state': game_service.get_game_state(game_id),
                'hint': hint_service.initial_hint(game.target_word) if hint_service else None
            })

        except Exception as e:
            game_logger.log_error(request, e, 'join_game')
            emit('error', {'error': str(e)})

    @socketio.on('leave_game')
    @websocket_game_required
    def handle_leave_game(data, game_id=None, game=None):
        """Stop receiving updates for a game."""
        leave_room(game_room(game_id))

    @socketio.on('key_press')
    @websocket_game_required
    def handle_key_press(data, game_id=None, game=None):
        """Apply a single keystroke from the on-screen or physical keyboard."""
        try:
            key = data.get('key')
            if not isinstance(key, str) or not key:
                emit('error', {'error': 'Key is required', 'game_id': game_id})
                return

            game.clear_message(NOT_ENOUGH_LETTERS_MESSAGE)
            result = game.press_key(key)
            if result is not None:
                game_logger.log_user_action(request, 'submit_guess', game_id, guess=result.guess)
                handle_submit_result(game_id, game, result)

            broadcast_game_state_update(socketio, game_id)

        except Exception as e:
            game_logger.log_error(request, e, 'key_press', game_id)
            emit('error', {'error': str(e), 'game_id': game_id})

    @socketio.on('submit_guess')
    @websocket_game_required
    def handle_submit_guess(data, game_id=None, game=None):
        """Submit the pending row, or a full word carried in the payload."""
        try:
            if game.is_over:
                emit('error', {'error': 'Game is already over', 'game_id': game_id})
                return

            guess = guess_from_payload(data)
            if guess is not None:
                error = validate_guess_word(guess, game.word_length)
                if error:
                    emit('error', {'error': error, 'game_id': game_id})
                    return

            game_logger.log_user_action(request, 'submit_guess', game_id, guess=guess)

            result = get_game_service().submit_guess(game_id, guess)
            handle_submit_result(game_id, game, result)

            broadcast_game_state_update(socketio, game_id)

        except Exception as e:
            game_logger.log_error(request, e, 'submit_guess', game_id)
            emit('error', {'error': str(e), 'game_id': game_id})

    @socketio.on('new_game')
    @websocket_game_required
    def handle_new_game(data, game_id=None, game=None):
        """Start over in the same session."""
        try:
            game.new_game()
            game_logger.log_game_event(game_id, 'game_reset', request.remote_addr, game_number=game.game_number)

            hint_service = get_hint_service()
            socketio.emit('game_state_update', {
                'success': True,
                'state': get_game_service().get_game_state(game_id),
                'hint': hint_service.initial_hint(game.target_word) if hint_service else None
            }, to=game_room(game_id))

        except Exception as e:
            game_logger.log_error(request, e, 'new_game', game_id)
            emit('error', {'error': str(e), 'game_id': game_id})

    @socketio.on('request_hint')
    @websocket_game_required
    def handle_request_hint(data, game_id=None, game=None):
        """Ask for a hint without blocking further key presses."""
        if game.is_over:
            emit('error', {'error': 'Game is already over', 'game_id': game_id})
            return

        game_logger.log_user_action(request, 'request_hint', game_id, guesses_count=len(game.guesses))
        socketio.start_background_task(
            deliver_hint, socketio, game_id, game.target_word, game.game_number, game.guesses
        )

    @socketio.on('request_word_info')
    @websocket_game_required
    def handle_request_word_info(data, game_id=None, game=None):
        """Fetch details about the answer once the game has ended."""
        if not game.is_over:
            emit('error', {'error': 'Word details are only available after the game ends', 'game_id': game_id})
            return

        game_logger.log_user_action(request, 'request_word_info', game_id)
        socketio.start_background_task(
            deliver_word_info, socketio, game_id, game.target_word, game.game_number
        )
