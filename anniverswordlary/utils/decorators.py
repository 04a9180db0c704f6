"""
Request Decorators

Contains decorators that resolve game sessions for HTTP and WebSocket handlers.
"""

from functools import wraps
from flask import jsonify, request
from flask_socketio import emit


def require_game(f):
    """
    Decorator for HTTP endpoints taking a ``game_id`` URL parameter.

    Passes the resolved WordleGame as the ``game`` keyword argument, or
    answers with a JSON error when the service or the game is missing.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        from ..services.game_service import get_game_service

        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        game = game_service.get_game(kwargs.get('game_id'))
        if game is None:
            return jsonify({
                'success': False,
                'error': 'Game not found'
            }), 404

        kwargs['game'] = game
        return f(*args, **kwargs)

    return decorated_function


def json_object_body(f):
    """
    Decorator for HTTP endpoints whose optional JSON body must be an object.

    Arrays, strings and other bare JSON values are answered with a 400.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        data = request.get_json(silent=True)
        if data is not None and not isinstance(data, dict):
            return jsonify({
                'success': False,
                'error': 'Request body must be a JSON object'
            }), 400
        return f(*args, **kwargs)

    return decorated_function


def websocket_game_required(f):
    """Decorator for WebSocket events whose payload carries a ``game_id``."""
    @wraps(f)
    def decorated_function(data=None, *args, **kwargs):
        from ..services.game_service import get_game_service

        game_service = get_game_service()
        if not game_service:
            emit('error', {'error': 'Game service unavailable'})
            return

        game_id = data.get('game_id') if isinstance(data, dict) else None
        if not game_id:
            emit('error', {'error': 'Game ID is required'})
            return

        game = game_service.get_game(game_id)
        if game is None:
            emit('error', {'error': 'Game not found', 'game_id': game_id})
            return

        kwargs['game_id'] = game_id
        kwargs['game'] = game
        return f(data, *args, **kwargs)

    return decorated_function
