"""
Services Package

Contains all business logic and service classes.
"""

from .evaluator import evaluate, is_winning_result
from .game_service import GameService, WordleGame, get_game_service, initialize_game_service
from .hint_service import HintService, get_hint_service, initialize_hint_service

__all__ = [
    'evaluate', 'is_winning_result',
    'GameService', 'WordleGame', 'get_game_service', 'initialize_game_service',
    'HintService', 'get_hint_service', 'initialize_hint_service'
]
