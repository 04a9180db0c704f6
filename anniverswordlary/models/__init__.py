"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .game import GameState, GameStatus, SubmitResult, Tile, TileStatus, WordInfo, empty_board

__all__ = ['GameState', 'GameStatus', 'SubmitResult', 'Tile', 'TileStatus', 'WordInfo', 'empty_board']
