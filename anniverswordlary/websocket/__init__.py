"""
WebSocket Package

Real-time event handlers for keyboard play.
"""

from .handlers import register_websocket_handlers

__all__ = ['register_websocket_handlers']
