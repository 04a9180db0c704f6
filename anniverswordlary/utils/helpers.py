"""
Helper Functions

Contains utility functions used throughout the application.
"""

from typing import Dict, Optional
from flask import request


def get_user_identity(request_obj=None) -> Dict[str, Optional[str]]:
    """Extract user identity information from an HTTP or WebSocket request."""
    if request_obj is None:
        request_obj = request

    user_ip = getattr(request_obj, 'remote_addr', None) or 'unknown'

    return {
        'user_ip': user_ip,
        'session_id': getattr(request_obj, 'sid', None)  # Only set for WebSocket events
    }


def guess_from_payload(data: Optional[Dict]) -> Optional[str]:
    """Pull an optional full-word guess out of a JSON body."""
    if not isinstance(data, dict):
        return None
    guess = data.get('guess')
    if guess is None:
        return None
    return str(guess).strip().upper()


def validate_guess_word(guess: str, word_length: int) -> Optional[str]:
    """
    Checks a full-word guess sent by a client.

    Returns:
        Error message, or None when the guess can be typed into the row
    """
    if guess and not guess.isalpha():
        return "Guess must contain only letters"
    if len(guess) > word_length:
        return f"Guess must be exactly {word_length} letters"
    return None
