"""
Game Configuration Constants Module

This module defines the board dimensions, the fixed answer, the keyboard
layout and every player-facing string in one place so that the game rules
can be changed without touching the state machine.
"""

from typing import Dict, List, Final

# Core Game Configuration Constants
WORD_LENGTH: Final[int] = 6
"""
Number of letters in the target word and in every guess.
Type: Final[int] - Immutable to prevent accidental modification
"""

MAX_ROWS: Final[int] = 6
"""
Maximum number of guess attempts allowed per game.
"""

TARGET_WORD: Final[str] = "GOSSIP"

# Reference word list. The game always plays TARGET_WORD; the list is kept
# so that alternative targets can be validated against the same rules.
WORD_LIST: Final[List[str]] = [
    "GOSSIP", "PLAYER", "CODING", "ACTIVE", "BRIDGE", "BRIGHT", "CAMERA", "DANGER", "ENERGY", "FLOWER",
    "GARDEN", "HEALTH", "ISLAND", "JUNGLE", "KNIGHT", "MARKET", "NATURE", "ORANGE", "PLANET", "QUARTZ",
    "SPIRIT", "THEORY", "UNIQUE", "VALLEY", "WINDOW", "YELLOW", "ZENITH", "ASPECT", "BEYOND",
]

KEYBOARD_ROWS: Final[List[List[str]]] = [
    ['Q', 'W', 'E', 'R', 'T', 'Y', 'U', 'I', 'O', 'P'],
    ['A', 'S', 'D', 'F', 'G', 'H', 'J', 'K', 'L'],
    ['ENTER', 'Z', 'X', 'C', 'V', 'B', 'N', 'M', 'DEL'],
]

ENTER_KEY: Final[str] = 'ENTER'
DELETE_KEYS: Final[frozenset] = frozenset({'DEL', 'DELETE', 'BACKSPACE'})

# Player-facing messages
WIN_MESSAGE: Final[str] = "YAYYYY SMART BABYGIRL"
LOSS_MESSAGE_TEMPLATE: Final[str] = "The word was {target}"
NOT_ENOUGH_LETTERS_MESSAGE: Final[str] = "Not enough letters"

# Hints known ahead of time, keyed by target word
PRESET_HINTS: Final[Dict[str, str]] = {
    "GOSSIP": "Something we do; something we watch",
}
FALLBACK_HINT: Final[str] = "Think of something common in social interactions."
FALLBACK_DEFINITION: Final[str] = "A 6-letter word often used in puzzles."
FALLBACK_EXAMPLE: Final[str] = "They shared some juicy gossip."


def validate_word_list_integrity(word_list: List[str] = WORD_LIST, word_length: int = WORD_LENGTH) -> bool:
    """
    Validates the integrity and consistency of the word database.

    This function performs validation to ensure:
    1. Length validation: All words must be exactly ``word_length`` characters
    2. Character validation: Only alphabetic characters allowed
    3. Uniqueness validation: No duplicate entries
    4. Format validation: Consistent uppercase formatting

    Returns:
        bool: True if word list passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    if not word_list:
        raise ValueError("Word list cannot be empty")

    for index, word in enumerate(word_list):
        if len(word) != word_length:
            raise ValueError(f"Word at index {index} '{word}' is not {word_length} characters long")

        if not word.isalpha():
            raise ValueError(f"Word at index {index} '{word}' contains non-alphabetic characters")

        if not word.isupper():
            raise ValueError(f"Word at index {index} '{word}' is not in uppercase format")

    if len(word_list) != len(set(word_list)):
        duplicates = sorted({word for word in word_list if word_list.count(word) > 1})
        raise ValueError(f"Duplicate words found in word list: {duplicates}")

    return True


def get_keyboard_layout() -> List[List[str]]:
    """Return a copy of the on-screen keyboard layout."""
    return [row.copy() for row in KEYBOARD_ROWS]


if __name__ == "__main__":

    try:
        validate_word_list_integrity()
        print(" Word list validation passed")

        if TARGET_WORD not in WORD_LIST:
            raise ValueError(f"Target word {TARGET_WORD} is not in the word list")

        print(" All configuration validation checks passed")
    except ValueError as config_error:
        print(f" Configuration validation failed: {config_error}")
        exit(1)
