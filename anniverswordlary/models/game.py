"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


class TileStatus(Enum):
    """Evaluation status of a single board tile or keyboard key."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"
    EMPTY = "empty"
    TBD = "tbd"  # Pending input, not yet evaluated


class GameStatus(Enum):
    """Lifecycle status of a game. WON and LOST are terminal."""
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class Tile:
    """One letter-cell on the board."""
    letter: str = ""
    status: TileStatus = TileStatus.EMPTY

    def to_dict(self) -> dict:
        return {'letter': self.letter, 'status': self.status.value}


Row = Tuple[Tile, ...]
Board = Tuple[Row, ...]


def empty_board(max_rows: int, word_length: int) -> Board:
    """Create a board pre-filled with empty tiles."""
    return tuple(tuple(Tile() for _ in range(word_length)) for _ in range(max_rows))


@dataclass(frozen=True)
class GameState:
    """Point-in-time copy of a game's persistent state."""
    board: Board
    current_row: int
    target_word: str
    status: GameStatus
    message: str = ""


@dataclass(frozen=True)
class SubmitResult:
    """Outcome of a guess submission."""
    accepted: bool
    guess: str
    status: GameStatus
    message: str
    statuses: List[TileStatus] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'accepted': self.accepted,
            'guess': self.guess,
            'status': self.status.value,
            'message': self.message,
            'statuses': [status.value for status in self.statuses]
        }


@dataclass
class WordInfo:
    """Dictionary-style details about a word, shown once a game is over."""
    word: str
    definition: str
    example: str
    etymology: Optional[str] = None
