"""
Game Service

Contains the single-player game state machine and the registry of
active game sessions.
"""

import threading
import uuid
from functools import wraps
from typing import Dict, List, Optional
from .evaluator import evaluate
from ..models.game import (
    Board, GameState, GameStatus, SubmitResult, Tile, TileStatus, empty_board
)
from ..config.game_settings import (
    WORD_LENGTH, MAX_ROWS, TARGET_WORD, ENTER_KEY, DELETE_KEYS, WIN_MESSAGE,
    LOSS_MESSAGE_TEMPLATE, NOT_ENOUGH_LETTERS_MESSAGE, get_keyboard_layout
)

# Higher rank wins when several rows disagree about a letter
KEY_STATUS_RANK = {
    TileStatus.EMPTY: 0,
    TileStatus.ABSENT: 1,
    TileStatus.PRESENT: 2,
    TileStatus.CORRECT: 3,
}


def synchronized(method):
    """Run a WordleGame method while holding the game's lock."""
    @wraps(method)
    def wrapper(self, *args, **kwargs):
        with self.lock:
            return method(self, *args, **kwargs)
    return wrapper


class WordleGame:
    """
    Game state machine for one player.

    This class handles:
    - Pending keystrokes for the active row
    - Guess submission and evaluation
    - Win/loss transitions and the player-facing message
    - The keyboard colouring derived from finalized rows
    """

    def __init__(self, target_word: str = TARGET_WORD,
                 word_length: int = WORD_LENGTH, max_rows: int = MAX_ROWS):
        if word_length < 1 or max_rows < 1:
            raise ValueError("Board dimensions must be positive")
        self.word_length = word_length
        self.max_rows = max_rows
        self.game_number = 0
        # Handler threads and background tasks may touch the same game
        self.lock = threading.RLock()
        self.new_game(target_word)

    @synchronized
    def new_game(self, target_word: Optional[str] = None) -> None:
        """
        Resets the board and starts a fresh game. Valid from any state.

        Args:
            target_word: New answer; defaults to the current one
        """
        word = (target_word if target_word is not None else self.target_word).strip().upper()
        if len(word) != self.word_length or not word.isalpha():
            raise ValueError(f"Target word must be {self.word_length} letters, got '{word}'")

        self.target_word = word
        self.board: List[tuple] = list(empty_board(self.max_rows, self.word_length))
        self.current_row = 0
        self.status = GameStatus.PLAYING
        self.message = ""
        self.pending_input = ""
        self.game_number += 1

    @property
    def is_over(self) -> bool:
        return self.status is not GameStatus.PLAYING

    @property
    def guesses(self) -> List[str]:
        """Submitted guesses in the order they were played."""
        return [''.join(tile.letter for tile in row) for row in self.board[:self.current_row]]

    @synchronized
    def press_key(self, key: str) -> Optional[SubmitResult]:
        """
        Applies a single keystroke.

        Letters are appended while the row has room, delete keys drop the
        last pending letter and ENTER submits. Anything else is ignored, as
        is every key once the game is over.

        Returns:
            SubmitResult for ENTER, otherwise None
        """
        if self.is_over or not isinstance(key, str):
            return None

        normalized = key.strip().upper()

        if normalized == ENTER_KEY:
            return self.submit_guess()

        if normalized in DELETE_KEYS:
            self.pending_input = self.pending_input[:-1]
        elif len(normalized) == 1 and 'A' <= normalized <= 'Z':
            if len(self.pending_input) < self.word_length:
                self.pending_input += normalized

        return None

    @synchronized
    def clear_input(self) -> None:
        if not self.is_over:
            self.pending_input = ""

    @synchronized
    def submit_guess(self) -> SubmitResult:
        """
        Submits the pending input as a guess for the current row.

        Returns:
            SubmitResult with accepted=False when the game is over or the
            row is incomplete; the board and row pointer are untouched then
        """
        if self.is_over:
            return SubmitResult(False, self.pending_input, self.status, self.message)

        guess = self.pending_input
        if len(guess) != self.word_length:
            self.message = NOT_ENOUGH_LETTERS_MESSAGE
            return SubmitResult(False, guess, self.status, self.message)

        statuses = evaluate(self.target_word, guess)
        self.board[self.current_row] = tuple(
            Tile(letter, status) for letter, status in zip(guess, statuses)
        )
        self.pending_input = ""

        is_win = guess == self.target_word
        is_last_row = self.current_row == self.max_rows - 1

        if is_win:
            self.status = GameStatus.WON
            self.message = WIN_MESSAGE
        elif is_last_row:
            self.status = GameStatus.LOST
            self.message = LOSS_MESSAGE_TEMPLATE.format(target=self.target_word)
        else:
            self.message = ""

        self.current_row += 1

        return SubmitResult(True, guess, self.status, self.message, statuses)

    @synchronized
    def clear_message(self, expected: Optional[str] = None) -> bool:
        """
        Clears a transient message. Win and loss messages stay put.

        Args:
            expected: Only clear if the current message still equals this

        Returns:
            bool: True if a message was cleared
        """
        if self.is_over or not self.message:
            return False
        if expected is not None and self.message != expected:
            return False
        self.message = ""
        return True

    def display_board(self) -> Board:
        """Board with the pending input overlaid on the active row."""
        board = list(self.board)
        if not self.is_over and self.current_row < self.max_rows:
            row = list(board[self.current_row])
            for i, letter in enumerate(self.pending_input):
                row[i] = Tile(letter, TileStatus.TBD)
            board[self.current_row] = tuple(row)
        return tuple(board)

    def key_statuses(self) -> Dict[str, TileStatus]:
        """
        Best status seen for every letter on the finalized rows.

        Recomputed on each call; CORRECT beats PRESENT beats ABSENT.
        """
        statuses: Dict[str, TileStatus] = {}
        for row_index, row in enumerate(self.board):
            if row_index >= self.current_row and not self.is_over:
                break
            for tile in row:
                if not tile.letter:
                    continue
                current = statuses.get(tile.letter, TileStatus.EMPTY)
                if KEY_STATUS_RANK.get(tile.status, 0) > KEY_STATUS_RANK[current]:
                    statuses[tile.letter] = tile.status
        return statuses

    @synchronized
    def snapshot(self) -> GameState:
        return GameState(
            board=tuple(self.board),
            current_row=self.current_row,
            target_word=self.target_word,
            status=self.status,
            message=self.message
        )

    @synchronized
    def to_dict(self) -> Dict:
        """JSON-friendly view for the presentation layer (answer hidden while playing)."""
        return {
            'game_number': self.game_number,
            'board': [[tile.to_dict() for tile in row] for row in self.display_board()],
            'current_row': self.current_row,
            'status': self.status.value,
            'message': self.message,
            'pending_input': self.pending_input,
            'word_length': self.word_length,
            'max_rows': self.max_rows,
            'guesses': self.guesses,
            'key_statuses': {letter: status.value for letter, status in self.key_statuses().items()},
            'keyboard': get_keyboard_layout(),
            'answer': self.target_word if self.is_over else None
        }


class GameService:
    """
    Registry of active single-player sessions keyed by game ID.

    Each session owns exactly one WordleGame; the service never shares a
    game between sessions.
    """

    def __init__(self, target_word: str = TARGET_WORD,
                 word_length: int = WORD_LENGTH, max_rows: int = MAX_ROWS):
        self.games: Dict[str, WordleGame] = {}
        self.target_word = target_word
        self.word_length = word_length
        self.max_rows = max_rows

    def create_new_game(self, target_word: Optional[str] = None) -> str:
        """
        Creates a new game session.

        Args:
            target_word: Answer for this session; defaults to the configured word

        Returns:
            str: Unique game ID for this session
        """
        game_id = str(uuid.uuid4())
        self.games[game_id] = WordleGame(
            target_word or self.target_word, self.word_length, self.max_rows
        )
        return game_id

    def get_game(self, game_id: str) -> Optional[WordleGame]:
        return self.games.get(game_id)

    def get_game_state(self, game_id: str) -> Optional[Dict]:
        """
        Returns the current game state for a session (without revealing the
        answer unless the game is over).
        """
        game = self.games.get(game_id)
        if game is None:
            return None
        state = game.to_dict()
        state['game_id'] = game_id
        return state

    def press_key(self, game_id: str, key: str) -> Optional[Dict]:
        game = self.games.get(game_id)
        if game is None:
            return None
        game.press_key(key)
        return self.get_game_state(game_id)

    def submit_guess(self, game_id: str, guess: Optional[str] = None) -> Optional[SubmitResult]:
        """
        Submits a guess for a session.

        Args:
            game_id: Unique game identifier
            guess: Optional full word that replaces the pending input first;
                if it is rejected the player's own pending input is restored

        Returns:
            SubmitResult or None if the game does not exist
        """
        game = self.games.get(game_id)
        if game is None:
            return None
        if guess is None:
            return game.submit_guess()

        with game.lock:
            typed = game.pending_input
            game.clear_input()
            for letter in str(guess).strip():
                game.press_key(letter)
            result = game.submit_guess()
            if not result.accepted and not game.is_over:
                game.pending_input = typed
            return result

    def reset_game(self, game_id: str) -> Optional[Dict]:
        game = self.games.get(game_id)
        if game is None:
            return None
        game.new_game()
        return self.get_game_state(game_id)

    def is_current(self, game_id: str, target_word: str, game_number: int) -> bool:
        """
        Checks that an asynchronous result still belongs to the running game.

        A response produced for an earlier game of the same session is stale
        even when the answer did not change.
        """
        game = self.games.get(game_id)
        return (game is not None
                and game.target_word == target_word
                and game.game_number == game_number)

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a game session from memory.

        Returns:
            bool: True if game was deleted, False if not found
        """
        if game_id in self.games:
            del self.games[game_id]
            return True
        return False


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(target_word: str = TARGET_WORD) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(target_word)
    return _game_service
