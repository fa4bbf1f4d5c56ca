"""
engine.py - Game state management for connect-N

This module provides the GameEngine that owns the single active game: the board,
the variant, whose turn it is, the lifecycle flags and the game mode. Callers
(the web adapter, the terminal CLI, tests) hold one engine instance and drive it
through start / start_bot / drop_token / reset / quit, reading back a GameState
snapshot after every operation.
"""

import threading
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Any

from connectn.ai.random_bot import RandomBot
from connectn.debug import debug
from connectn.game.board import Board
from connectn.utils import Player, Variant, GameMode


WELCOME_MESSAGE = "Choose a board and start a game."


class InvalidMove(Exception):
    """A move the engine refused. The game state is left untouched."""

    NOT_STARTED = "not_started"
    BAD_COLUMN = "bad_column"
    GAME_OVER = "game_over"
    COLUMN_FULL = "column_full"

    def __init__(self, message: str, reason: str):
        super().__init__(message)
        self.message = message
        self.reason = reason


@dataclass
class GameState:
    """Everything a view needs to render the current game."""
    board: Board
    variant: Variant = Variant.STANDARD
    current_player: Player = Player.ONE
    winner: Player = Player.EMPTY
    game_over: bool = False
    started: bool = False
    mode: GameMode = GameMode.NONE
    message: str = WELCOME_MESSAGE
    last_bot_column: Optional[int] = None  # 1-based

    @property
    def last_move(self) -> Optional[Tuple[int, int]]:
        return self.board.last_move

    @property
    def is_draw(self) -> bool:
        return self.game_over and self.winner == Player.EMPTY

    def copy(self) -> 'GameState':
        """Snapshot with its own board, safe to hand to callers."""
        return GameState(
            board=self.board.copy(),
            variant=self.variant,
            current_player=self.current_player,
            winner=self.winner,
            game_over=self.game_over,
            started=self.started,
            mode=self.mode,
            message=self.message,
            last_bot_column=self.last_bot_column,
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the state to a JSON-serializable dictionary.

        Players are plain ints (0 = none) and columns are 1-based, matching
        what a player types or submits.
        """
        if self.started and not self.game_over:
            valid_columns = [col + 1 for col in self.board.get_valid_moves()]
        else:
            valid_columns = []
        return {
            'board': self.board.to_list(),
            'variant': self.variant.name.lower(),
            'rows': self.variant.rows,
            'cols': self.variant.cols,
            'connect_n': self.variant.connect_n,
            'current_player': self.current_player.value,
            'winner': self.winner.value,
            'game_over': self.game_over,
            'started': self.started,
            'mode': self.mode.name.lower(),
            'message': self.message,
            'valid_columns': valid_columns,
            'last_move': list(self.last_move) if self.last_move else None,
            'last_bot_column': self.last_bot_column,
            'winning_line': [list(pos) for pos in self.board.get_winning_line()]
                            if self.winner != Player.EMPTY else [],
        }


class GameEngine:
    """
    Owns the single active connect-N game.

    Every public operation runs under one lock, so the engine can be shared by
    a threaded HTTP server. Operations return a snapshot of the resulting state.
    """

    def __init__(self, rng=None, seed: Optional[int] = None, bot: Optional[RandomBot] = None):
        """
        Initialize an engine in the unstarted rest state.

        Args:
            rng: Random source for the bot (anything with ``choice``)
            seed: Seed for the bot's random source when no rng is given
            bot: Fully built bot, overrides rng and seed
        """
        debug.debug("Initializing GameEngine", "engine")
        self.bot = bot if bot is not None else RandomBot(rng=rng, seed=seed)
        self._lock = threading.Lock()
        self.state = GameState(board=Board(Variant.STANDARD))

    # --- Lifecycle ---

    def start(self, variant=Variant.STANDARD, mode: GameMode = GameMode.DUO) -> GameState:
        """
        Start a fresh game, discarding whatever was being played.

        Args:
            variant: A Variant or a form value ("4" or "5")
            mode: GameMode.DUO or GameMode.BOT

        Returns:
            Snapshot of the new game
        """
        variant = Variant.from_form(variant)
        if mode == GameMode.NONE:
            mode = GameMode.DUO
        with self._lock:
            self.state = GameState(board=Board(variant), variant=variant,
                                   started=True, mode=mode)
            self.state.message = self._turn_message()
            debug.info(f"Started {variant.name} game in {mode.name} mode", "engine")
            return self.state.copy()

    def start_bot(self, variant=Variant.STANDARD) -> GameState:
        """Start a game against the random bot, which plays as player two."""
        return self.start(variant, GameMode.BOT)

    def reset(self) -> GameState:
        """
        Clear the board of the current variant and give the first move back to
        player one. Whether a game is running, and in which mode, is kept.
        """
        with self._lock:
            state = self.state
            state.board = Board(state.variant)
            state.current_player = Player.ONE
            state.winner = Player.EMPTY
            state.game_over = False
            state.last_bot_column = None
            state.message = self._turn_message() if state.started else WELCOME_MESSAGE
            debug.info(f"Reset {state.variant.name} board (started={state.started}, "
                       f"mode={state.mode.name})", "engine")
            return state.copy()

    def quit(self) -> GameState:
        """Return to the unstarted rest state on the standard board."""
        with self._lock:
            self.state = GameState(board=Board(Variant.STANDARD))
            debug.info("Quit game", "engine")
            return self.state.copy()

    # --- Moves ---

    def drop_token(self, column) -> GameState:
        """
        Drop the current player's token into a column.

        In bot mode, a human move that does not end the game is answered by
        exactly one bot move before this returns.

        Args:
            column: 1-based column number, as an int or a numeric string

        Returns:
            Snapshot after the move (and the bot's reply, if any)

        Raises:
            InvalidMove: no game running, bad column, game over or column full
        """
        with self._lock:
            state = self.state
            if not state.started:
                self._reject("Start a game first.", InvalidMove.NOT_STARTED)

            col = self._parse_column(column)

            if state.game_over:
                self._reject("The game is over. Reset or start a new game.",
                             InvalidMove.GAME_OVER)
            if state.board.is_column_full(col):
                self._reject(f"Column {col + 1} is full.", InvalidMove.COLUMN_FULL)

            state.last_bot_column = None
            self._play(col)

            if (not state.game_over and state.mode == GameMode.BOT
                    and state.current_player == Player.TWO):
                self._play_bot()

            state.message = self._turn_message()
            return state.copy()

    def _parse_column(self, column) -> int:
        """Turn a 1-based column number into a 0-based index, or reject it."""
        cols = self.state.variant.cols
        try:
            number = int(str(column).strip())
        except (TypeError, ValueError):
            self._reject(f"'{column}' is not a column number (1-{cols}).",
                         InvalidMove.BAD_COLUMN)
        if not 1 <= number <= cols:
            self._reject(f"Column {number} is out of range (1-{cols}).",
                         InvalidMove.BAD_COLUMN)
        return number - 1

    def _reject(self, message: str, reason: str):
        debug.debug(f"Rejected move: {message}", "engine")
        self.state.message = message
        raise InvalidMove(message, reason)

    def _play(self, col: int):
        """Place a token for the player to move, then settle win, draw or turn."""
        state = self.state
        player = state.current_player
        row = state.board.drop(col, player)
        debug.debug(f"Player {player.value} dropped in column {col + 1} (row {row})", "engine")

        if state.board.check_win(row, col, player):
            state.winner = player
            state.game_over = True
            debug.info(f"Player {player.value} wins with a move at ({row}, {col})", "engine")
        elif state.board.is_top_row_full():
            state.game_over = True
            debug.info("Game ends in a draw", "engine")
        else:
            state.current_player = player.other()

    def _play_bot(self):
        state = self.state
        col = self.bot.choose_column(state.board)
        if col is None:
            # A full board is caught by the draw check after the human move
            state.game_over = True
            return
        state.last_bot_column = col + 1
        self._play(col)

    def _turn_message(self) -> str:
        state = self.state
        bot_mode = state.mode == GameMode.BOT
        if state.winner != Player.EMPTY:
            if bot_mode:
                return "You win!" if state.winner == Player.ONE else "The bot wins!"
            return f"Player {state.winner.value} wins!"
        if state.game_over:
            return "It's a draw!"
        if bot_mode:
            if state.last_bot_column is not None:
                return f"The bot played column {state.last_bot_column}. Your turn."
            return "Your turn."
        return f"Player {state.current_player.value}'s turn."

    # --- Queries ---

    def snapshot(self) -> GameState:
        """Current state, without changing anything."""
        with self._lock:
            return self.state.copy()

    def check_win(self, row: int, col: int, player: Player) -> bool:
        """
        Whether ``player`` has a winning run through (row, col), 0-based.

        The cell counts for ``player`` even when it is empty, so this also
        tells whether a token dropped there would win.
        """
        with self._lock:
            return self.state.board.check_win(row, col, player)

    def legal_columns(self) -> List[int]:
        """0-based columns that can still take a token."""
        with self._lock:
            return self.state.board.get_valid_moves()

    def winning_line(self) -> List[Tuple[int, int]]:
        """Cells of the winning run, empty unless someone has won."""
        with self._lock:
            if self.state.winner == Player.EMPTY:
                return []
            return self.state.board.get_winning_line()

    @property
    def last_bot_move(self) -> Optional[int]:
        """1-based column of the bot's reply to the last move, if it made one."""
        with self._lock:
            return self.state.last_bot_column
