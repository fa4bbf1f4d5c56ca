"""
cli.py - Command-line interface for playing connect-N in a terminal

This module drives the same GameEngine the web interface uses: two humans
sharing a keyboard, or one human against the random bot. It also has a small
benchmark of board and engine operations.
"""

import argparse
import random
import sys
from typing import Callable, List, Optional

from connectn.debug import debug, DebugLevel
from connectn.game.board import Board
from connectn.game.engine import GameEngine, InvalidMove
from connectn.utils import GameMode, Player, Variant

QUIT_COMMAND = 'q'
RESET_COMMAND = 'r'


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


class SimpleCLI:
    """Simple command-line front end for the game engine."""

    def __init__(self, engine: GameEngine = None,
                 input_func: Callable[[str], str] = input,
                 output_func: Callable[[str], None] = print):
        """
        Initialize the CLI.

        Args:
            engine: Engine to drive (a fresh one when omitted)
            input_func: Source of player input
            output_func: Sink for everything shown to the player
        """
        self.engine = engine if engine is not None else GameEngine()
        self.input = input_func
        self.output = output_func
        self.args = None

    @staticmethod
    def build_parser(parser: argparse.ArgumentParser = None) -> argparse.ArgumentParser:
        """Add the game arguments to ``parser`` (or a new one)."""
        if parser is None:
            parser = argparse.ArgumentParser(description='connect-N in the terminal')
        parser.add_argument('command', choices=['play', 'benchmark'],
                            help='play (interactive game), benchmark (performance testing)')
        parser.add_argument('--debug', action='store_true',
                            help='Enable debug mode with detailed logging')
        parser.add_argument('--ai', choices=['random', 'none'], default='random',
                            help='Opponent: random (the bot plays player 2), none (two human players)')
        parser.add_argument('--variant', choices=['4', '5'], default='4',
                            help='4 in a row on 6x7, or 5 in a row on 7x9')
        parser.add_argument('--iterations', type=positive_int, default=1000,
                            help='Number of iterations for benchmarking')
        return parser

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments."""
        self.args = self.build_parser().parse_args(argv)
        debug.configure(level=DebugLevel.DEBUG if self.args.debug else DebugLevel.WARNING)

    def run(self) -> None:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args()

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            self.output("Please specify a command. Use --help for options.")
            sys.exit(1)

    def play_game(self) -> None:
        """Play one game interactively, until it ends or the player quits."""
        variant = Variant.from_form(self.args.variant)
        if self.args.ai == 'random':
            state = self.engine.start_bot(variant)
        else:
            state = self.engine.start(variant, GameMode.DUO)

        self.output(f"Starting Connect {variant.connect_n} on a {variant.rows}x{variant.cols} board!")
        self.output(f"Enter a column number (1-{variant.cols}). "
                    f"Other commands: '{QUIT_COMMAND}' to quit, '{RESET_COMMAND}' to restart.")
        self.output(state.board.render())

        while not state.game_over:
            user_input = self.get_human_move(state.current_player)
            if user_input is None:
                # End of input behaves like quitting
                user_input = QUIT_COMMAND

            if user_input == QUIT_COMMAND:
                self.engine.quit()
                self.output("Quitting game.")
                return
            if user_input == RESET_COMMAND:
                state = self.engine.reset()
                self.output("Game restarted.")
                self.output(state.board.render())
                continue

            try:
                state = self.engine.drop_token(user_input)
            except InvalidMove as exc:
                debug.debug(f"Rejected input {user_input!r} ({exc.reason})", "cli")
                self.output(f"Invalid move: {exc}")
                continue

            self.output(state.board.render())
            if not state.game_over:
                self.output(state.message)

        self.output("Game over!")
        self.output(state.message)

    def get_human_move(self, player: Player) -> Optional[str]:
        """
        Read one line of input for ``player``.

        Returns:
            The stripped, lower-cased input, or None at end of input
        """
        try:
            return self.input(f"Player {player.value} ({player}) move: ").strip().lower()
        except EOFError:
            return None

    def benchmark(self) -> None:
        """Benchmark board operations and full random games through the engine."""
        iterations = self.args.iterations
        variant = Variant.from_form(self.args.variant)
        self.output(f"Running benchmark with {iterations} iterations on {variant.name}...")

        debug.start_timer("board_init")
        for _ in range(iterations):
            Board(variant)
        board_init_time = debug.end_timer("board_init")
        self.output(f"Board initialization: {board_init_time:.6f} seconds total, "
                    f"{board_init_time / iterations * 1000:.6f} ms per board")

        board = Board(variant)
        debug.start_timer("drops")
        checks_done = 0
        for _ in range(iterations):
            col = random.randrange(variant.cols)
            row = board.drop(col, Player.ONE)
            if row is None:
                board.reset()
                continue
            board.check_win(row, col, Player.ONE)
            checks_done += 1
        win_check_time = debug.end_timer("drops")
        self.output(f"Performing {checks_done} drops with win checks: {win_check_time:.6f} seconds total")

        engine = GameEngine()
        games_played = 0
        total_moves = 0
        debug.start_timer("game_simulation")
        for _ in range(max(1, iterations // 10)):
            state = engine.start(variant, GameMode.DUO)
            while not state.game_over:
                col = random.choice(state.board.get_valid_moves())
                state = engine.drop_token(col + 1)
                total_moves += 1
            games_played += 1
        simulation_time = debug.end_timer("game_simulation")
        self.output(f"Played {games_played} games with {total_moves} total moves: "
                    f"{simulation_time:.6f} seconds total, "
                    f"{simulation_time / games_played * 1000:.6f} ms per game")


def main(argv: Optional[List[str]] = None):
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    cli.parse_args(argv)
    cli.run()


if __name__ == "__main__":
    main()
