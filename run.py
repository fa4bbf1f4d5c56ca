#!/usr/bin/env python3
"""
run.py - Main entry point for the connect-N game
"""

import sys
import os
import argparse

# Add the project root to Python path to ensure imports work
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from connectn.debug import debug, DebugLevel
from connectn.utils import PORT_ENV_VAR, DEFAULT_PORT, DEFAULT_HOST, DEFAULT_ASSETS_DIR

# --- Utility Functions ---

def configure_debug(args):
    """Configure debug level based on args.debug or args.debug_level."""
    if args.debug:
        debug.configure(level=DebugLevel.DEBUG)
    else:
        debug.set_from_string(args.debug_level)
    if args.log_file:
        debug.configure(log_file=args.log_file)
    if args.log_components:
        debug.configure(components=[c.strip() for c in args.log_components.split(',') if c.strip()])

def resolve_port(cli_port=None, environ=None):
    """Port from --port, then the PORT environment variable, then the default."""
    if cli_port is not None:
        return cli_port
    environ = os.environ if environ is None else environ
    raw = environ.get(PORT_ENV_VAR, '').strip()
    if not raw:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        debug.warning(f"Ignoring non-numeric {PORT_ENV_VAR}={raw!r}, using {DEFAULT_PORT}")
        return DEFAULT_PORT

# --- Command Handlers ---

def handle_serve_command(args):
    """Serve the game over HTTP."""
    from connectn.game.engine import GameEngine
    from connectn.interfaces.web import create_app

    configure_debug(args)
    port = resolve_port(args.port)
    app = create_app(GameEngine(seed=args.seed), assets_dir=args.assets)

    debug.info(f"Server started on port {port}")
    debug.info(f"Open your browser at: http://localhost:{port}")
    app.run(host=args.host, port=port, threaded=True)

def handle_game_command(args):
    """Play in the terminal or run the benchmark."""
    from connectn.game.engine import GameEngine
    from connectn.interfaces.cli import SimpleCLI

    cli = SimpleCLI(GameEngine(seed=args.seed))
    cli.args = args
    configure_debug(args)
    cli.run()

# --- Main Entry Point ---

def main(argv=None):
    """Main entry point for the connect-N game."""
    parser = argparse.ArgumentParser(
        description='Connect-N board game',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
    Examples:

    WEB:
    ----
    # Serve on ${PORT_ENV_VAR} (default {DEFAULT_PORT})
    python run.py serve

    # Serve on another port with request logging at debug level
    python run.py serve --port 8080 --debug

    TERMINAL:
    ---------
    # Play against the random bot
    python run.py game play

    # Two human players, 5 in a row on the large board
    python run.py game play --ai none --variant 5

    # Benchmark performance with 5000 iterations
    python run.py game benchmark --iterations 5000
    """
    )

    subparsers = parser.add_subparsers(dest='component', help='Component to run')

    serve_parser = subparsers.add_parser('serve',
        help='Serve the game over HTTP',
        description='Run the web interface')
    serve_parser.add_argument('--port',
        type=int,
        default=None,
        help=f'Port to listen on (default: ${PORT_ENV_VAR} or {DEFAULT_PORT})')
    serve_parser.add_argument('--host',
        default=DEFAULT_HOST,
        help=f'Interface to bind (default: {DEFAULT_HOST})')
    serve_parser.add_argument('--assets',
        default=DEFAULT_ASSETS_DIR,
        help='Directory served under /assets/')

    from connectn.interfaces.cli import SimpleCLI
    game_parser = subparsers.add_parser('game',
        help='Play in the terminal',
        description='Play connect-N or benchmark the engine')
    SimpleCLI.build_parser(game_parser)

    serve_parser.add_argument('--debug',
        action='store_true',
        help='Enable debug mode (equivalent to --debug_level debug)')

    # Request logs are wanted by default when serving, not while playing
    for sub, default_level in ((serve_parser, 'info'), (game_parser, 'warning')):
        sub.add_argument('--debug_level',
            choices=['none', 'error', 'warning', 'info', 'debug', 'trace'],
            default=default_level,
            help='Set debug level: none (silent), error, warning, info, debug, trace (most verbose)')
        sub.add_argument('--log_file',
            type=str,
            help='Also write log messages to this file')
        sub.add_argument('--log_components',
            type=str,
            help='Comma-separated components to log (board, engine, bot, web, cli); default all')
        sub.add_argument('--seed',
            type=int,
            default=None,
            help='Seed for the bot (default: random)')

    args = parser.parse_args(argv)
    if args.component == 'serve':
        handle_serve_command(args)
    elif args.component == 'game':
        handle_game_command(args)
    else:
        parser.print_help()

if __name__ == "__main__":
    main()
