"""
web.py - Flask interface for playing connect-N in a browser

Thin glue around a GameEngine: every POST route runs one engine operation and
redirects back to the board, GET / renders the current state. Rejected moves
never turn into HTTP errors; the engine puts the reason in the state's message,
which the next page shows.
"""

import os
import time

from flask import Flask, g, jsonify, redirect, render_template, request, url_for

from connectn.debug import debug
from connectn.game.engine import GameEngine, InvalidMove
from connectn.utils import ASSETS_URL_PREFIX, DEFAULT_ASSETS_DIR, GameMode, Player, Variant


def create_app(engine: GameEngine = None, assets_dir: str = None) -> Flask:
    """
    Build the Flask application.

    Args:
        engine: Engine to drive (a fresh one when omitted)
        assets_dir: Directory served under /assets/

    Returns:
        The configured Flask app
    """
    engine = engine if engine is not None else GameEngine()
    assets_dir = os.path.abspath(assets_dir or DEFAULT_ASSETS_DIR)

    app = Flask(__name__, static_folder=assets_dir, static_url_path=ASSETS_URL_PREFIX)
    app.config['ENGINE'] = engine
    app.config['ASSETS_DIR'] = assets_dir

    @app.before_request
    def start_request_timer():
        g.request_started = time.perf_counter()

    @app.after_request
    def log_request(response):
        duration = time.perf_counter() - g.get('request_started', time.perf_counter())
        debug.info(f"{request.method} {request.path} -> {response.status_code} "
                   f"({response.content_length or 0} bytes) [{duration * 1000:.2f}ms]", "web")
        return response

    @app.route('/', methods=['GET'])
    def index():
        """Render the board and the status message."""
        state = engine.snapshot()
        return render_template(
            'game.html',
            state=state,
            winning_cells=set(state.board.get_winning_line()
                              if state.winner != Player.EMPTY else []),
            Player=Player,
            GameMode=GameMode,
            Variant=Variant,
        )

    @app.route('/state', methods=['GET'])
    def state_json():
        """Current state as JSON."""
        return jsonify(engine.snapshot().to_dict())

    @app.route('/start', methods=['POST'])
    def start():
        engine.start(request.form.get('variant', '4'), GameMode.DUO)
        return _back_to_board()

    @app.route('/start-bot', methods=['POST'])
    def start_bot():
        engine.start_bot(request.form.get('variant', '4'))
        return _back_to_board()

    @app.route('/play', methods=['POST'])
    def play():
        try:
            engine.drop_token(request.form.get('column', ''))
        except InvalidMove as exc:
            debug.debug(f"Move rejected ({exc.reason}): {exc}", "web")
        return _back_to_board()

    @app.route('/reset', methods=['POST'])
    def reset():
        engine.reset()
        return _back_to_board()

    @app.route('/quit', methods=['POST'])
    def quit_game():
        engine.quit()
        return _back_to_board()

    @app.route('/debug', methods=['GET'])
    def list_assets():
        """List the files in the assets directory."""
        try:
            entries = sorted(
                (entry.name, entry.stat().st_size)
                for entry in os.scandir(assets_dir) if entry.is_file()
            )
        except OSError as exc:
            debug.error(f"Cannot read assets directory {assets_dir}: {exc}", "web")
            return (f"Cannot read {assets_dir}: {exc.strerror}", 500,
                    {'Content-Type': 'text/plain; charset=utf-8'})
        return render_template('debug.html', entries=entries, prefix=ASSETS_URL_PREFIX)

    return app


def _back_to_board():
    return redirect(url_for('index'), code=303)
