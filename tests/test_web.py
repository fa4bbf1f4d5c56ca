"""Tests for the Flask web interface."""

import pytest

from connectn.game.engine import GameEngine
from connectn.interfaces.web import create_app
from connectn.utils import Player


@pytest.fixture
def engine(scripted_rng):
    return GameEngine(rng=scripted_rng([6, 6, 6]))


@pytest.fixture
def app(engine):
    app = create_app(engine)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def state_of(client):
    response = client.get('/state')
    assert response.status_code == 200
    return response.get_json()


class TestPages:
    """Tests for the rendered pages and static files."""

    def test_index_before_start(self, client):
        """The menu is shown until a game starts."""
        response = client.get('/')

        assert response.status_code == 200
        assert b'Choose a board and start a game.' in response.data
        assert b'action="/start-bot"' in response.data
        assert b'name="column"' not in response.data

    def test_index_shows_board(self, client):
        client.post('/start', data={'variant': '5'})

        response = client.get('/')

        assert response.status_code == 200
        assert b'Connect 5' in response.data
        assert response.data.count(b'name="column"') == 9

    def test_assets_served(self, client):
        response = client.get('/assets/style.css')

        assert response.status_code == 200
        assert b'.board' in response.data
        response.close()

    def test_debug_lists_assets(self, client):
        response = client.get('/debug')

        assert response.status_code == 200
        assert b'href="/assets/style.css"' in response.data

    def test_debug_with_missing_directory(self, engine, tmp_path):
        """An unreadable assets directory is reported, not raised."""
        app = create_app(engine, assets_dir=str(tmp_path / 'missing'))

        response = app.test_client().get('/debug')

        assert response.status_code == 500
        assert b'Cannot read' in response.data

    def test_custom_assets_directory(self, engine, tmp_path):
        (tmp_path / 'board.js').write_text('// board')
        app = create_app(engine, assets_dir=str(tmp_path))

        response = app.test_client().get('/assets/board.js')

        assert response.status_code == 200
        assert response.data == b'// board'
        response.close()


class TestActions:
    """Tests for the POST routes."""

    def test_start_redirects_to_board(self, client):
        response = client.post('/start', data={'variant': '4'})

        assert response.status_code == 303
        assert response.headers['Location'].endswith('/')

    def test_start_defaults_to_standard(self, client):
        client.post('/start')
        state = state_of(client)

        assert state['started'] is True
        assert state['mode'] == 'duo'
        assert (state['rows'], state['cols'], state['connect_n']) == (6, 7, 4)

    def test_start_bot_large(self, client):
        client.post('/start-bot', data={'variant': '5'})
        state = state_of(client)

        assert state['mode'] == 'bot'
        assert state['variant'] == 'large'
        assert len(state['board']) == 7
        assert len(state['board'][0]) == 9

    def test_play_duo(self, client):
        client.post('/start', data={'variant': '4'})

        response = client.post('/play', data={'column': '3'})
        state = state_of(client)

        assert response.status_code == 303
        assert state['board'][5][2] == Player.ONE.value
        assert state['current_player'] == Player.TWO.value
        assert state['message'] == "Player 2's turn."

    def test_play_bot_replies(self, client):
        client.post('/start-bot', data={'variant': '4'})

        client.post('/play', data={'column': '1'})
        state = state_of(client)

        assert state['board'][5][0] == Player.ONE.value
        assert state['board'][5][6] == Player.TWO.value
        assert state['current_player'] == Player.ONE.value
        assert state['last_bot_column'] == 7

    def test_play_before_start_is_a_redirect(self, client):
        """Moves before a game starts change nothing but the message."""
        response = client.post('/play', data={'column': '1'})
        state = state_of(client)

        assert response.status_code == 303
        assert state['started'] is False
        assert state['message'] == 'Start a game first.'
        assert not any(any(row) for row in state['board'])

    @pytest.mark.parametrize("column", ['0', '8', 'abc', ''])
    def test_bad_column_becomes_message(self, client, column):
        client.post('/start')

        response = client.post('/play', data={'column': column})
        state = state_of(client)

        assert response.status_code == 303
        assert state['current_player'] == Player.ONE.value
        assert 'column' in state['message'].lower()

    def test_missing_column_field(self, client):
        client.post('/start')

        response = client.post('/play')

        assert response.status_code == 303
        assert state_of(client)['message'].startswith("'' is not a column number")

    def test_win_reported(self, client):
        client.post('/start')
        for column in ('1', '2', '1', '2', '1', '2', '1'):
            client.post('/play', data={'column': column})
        state = state_of(client)

        assert state['game_over'] is True
        assert state['winner'] == Player.ONE.value
        assert state['winning_line'] == [[2, 0], [3, 0], [4, 0], [5, 0]]
        assert state['valid_columns'] == []
        assert b'Player 1 wins!' in client.get('/').data

    def test_index_highlights_winning_cells(self, client):
        """The page marks exactly the cells of the winning run."""
        client.post('/start')
        for column in ('1', '2', '1', '2', '1', '2', '1'):
            client.post('/play', data={'column': column})

        page = client.get('/').data

        assert page.count(b' win"') == 4

    def test_index_without_winner_highlights_nothing(self, client):
        client.post('/start')
        client.post('/play', data={'column': '1'})

        assert b' win"' not in client.get('/').data

    def test_reset_keeps_mode(self, client):
        client.post('/start-bot', data={'variant': '5'})
        client.post('/play', data={'column': '2'})

        response = client.post('/reset')
        state = state_of(client)

        assert response.status_code == 303
        assert state['mode'] == 'bot'
        assert state['variant'] == 'large'
        assert state['started'] is True
        assert not any(any(row) for row in state['board'])

    def test_quit(self, client):
        client.post('/start-bot', data={'variant': '5'})

        response = client.post('/quit')
        state = state_of(client)

        assert response.status_code == 303
        assert state['started'] is False
        assert state['mode'] == 'none'
        assert state['variant'] == 'standard'

    @pytest.mark.parametrize("path", ['/start', '/start-bot', '/play', '/reset', '/quit'])
    def test_get_not_allowed(self, client, path):
        """Actions only accept POST."""
        assert client.get(path).status_code == 405

    def test_post_to_index_not_allowed(self, client):
        assert client.post('/').status_code == 405
