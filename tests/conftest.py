"""
Fixture comuni per i test.
"""

import pytest

from app import app as flask_app, socketio, game_data


class FixedSource:
    """Sorgente casuale deterministica: randint ritorna sempre lo stesso valore."""

    def __init__(self, value):
        self.value = value
        self.calls = []

    def randint(self, a, b):
        self.calls.append((a, b))
        return self.value


@pytest.fixture
def fixed_source():
    return FixedSource


@pytest.fixture
def app():
    flask_app.config.update(TESTING=True)
    game_data.clear()
    yield flask_app
    game_data.clear()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def logged_in(client):
    response = client.post('/start_game', data={'username': 'mario'})
    assert response.get_json() == {'success': True}
    return client


@pytest.fixture
def sio(app, logged_in):
    test_client = socketio.test_client(app, flask_test_client=logged_in)
    yield test_client
    if test_client.is_connected():
        test_client.disconnect()
