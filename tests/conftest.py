import os
import sys
import pytest

# Ensure the project root (containing the `tripletmatch` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from tripletmatch import create_app, socketio
from tripletmatch.models import Card
from tripletmatch.services.game.deck import generate_deck


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    ALLOWED_ORIGINS = ['http://localhost']
    MAX_PLAYERS = 8
    GRID_SIZE = 9
    MATCH_REWARD = 3
    DECK_ORDER = 7
    ROOM_CODE_LENGTH = 4


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(flask_app, namespace='/ws')
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def ordered_deck():
    """Order-7 deck in generation order.

    Cards 0-7 all carry the first symbol, so any three of them match. Card 8
    lacks it, so cards 0, 1 and 8 do not.
    """
    return generate_deck(7, shuffle=False)


@pytest.fixture()
def common_symbol_deck():
    """Factory for cards that all share 'X' and nothing else; any three match."""
    def _make(count):
        return [Card(id=i, symbols=('X', f's{i}')) for i in range(count)]
    return _make
