import os
import tempfile

# Keep test logs out of the working tree; must happen before the package is imported
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='anniverswordlary-logs-'))

import pytest

from anniverswordlary import create_app
from anniverswordlary.config import TestingConfig
from anniverswordlary.services.game_service import WordleGame, initialize_game_service
from anniverswordlary.services.hint_service import initialize_hint_service


@pytest.fixture
def game():
    return WordleGame("GOSSIP")


@pytest.fixture
def game_service():
    return initialize_game_service("GOSSIP")


@pytest.fixture
def hint_service():
    return initialize_hint_service(api_key=None)


@pytest.fixture
def app_and_socketio(game_service, hint_service):
    app, socketio = create_app(TestingConfig)
    return app, socketio


@pytest.fixture
def client(app_and_socketio):
    app, _ = app_and_socketio
    return app.test_client()


@pytest.fixture
def socket_client(app_and_socketio):
    app, socketio = app_and_socketio
    test_client = socketio.test_client(app)
    yield test_client
    if test_client.is_connected():
        test_client.disconnect()


def type_word(game, word):
    for letter in word:
        game.press_key(letter)


def play(game, word):
    type_word(game, word)
    return game.submit_guess()
