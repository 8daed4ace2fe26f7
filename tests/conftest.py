import os
import sys
import pytest

# Ensure the project root (containing `config` and the `trivia` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from trivia import create_app, socketio
from trivia.services.rooms.engine import RoundEngine
from trivia.services.rooms.registry import RoomRegistry


class TestConfig:
    __test__ = False
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ALLOWED_ORIGINS = ['*']
    SOCKETIO_NAMESPACE = '/ws'
    ROUND_DURATION_SEC = 15
    RESULT_DURATION_SEC = 5
    DEFAULT_PLAYER_NAME = 'Player'
    MAX_NAME_LENGTH = 32
    LOG_LEVEL = 'DEBUG'


class ManualScheduler:
    """Collects timers instead of running them; tests fire them by hand."""

    def __init__(self):
        self.pending = []

    def schedule(self, delay, label, callback, *args):
        self.pending.append((delay, label, callback, args))

    def fire_next(self):
        delay, label, callback, args = self.pending.pop(0)
        return callback(*args)


class ScriptedRandom:
    """Stand-in for `random` that hands out letters from a fixed script."""

    def __init__(self, letters):
        self._letters = iter(letters)

    def choice(self, seq):
        letter = next(self._letters)
        assert letter in seq
        return letter


class RecordingBroadcaster:
    def __init__(self):
        self.sent = []
        self.groups = {}

    def to_room(self, code, event, payload=None):
        self.sent.append(('room', code, event, payload or {}))

    def to_one(self, identity, event, payload=None):
        self.sent.append(('one', identity, event, payload or {}))

    def attach(self, code, identity):
        self.groups.setdefault(code, set()).add(identity)

    def detach(self, code, identity):
        self.groups.get(code, set()).discard(identity)

    def events(self, event):
        return [entry for entry in self.sent if entry[2] == event]


@pytest.fixture()
def scheduler():
    return ManualScheduler()


@pytest.fixture()
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture()
def engine(broadcaster, scheduler):
    return RoundEngine(RoomRegistry(), broadcaster, scheduler)


@pytest.fixture()
def registry():
    return RoomRegistry()


@pytest.fixture()
def flask_app(scheduler):
    application = create_app(TestConfig, scheduler=scheduler)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def connect(flask_app):
    """Factory for Socket.IO test clients on /ws; disconnects them afterwards."""
    clients = []

    def _connect():
        test_client = socketio.test_client(flask_app, namespace='/ws')
        test_client.get_received('/ws')  # flush 'connected'
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        try:
            if test_client.is_connected('/ws'):
                test_client.disconnect(namespace='/ws')
        except Exception:
            pass


def payloads(packets, name):
    """Payloads of every `name` event in a get_received() batch."""
    return [pkt['args'][0] if pkt['args'] else None
            for pkt in packets if pkt['name'] == name]
