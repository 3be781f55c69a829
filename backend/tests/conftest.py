import os
import sys
import pytest

# Ensure the backend root (containing the `bingo` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from bingo import create_app, socketio
from bingo.registry import SessionRegistry


class TestConfig:
    __test__ = False
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    CORS_ALLOWED_ORIGINS = ['http://localhost']
    SOCKETIO_NAMESPACE = '/ws'
    DRAW_INTERVAL_SEC = 3
    FIRST_DRAW_DELAY_SEC = 0.4
    GAME_CODE_LENGTH = 4
    MAX_NAME_LENGTH = 20
    LOG_LEVEL = 'DEBUG'


class RecordingBroadcaster:
    """Collects everything the registry would push to clients."""

    def __init__(self):
        self.events = []
        self.rooms = {}

    def join(self, sid, room):
        self.rooms.setdefault(room, set()).add(sid)

    def to_room(self, event, payload=None, room=None):
        self.events.append((event, payload, room))

    def to_all(self, event, payload=None):
        self.events.append((event, payload, '*'))

    def to_one(self, event, payload=None, sid=None):
        self.events.append((event, payload, sid))

    def named(self, event):
        return [payload for name, payload, _ in self.events if name == event]

    def clear(self):
        self.events.clear()


class RecordingScheduler:
    def __init__(self):
        self.scheduled = []

    def schedule(self, registry, code, token):
        self.scheduled.append((code, token))


@pytest.fixture()
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture()
def scheduler():
    return RecordingScheduler()


@pytest.fixture()
def registry(broadcaster, scheduler):
    return SessionRegistry(broadcaster, scheduler=scheduler)


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def connect(flask_app):
    """Factory for Socket.IO test clients connected to /ws."""
    clients = []

    def _connect():
        test_client = socketio.test_client(
            flask_app,
            flask_test_client=flask_app.test_client(),
            namespace='/ws'
        )
        clients.append(test_client)
        return test_client

    yield _connect
    for test_client in clients:
        try:
            if test_client.is_connected('/ws'):
                test_client.disconnect(namespace='/ws')
        except RuntimeError:
            pass


@pytest.fixture()
def sio_client(connect):
    return connect()
