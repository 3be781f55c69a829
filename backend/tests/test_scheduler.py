import pytest

from bingo.commands import HostJoin, PlayerJoin
from bingo.registry import SessionRegistry
from bingo.services.games.scheduler import AutoDrawScheduler
from conftest import RecordingBroadcaster


class InstantSocketIO:
    """Runs background tasks inline and records sleeps instead of waiting."""

    def __init__(self):
        self.sleeps = []

    def sleep(self, seconds):
        self.sleeps.append(seconds)

    def start_background_task(self, target, *args):
        target(*args)


class FlakyBroadcaster(RecordingBroadcaster):
    def __init__(self):
        super().__init__()
        self.failures = 1

    def to_room(self, event, payload=None, room=None):
        if event == 'number:drawn' and self.failures:
            self.failures -= 1
            raise OSError('socket closed')
        super().to_room(event, payload, room)


def started_game(registry):
    code = registry.create('host-sid')['gameId']
    registry.player_join('alice-sid', PlayerJoin(game_id=code, name='Alice'))
    registry.start(HostJoin(game_id=code))
    return code


@pytest.fixture()
def live_app(flask_app):
    flask_app.config['ENABLE_SCHEDULER_IN_TESTS'] = True
    return flask_app


def test_draws_follow_the_interval_grid(live_app):
    fake = InstantSocketIO()
    registry = SessionRegistry(RecordingBroadcaster(), scheduler=AutoDrawScheduler(live_app, fake))
    code = started_game(registry)

    game = registry.get(code)
    assert sorted(game.drawn) == list(range(1, 76))
    assert game.started is False
    assert fake.sleeps[:3] == [pytest.approx(0.4), pytest.approx(2.6), pytest.approx(3)]
    # 75 draws plus the tick that finds the pool empty
    assert len(fake.sleeps) == 76


def test_failed_tick_is_logged_and_drawing_continues(live_app, caplog):
    broadcaster = FlakyBroadcaster()
    registry = SessionRegistry(broadcaster, scheduler=AutoDrawScheduler(live_app, InstantSocketIO()),
                               logger=live_app.logger)
    code = started_game(registry)

    game = registry.get(code)
    assert '[timer-error]' in caplog.text
    assert 'socket closed' in caplog.text
    assert len(game.drawn) == 75
    assert len(broadcaster.named('number:drawn')) == 74
    assert game.started is False


def test_scheduler_is_idle_in_tests_by_default(flask_app):
    fake = InstantSocketIO()
    registry = SessionRegistry(RecordingBroadcaster(), scheduler=AutoDrawScheduler(flask_app, fake))
    code = started_game(registry)
    assert fake.sleeps == []
    assert registry.get(code).drawn == []
