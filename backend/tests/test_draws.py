import random

from bingo.models import GameSession
from bingo.services.games.draws import draw_number


def test_draws_never_repeat_and_exhaust_after_75():
    game = GameSession(id='ABCD', host_sid='host')
    seen = []
    for _ in range(75):
        number = draw_number(game)
        assert number not in seen
        assert 1 <= number <= 75
        assert game.current == number
        seen.append(number)
    assert sorted(game.drawn) == list(range(1, 76))
    assert draw_number(game) is None
    assert len(game.drawn) == 75


def test_draw_only_picks_remaining_numbers():
    game = GameSession(id='ABCD', host_sid='host')
    game.drawn.extend(n for n in range(1, 76) if n != 42)
    assert draw_number(game, random.Random(3)) == 42
    assert game.current == 42
