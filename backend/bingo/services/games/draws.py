import random
from typing import Optional

from bingo.models import GameSession


def draw_number(game: GameSession, rng=random) -> Optional[int]:
    """Reveal one number that has not been drawn yet.

    Returns None once the pool is exhausted. Broadcasting is left to the caller.
    """
    remaining = [n for n in game.numbers if n not in game.drawn]
    if not remaining:
        return None
    selection = rng.choice(remaining)
    game.drawn.append(selection)
    game.current = selection
    return selection
