from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional, Union
import random

FREE = 'FREE'
GRID_SIZE = 5
TOTAL_NUMBERS = 75
# Characters that are easy to confuse on a projector (I, O, 0, 1) are left out
CODE_ALPHABET = 'ABCDEFGHJKLMNPQRSTUVWXYZ23456789'

Cell = Union[int, str]


def _utc_timestamp() -> str:
    # Millisecond precision with a trailing Z, like JavaScript toISOString()
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def normalize_code(value) -> str:
    return str(value or '').strip().upper()


def generate_game_code(taken, length=4):
    """Generate a short game code that is not already in ``taken``."""
    while True:
        code = ''.join(random.choices(CODE_ALPHABET, k=length))
        if code not in taken:
            return code


@dataclass
class Card:
    # numbers is column-major (numbers[col][row]), marked is row-major
    numbers: List[List[Cell]]
    marked: List[List[bool]]

    def value_at(self, row: int, col: int) -> Cell:
        return self.numbers[col][row]

    def to_dict(self):
        return {
            'numbers': [list(column) for column in self.numbers],
            'marked': [list(row) for row in self.marked],
        }


@dataclass
class Player:
    id: str
    name: str
    card: Card
    disqualified: bool = False

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'disqualified': self.disqualified,
        }


@dataclass
class Winner:
    id: str
    name: str
    time_iso: str = field(default_factory=_utc_timestamp)

    def to_dict(self):
        return {'id': self.id, 'name': self.name, 'timeISO': self.time_iso}


@dataclass
class GameSession:
    """One bingo round.

    ``started`` gates auto-draw and mark/claim acceptance and can be toggled by
    the host; ``closed`` is terminal until the host resets the game.
    """
    id: str
    host_sid: Optional[str]
    players: Dict[str, Player] = field(default_factory=dict)
    started: bool = False
    closed: bool = False
    winner: Optional[Winner] = None
    numbers: List[int] = field(default_factory=lambda: list(range(1, TOTAL_NUMBERS + 1)))
    drawn: List[int] = field(default_factory=list)
    current: Optional[int] = None
    # Identifies the auto-draw run allowed to mutate this session; None when idle
    draw_token: Optional[int] = None

    def find_player_by_name(self, name: str) -> Optional[Player]:
        folded = name.lower()
        for player in self.players.values():
            if player.name.lower() == folded:
                return player
        return None

    def meta(self):
        return {
            'started': self.started,
            'closed': self.closed,
            'winner': self.winner.to_dict() if self.winner else None,
            'drawnCount': len(self.drawn),
            'current': self.current,
        }

    def players_list(self):
        return [p.to_dict() for p in self.players.values()]

    def snapshot(self):
        return {
            'drawn': list(self.drawn),
            'started': self.started,
            'closed': self.closed,
            'winner': self.winner.to_dict() if self.winner else None,
            'gameId': self.id,
        }
