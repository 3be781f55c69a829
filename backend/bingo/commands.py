"""Typed commands for every client event, validated before they reach the registry."""

from dataclasses import dataclass
from typing import Optional

from bingo.errors import InvalidCommand
from bingo.models import GRID_SIZE, normalize_code


def _payload(data) -> dict:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidCommand()
    return data


def _grid_index(value) -> int:
    # bool is an int subclass but never a valid coordinate
    if isinstance(value, bool):
        raise InvalidCommand()
    if isinstance(value, str) and value.strip().isdigit():
        value = int(value)
    if not isinstance(value, int) or not 0 <= value < GRID_SIZE:
        raise InvalidCommand()
    return value


@dataclass(frozen=True)
class HostCreate:
    event = 'host:create'

    @classmethod
    def from_payload(cls, data):
        _payload(data)
        return cls()


@dataclass(frozen=True)
class HostJoin:
    game_id: str
    event = 'host:join'

    @classmethod
    def from_payload(cls, data):
        return cls(game_id=normalize_code(_payload(data).get('gameId')))


@dataclass(frozen=True)
class HostStart(HostJoin):
    event = 'host:start'


@dataclass(frozen=True)
class HostStop(HostJoin):
    event = 'host:stop'


@dataclass(frozen=True)
class HostReset(HostJoin):
    event = 'host:reset'


@dataclass(frozen=True)
class PlayerJoin:
    game_id: Optional[str]
    name: str
    event = 'player:join'

    @classmethod
    def from_payload(cls, data):
        data = _payload(data)
        name = data.get('name')
        return cls(
            game_id=normalize_code(data.get('gameId')) or None,
            name=name if isinstance(name, str) else '',
        )


@dataclass(frozen=True)
class PlayerMark:
    game_id: str
    row: int
    col: int
    event = 'player:mark'

    @classmethod
    def from_payload(cls, data):
        data = _payload(data)
        return cls(
            game_id=normalize_code(data.get('gameId')),
            row=_grid_index(data.get('row')),
            col=_grid_index(data.get('col')),
        )


@dataclass(frozen=True)
class PlayerClaim(HostJoin):
    event = 'player:claim'


COMMANDS = {
    cls.event: cls
    for cls in (HostCreate, HostJoin, HostStart, HostStop, HostReset, PlayerJoin, PlayerMark, PlayerClaim)
}


def parse_command(event: str, data=None):
    try:
        command_cls = COMMANDS[event]
    except KeyError:
        raise InvalidCommand(f'Unknown event {event}') from None
    return command_cls.from_payload(data)
