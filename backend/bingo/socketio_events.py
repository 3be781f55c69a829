from functools import wraps

from flask import current_app, request

from bingo import socketio
from bingo.commands import parse_command
from bingo.errors import GameError


def _registry():
    return current_app.extensions['bingo']


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def acknowledged(event):
    """Parse the payload for ``event`` and turn the handler result into an ack."""
    def decorator(handler):
        @wraps(handler)
        def wrapper(data=None, *_):
            try:
                command = parse_command(event, data)
                result = handler(command)
            except GameError as exc:
                current_app.logger.debug(f"[rejected] event={event} sid={_get_sid()} reason={exc}")
                return exc.to_ack()
            ack = {'ok': True}
            ack.update(result or {})
            return ack
        return wrapper
    return decorator


def handle_connect(auth=None):
    _registry().announce_active_game(_get_sid())


def handle_disconnect(reason=None):
    _registry().disconnect(_get_sid())


@acknowledged('host:create')
def handle_host_create(command):
    return _registry().create(_get_sid())


@acknowledged('host:join')
def handle_host_join(command):
    return _registry().host_join(_get_sid(), command)


@acknowledged('host:start')
def handle_host_start(command):
    return _registry().start(command)


@acknowledged('host:stop')
def handle_host_stop(command):
    return _registry().stop(command)


@acknowledged('host:reset')
def handle_host_reset(command):
    return _registry().reset(command)


@acknowledged('player:join')
def handle_player_join(command):
    return _registry().player_join(_get_sid(), command)


@acknowledged('player:mark')
def handle_player_mark(command):
    return _registry().player_mark(_get_sid(), command)


@acknowledged('player:claim')
def handle_player_claim(command):
    return _registry().player_claim(_get_sid(), command)


def handle_error(exc):
    current_app.logger.exception(f"[socket-error] sid={_get_sid()} event={request.event}: {exc}")
    return {'ok': False, 'error': 'Internal error'}


def register_socketio_handlers(namespace: str = '/ws') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('host:create', handle_host_create, namespace=namespace)
    socketio.on_event('host:join', handle_host_join, namespace=namespace)
    socketio.on_event('host:start', handle_host_start, namespace=namespace)
    socketio.on_event('host:stop', handle_host_stop, namespace=namespace)
    socketio.on_event('host:reset', handle_host_reset, namespace=namespace)
    socketio.on_event('player:join', handle_player_join, namespace=namespace)
    socketio.on_event('player:mark', handle_player_mark, namespace=namespace)
    socketio.on_event('player:claim', handle_player_claim, namespace=namespace)
    socketio.on_error_default(handle_error)
