class Broadcaster:
    """Thin gateway over the Socket.IO server used by the session registry."""

    def __init__(self, socketio, namespace='/ws'):
        self.socketio = socketio
        self.namespace = namespace

    def join(self, sid: str, room: str) -> None:
        self.socketio.server.enter_room(sid, room, namespace=self.namespace)

    def to_room(self, event: str, payload=None, room: str = None) -> None:
        self._emit(event, payload, to=room)

    def to_all(self, event: str, payload=None) -> None:
        self._emit(event, payload)

    def to_one(self, event: str, payload=None, sid: str = None) -> None:
        self._emit(event, payload, to=sid)

    def _emit(self, event, payload, **kwargs):
        args = () if payload is None else (payload,)
        self.socketio.emit(event, *args, namespace=self.namespace, **kwargs)
