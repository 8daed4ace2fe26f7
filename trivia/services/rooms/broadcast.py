from typing import Any, Dict


def room_channel(code: str) -> str:
    return f"room:{code}"


class SocketIOBroadcaster:
    """Delivers room events over Flask-SocketIO.

    The round engine only talks to this object: it never sees the
    Socket.IO server or its connection lists.
    """

    def __init__(self, socketio, namespace: str = '/ws'):
        self.socketio = socketio
        self.namespace = namespace

    def to_room(self, code: str, event: str, payload: Dict[str, Any] = None) -> None:
        # Use socketio.emit since this may be called from a background task
        self.socketio.emit(event, payload or {}, to=room_channel(code), namespace=self.namespace)

    def to_one(self, identity: str, event: str, payload: Dict[str, Any] = None) -> None:
        self.socketio.emit(event, payload or {}, to=identity, namespace=self.namespace)

    def attach(self, code: str, identity: str) -> None:
        self.socketio.server.enter_room(identity, room_channel(code), namespace=self.namespace)

    def detach(self, code: str, identity: str) -> None:
        self.socketio.server.leave_room(identity, room_channel(code), namespace=self.namespace)
