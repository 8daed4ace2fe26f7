from flask import current_app, request
from flask_socketio import emit

from trivia import socketio
from trivia.errors import RoomError


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _engine():
    return current_app.extensions['trivia']


def _payload(data) -> dict:
    return data if isinstance(data, dict) else {}


def handle_connect(auth=None):
    current_app.logger.info(f"[connect] sid={_get_sid()}")
    emit('connected', {'message': f'Connected to {request.namespace}'})


def handle_disconnect(reason=None):
    _engine().handle_disconnect(_get_sid())


def handle_create_room(data=None):
    _engine().create_room(_get_sid())


def handle_join_room(data=None):
    data = _payload(data)
    try:
        _engine().join_room(data.get('code'), _get_sid(), data.get('name'))
    except RoomError as exc:
        emit('error', {'message': exc.message})


def handle_start_round(data=None):
    _engine().start_round(_payload(data).get('code'), _get_sid())


def handle_submit_answer(data=None):
    data = _payload(data)
    _engine().submit_answer(data.get('code'), _get_sid(), data.get('choice'))


def handle_ping(data=None):
    emit('pong', data or {})


def register_socketio_handlers(namespace: str = '/ws') -> None:
    """Register Socket.IO event handlers on the given namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('create_room', handle_create_room, namespace=namespace)
    socketio.on_event('join_room', handle_join_room, namespace=namespace)
    socketio.on_event('start_round', handle_start_round, namespace=namespace)
    socketio.on_event('submit_answer', handle_submit_answer, namespace=namespace)
    socketio.on_event('ping', handle_ping, namespace=namespace)
