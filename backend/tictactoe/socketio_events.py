from typing import Iterable, NamedTuple

from flask import current_app, request
from flask_socketio import emit

from tictactoe import socketio

GAME_EVENT = 'game'


class Connection(NamedTuple):
    sid: str
    namespace: str


def _current_connection() -> Connection:
    # type: ignore: request.sid exists in Socket.IO context
    return Connection(request.sid, request.namespace)  # type: ignore


def _dispatcher():
    return current_app.extensions['tictactoe']['dispatcher']


def _deliver(outbound: Iterable) -> None:
    """Fan out to every recipient; one failed send must not stop the rest."""
    for connection, message in outbound:
        try:
            socketio.emit(GAME_EVENT, message, to=connection.sid, namespace=connection.namespace)
        except Exception as exc:
            current_app.logger.warning(f"[send-failed] sid={connection.sid} type={message.get('type')} error={exc}")


def handle_connect(auth=None):
    emit('connected', {'message': f'Connected to {request.namespace}'})


def handle_disconnect(*args):
    connection = _current_connection()
    _deliver(_dispatcher().disconnect(connection))
    current_app.logger.info(f"[disconnect] sid={connection.sid}")


def handle_game_event(data):
    _deliver(_dispatcher().dispatch(_current_connection(), data))


def register_socketio_handlers(namespace: str = '/ws', testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on ``namespace``. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    namespaces = [namespace]
    if testing and namespace != '/':
        namespaces.append('/')
    for ns in namespaces:
        socketio.on_event('connect', handle_connect, namespace=ns)
        socketio.on_event('disconnect', handle_disconnect, namespace=ns)
        socketio.on_event(GAME_EVENT, handle_game_event, namespace=ns)
