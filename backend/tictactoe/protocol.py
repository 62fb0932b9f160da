"""Wire format: every frame is ``{"type": ..., "payload": {...}}``."""
import json
from typing import Any, Dict, Tuple

from tictactoe.errors import ProtocolError

# client -> server
CREATE_GAME = 'CREATE_GAME'
JOIN_GAME = 'JOIN_GAME'
SET_PLAYER_INFO = 'SET_PLAYER_INFO'
MAKE_MOVE = 'MAKE_MOVE'
NEXT_ROUND = 'NEXT_ROUND'
RESET_MATCH = 'RESET_MATCH'

# server -> client
GAME_CREATED = 'GAME_CREATED'
JOIN_ACCEPTED = 'JOIN_ACCEPTED'
UPDATE_STATE = 'UPDATE_STATE'
ERROR = 'ERROR'

CLIENT_TYPES = frozenset([CREATE_GAME, JOIN_GAME, SET_PLAYER_INFO, MAKE_MOVE, NEXT_ROUND, RESET_MATCH])


def parse_message(raw: Any) -> Tuple[str, Dict[str, Any]]:
    """Decode an inbound frame into ``(type, payload)``.

    Accepts an already decoded dict, or JSON text/bytes.
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode('utf-8')
        except UnicodeDecodeError as exc:
            raise ProtocolError(f'frame is not UTF-8: {exc}')
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError as exc:
            raise ProtocolError(f'frame is not JSON: {exc}')
    if not isinstance(raw, dict):
        raise ProtocolError('frame must be an object')
    msg_type = raw.get('type')
    if not isinstance(msg_type, str) or msg_type not in CLIENT_TYPES:
        raise ProtocolError(f'unknown message type {msg_type!r}')
    payload = raw.get('payload')
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ProtocolError('payload must be an object')
    return msg_type, payload


def message(msg_type: str, **payload) -> Dict[str, Any]:
    return {'type': msg_type, 'payload': payload}


def game_created(game_id, player_id):
    return message(GAME_CREATED, gameId=game_id, playerId=player_id)


def join_accepted(game_id, player_id, game_state):
    return message(JOIN_ACCEPTED, gameId=game_id, playerId=player_id, gameState=game_state)


def update_state(game_state, meme_url=None):
    if meme_url is None:
        return message(UPDATE_STATE, gameState=game_state)
    return message(UPDATE_STATE, gameState=game_state, memeUrl=meme_url)


def error(text):
    return message(ERROR, message=text)
