"""Routes inbound frames to the match rules and computes who hears about it.

The dispatcher never touches a socket. ``dispatch`` and ``disconnect``
return a list of ``(connection, message)`` pairs and the transport adapter
delivers them, so the whole protocol can be exercised without a server.
"""
import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Hashable, List, Optional, Tuple

from tictactoe import protocol
from tictactoe.errors import (IgnoredCommand, NotFoundError, ProtocolError,
                              RoomNotFound, ValidationError)
from tictactoe.models import Room
from tictactoe.registry import RoomRegistry
from tictactoe.services.games import match

logger = logging.getLogger(__name__)

Outbound = List[Tuple[Hashable, Dict[str, Any]]]


@dataclass
class ConnectionContext:
    room_code: str
    player_id: str


class Dispatcher:
    """Applies commands per connection and tracks which room each one is in."""

    def __init__(self, registry: RoomRegistry, celebrate: Optional[match.CelebrationPolicy] = None):
        self.registry = registry
        self.celebrate = celebrate
        self._contexts: Dict[Hashable, ConnectionContext] = {}
        self._contexts_lock = threading.Lock()
        self._handlers = {
            protocol.CREATE_GAME: self._create_game,
            protocol.JOIN_GAME: self._join_game,
            protocol.SET_PLAYER_INFO: self._set_player_info,
            protocol.MAKE_MOVE: self._make_move,
            protocol.NEXT_ROUND: self._next_round,
            protocol.RESET_MATCH: self._reset_match,
        }

    def context(self, connection) -> Optional[ConnectionContext]:
        with self._contexts_lock:
            return self._contexts.get(connection)

    def dispatch(self, connection, raw) -> Outbound:
        """Apply one inbound frame from ``connection``."""
        try:
            msg_type, payload = protocol.parse_message(raw)
            return self._handlers[msg_type](connection, payload)
        except (ValidationError, NotFoundError) as exc:
            return [(connection, protocol.error(str(exc)))]
        except ProtocolError as exc:
            logger.debug(f"[malformed] connection={connection} reason={exc}")
        except IgnoredCommand as exc:
            logger.debug(f"[ignored] connection={connection} reason={exc}")
        return []

    def disconnect(self, connection) -> Outbound:
        return self._detach(connection)

    # ---- helpers ----

    def _set_context(self, connection, room_code, player_id):
        with self._contexts_lock:
            self._contexts[connection] = ConnectionContext(room_code, player_id)

    def _broadcast(self, room: Room, meme_url=None) -> Outbound:
        msg = protocol.update_state(room.to_dict(), meme_url)
        return [(conn, msg) for conn in self.registry.connections(room.code)]

    def _require_room(self, payload) -> Room:
        room = self.registry.get_room(payload.get('gameId'))
        if room is None:
            raise IgnoredCommand(f"no room {payload.get('gameId')!r}")
        return room

    def _detach(self, connection) -> Outbound:
        with self._contexts_lock:
            ctx = self._contexts.pop(connection, None)
        if ctx is None:
            return []
        room = self.registry.get_room(ctx.room_code)
        if room is None:
            self.registry.remove_connection(ctx.room_code, connection)
            return []
        with room.lock:
            self.registry.retire_player_token(room, ctx.player_id)
            if self.registry.remove_connection(room.code, connection):
                return []
            match.remove_player(room, ctx.player_id)
            if not room.players:
                return []
            return self._broadcast(room)

    # ---- command handlers ----

    def _create_game(self, connection, payload) -> Outbound:
        out = self._detach(connection)
        room = self.registry.create_room()
        with room.lock:
            player_id = self.registry.issue_player_token(room)
            self.registry.add_connection(room.code, connection)
            self._set_context(connection, room.code, player_id)
        logger.info(f"[game-created] code={room.code} player={player_id}")
        out.append((connection, protocol.game_created(room.code, player_id)))
        return out

    def _join_game(self, connection, payload) -> Outbound:
        code = self.registry.normalize_code(payload.get('gameId'))
        if self.registry.get_room(code) is None:
            raise RoomNotFound(code)

        ctx = self.context(connection)
        if ctx is not None and ctx.room_code == code:
            room = self.registry.get_room(code)
            if room is not None:
                with room.lock:
                    return [(connection, protocol.join_accepted(room.code, ctx.player_id, room.to_dict()))]

        out = self._detach(connection)
        room = self.registry.get_room(code)
        if room is None:
            raise RoomNotFound(code)
        with room.lock:
            # the last subscriber may have left between lookup and lock
            if self.registry.get_room(code) is not room:
                raise RoomNotFound(code)
            player_id = self.registry.issue_player_token(room)
            self.registry.add_connection(room.code, connection)
            self._set_context(connection, room.code, player_id)
            logger.info(f"[game-joined] code={room.code} player={player_id}")
            out.append((connection, protocol.join_accepted(room.code, player_id, room.to_dict())))
        return out

    def _set_player_info(self, connection, payload) -> Outbound:
        room = self._require_room(payload)
        player_id = payload.get('playerId')
        name = payload.get('name')
        symbol = payload.get('symbol')
        if not isinstance(player_id, str):
            raise IgnoredCommand('playerId must be a string')
        if not isinstance(name, str):
            raise IgnoredCommand('name must be a string')
        if symbol is None or symbol == '':
            raise IgnoredCommand('symbol is required')
        with room.lock:
            if player_id not in room.issued_tokens:
                raise IgnoredCommand(f'player {player_id!r} not issued in room {room.code}')
            match.set_player_info(room, player_id, name, symbol)
            return self._broadcast(room)

    def _make_move(self, connection, payload) -> Outbound:
        room = self._require_room(payload)
        player_id = payload.get('playerId')
        if not isinstance(player_id, str):
            raise IgnoredCommand('playerId must be a string')
        with room.lock:
            outcome = match.make_move(room, player_id, payload.get('index'), self.celebrate)
            return self._broadcast(room, outcome.celebration)

    def _next_round(self, connection, payload) -> Outbound:
        room = self._require_room(payload)
        with room.lock:
            match.next_round(room)
            return self._broadcast(room)

    def _reset_match(self, connection, payload) -> Outbound:
        room = self._require_room(payload)
        with room.lock:
            match.reset_match(room)
            return self._broadcast(room)
