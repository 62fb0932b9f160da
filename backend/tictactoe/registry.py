import logging
import threading
from typing import Dict, Hashable, List, Optional, Set

from tictactoe.models import Room, generate_player_token, generate_room_code

logger = logging.getLogger(__name__)


class RoomRegistry:
    """In-memory rooms and the connections subscribed to each of them.

    One instance lives for the whole process. Room codes are stored
    upper-cased and looked up case-insensitively.
    """

    def __init__(self, code_length: int = 6, token_length: int = 10,
                 code_factory=generate_room_code, token_factory=generate_player_token):
        self.code_length = code_length
        self.token_length = token_length
        self._code_factory = code_factory
        self._token_factory = token_factory
        self._rooms: Dict[str, Room] = {}
        self._connections: Dict[str, Set[Hashable]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def normalize_code(code) -> Optional[str]:
        if not isinstance(code, str) or not code.strip():
            return None
        return code.strip().upper()

    def create_room(self) -> Room:
        with self._lock:
            while True:
                code = self._code_factory(self.code_length).upper()
                if code not in self._rooms:
                    break
            room = Room(code=code)
            self._rooms[code] = room
            self._connections[code] = set()
        logger.info(f"[room-created] code={code}")
        return room

    def get_room(self, code) -> Optional[Room]:
        code = self.normalize_code(code)
        if code is None:
            return None
        with self._lock:
            return self._rooms.get(code)

    def issue_player_token(self, room: Room) -> str:
        """Hand out a token that no other connection of ``room`` has been given."""
        with self._lock:
            while True:
                token = self._token_factory(self.token_length)
                if token not in room.issued_tokens:
                    room.issued_tokens.add(token)
                    return token

    def retire_player_token(self, room: Room, token) -> None:
        """Forget a departed connection's token so it can no longer register."""
        with self._lock:
            room.issued_tokens.discard(token)

    def add_connection(self, code, connection: Hashable) -> None:
        code = self.normalize_code(code)
        with self._lock:
            if code not in self._connections:
                raise KeyError(code)
            self._connections[code].add(connection)

    def remove_connection(self, code, connection: Hashable) -> bool:
        """Unsubscribe ``connection``. Returns True if the room was deleted as a result."""
        code = self.normalize_code(code)
        with self._lock:
            subscribers = self._connections.get(code)
            if subscribers is None:
                return False
            subscribers.discard(connection)
            if subscribers:
                return False
            del self._connections[code]
            self._rooms.pop(code, None)
        logger.info(f"[room-deleted] code={code}")
        return True

    def connections(self, code) -> List[Hashable]:
        code = self.normalize_code(code)
        with self._lock:
            return list(self._connections.get(code, ()))

    def room_codes(self) -> List[str]:
        with self._lock:
            return sorted(self._rooms)

    def __len__(self):
        with self._lock:
            return len(self._rooms)

    def __contains__(self, code):
        return self.get_room(code) is not None
