import random
import string
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

BOARD_SIZE = 9


def generate_room_code(length=6):
    """Generate a short, human-typeable room code."""
    return ''.join(random.choices(string.ascii_uppercase + string.digits, k=length))


def generate_player_token(length=10):
    return ''.join(random.choices(string.ascii_lowercase + string.digits, k=length))


def empty_board() -> List[Any]:
    return [None] * BOARD_SIZE


@dataclass
class Player:
    id: str
    name: str
    # Text glyph or image data URL; compared by exact value, never parsed
    symbol: Any

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'symbol': self.symbol,
        }


@dataclass
class Room:
    code: str
    players: List[Player] = field(default_factory=list)
    board: List[Any] = field(default_factory=empty_board)
    current_player_index: int = 0
    winner: Optional[Player] = None
    is_draw: bool = False
    scores: Dict[str, int] = field(default_factory=dict)
    # Tokens handed out to connections of this room, registered or not
    issued_tokens: set = field(default_factory=set, repr=False)
    lock: Any = field(default_factory=threading.RLock, repr=False, compare=False)

    @property
    def current_player(self) -> Optional[Player]:
        if not self.players:
            return None
        return self.players[self.current_player_index]

    @property
    def is_round_over(self) -> bool:
        return self.winner is not None or self.is_draw

    def find_player(self, player_id) -> Optional[Player]:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    def to_dict(self):
        return {
            'board': list(self.board),
            'players': [p.to_dict() for p in self.players],
            'scores': dict(self.scores),
            'currentPlayerIndex': self.current_player_index,
            'winner': self.winner.to_dict() if self.winner else None,
            'isDraw': self.is_draw,
        }
