"""Turn-based match rules for a single room.

Every function here mutates the given ``Room`` in place and assumes the
caller already holds ``room.lock``. Failed preconditions raise
``IgnoredCommand``; rule violations a client should hear about raise a
``ValidationError`` subclass.
"""
import logging
from typing import Any, Callable, NamedTuple, Optional

from tictactoe.errors import IgnoredCommand, SymbolTaken
from tictactoe.models import BOARD_SIZE, Player, Room, empty_board
from .win import detect_winner, is_board_full

logger = logging.getLogger(__name__)

CelebrationPolicy = Callable[[str], Optional[Any]]


class MoveOutcome(NamedTuple):
    player: Player
    index: int
    winner: Optional[Player] = None
    is_draw: bool = False
    celebration: Optional[Any] = None


def set_player_info(room: Room, player_id: str, name: str, symbol: Any) -> Player:
    """Register ``player_id`` at the end of the turn order.

    Resubmission by an already registered token is a no-op, whatever name or
    symbol it carries.
    """
    if room.find_player(player_id):
        raise IgnoredCommand(f'player {player_id} already registered')
    if any(p.symbol == symbol for p in room.players):
        logger.info(f"[symbol-taken] room={room.code} player={player_id}")
        raise SymbolTaken(symbol)
    player = Player(id=player_id, name=name, symbol=symbol)
    room.players.append(player)
    room.scores[player_id] = 0
    logger.info(f"[player-registered] room={room.code} player={player_id} seat={len(room.players) - 1}")
    return player


def make_move(room: Room, player_id: str, index: int,
              celebrate: Optional[CelebrationPolicy] = None) -> MoveOutcome:
    if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < BOARD_SIZE:
        raise IgnoredCommand(f'invalid cell {index!r}')
    player = room.find_player(player_id)
    if player is None:
        raise IgnoredCommand(f'unknown player {player_id}')
    if room.is_round_over:
        raise IgnoredCommand('round is over')
    if room.current_player is not player:
        raise IgnoredCommand(f'not {player_id} turn')
    if room.board[index] is not None:
        raise IgnoredCommand(f'cell {index} occupied')

    room.board[index] = player.symbol
    logger.info(f"[move] room={room.code} player={player_id} cell={index}")

    if detect_winner(room.board) is not None:
        room.winner = player
        room.scores[player.id] = room.scores.get(player.id, 0) + 1
        celebration = celebrate(player.name) if celebrate else None
        logger.info(f"[round-won] room={room.code} winner={player_id} score={room.scores[player.id]}")
        return MoveOutcome(player, index, winner=player, celebration=celebration)

    if is_board_full(room.board):
        room.is_draw = True
        logger.info(f"[draw] room={room.code}")
        return MoveOutcome(player, index, is_draw=True)

    room.current_player_index = (room.current_player_index + 1) % len(room.players)
    return MoveOutcome(player, index)


def _clear_round(room: Room) -> None:
    room.board = empty_board()
    room.winner = None
    room.is_draw = False


def next_round(room: Room) -> None:
    """Clear the board and hand the first move to the next player in order."""
    _clear_round(room)
    if room.players:
        room.current_player_index = (room.current_player_index + 1) % len(room.players)
    else:
        room.current_player_index = 0
    logger.info(f"[next-round] room={room.code} starter={room.current_player_index}")


def reset_match(room: Room) -> None:
    _clear_round(room)
    room.current_player_index = 0
    for player_id in room.scores:
        room.scores[player_id] = 0
    logger.info(f"[reset-match] room={room.code}")


def remove_player(room: Room, player_id: Optional[str]) -> bool:
    """Drop a departed player and clamp the turn index. Returns True if one was removed."""
    player = room.find_player(player_id) if player_id else None
    if player is not None:
        room.players.remove(player)
        room.scores.pop(player.id, None)
        logger.info(f"[player-left] room={room.code} player={player_id} remaining={len(room.players)}")
    if room.players:
        room.current_player_index = room.current_player_index % len(room.players)
    else:
        room.current_player_index = 0
    return player is not None
