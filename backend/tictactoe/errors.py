"""Error taxonomy for the room coordinator.

Only ``ValidationError`` and ``NotFoundError`` are ever reported back to a
client; the rest are dropped by the dispatcher after a debug log.
"""


class GameError(Exception):
    pass


class ValidationError(GameError):
    """Command was well formed but breaks a room rule."""


class NotFoundError(GameError):
    """Command referenced a room that does not exist."""


class SymbolTaken(ValidationError):
    def __init__(self, symbol=None):
        super().__init__('Symbol already taken. Please choose another.')
        self.symbol = symbol


class RoomNotFound(NotFoundError):
    def __init__(self, code=None):
        super().__init__('Game not found.')
        self.code = code


class IgnoredCommand(GameError):
    """Precondition failed (wrong turn, occupied cell, stale room...)."""


class ProtocolError(GameError):
    """Inbound frame could not be decoded into a command."""
