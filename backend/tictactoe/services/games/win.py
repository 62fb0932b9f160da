from typing import Any, Optional, Sequence

WIN_LINES = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # cols
    (0, 4, 8), (2, 4, 6),             # diags
)


def detect_winner(board: Sequence[Any]) -> Optional[Any]:
    """Return the symbol filling the first complete line, or None."""
    for a, b, c in WIN_LINES:
        if board[a] is not None and board[a] != '' and board[a] == board[b] == board[c]:
            return board[a]
    return None


def is_board_full(board: Sequence[Any]) -> bool:
    return all(cell is not None for cell in board)
