"""
Board Module

Pure game-state data: the Position dataclass, piece encoding helpers and
(row, col) coordinate utilities.

Key Components:
    - Position: board + castling/en-passant/clock/termination metadata
    - Move, LastMove, MoveKind, GameStatus: value types shared by the rules,
      notation and search modules
    - square_name / parse_square: algebraic coordinate conversion
"""

from chess_duel.board.position import (
    BLACK,
    DRAW,
    DRAW_FIFTY_MOVES,
    DRAW_INSUFFICIENT_MATERIAL,
    DRAW_REPETITION,
    WHITE,
    CastlingRights,
    GameStatus,
    LastMove,
    Move,
    MoveKind,
    Position,
    STARTING_FEN,
)
from chess_duel.board.representation import Square, parse_square, square_name

__all__ = [
    'BLACK',
    'DRAW',
    'DRAW_FIFTY_MOVES',
    'DRAW_INSUFFICIENT_MATERIAL',
    'DRAW_REPETITION',
    'WHITE',
    'CastlingRights',
    'GameStatus',
    'LastMove',
    'Move',
    'MoveKind',
    'Position',
    'STARTING_FEN',
    'Square',
    'parse_square',
    'square_name',
]
