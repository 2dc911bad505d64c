"""
Notation Module

Text and data formats for positions and moves.

Key Components:
    - to_fen / from_fen: six-field FEN export and import
    - move_notation: algebraic notation for the move log
    - parse_uci / move_to_uci / extract_uci: coordinate notation, including
      extraction from free-form language-model replies
    - snapshot / restore: lossless JSON-compatible position export
"""

from chess_duel.notation.algebraic import extract_uci, move_notation, move_to_uci, parse_uci
from chess_duel.notation.fen import from_fen, to_fen
from chess_duel.notation.snapshot import restore, snapshot

__all__ = [
    'extract_uci',
    'from_fen',
    'move_notation',
    'move_to_uci',
    'parse_uci',
    'restore',
    'snapshot',
    'to_fen',
]
