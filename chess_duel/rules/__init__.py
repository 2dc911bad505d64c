"""
Rules Module

Chess rules over a Position: move classification, attack detection,
legality filtering, move application and termination.

Key Components:
    - move_kind: pseudo-legal classification of one candidate move
    - would_expose_check: self-check filter (simulate and revert in place)
    - legal_moves: all legal moves for a color
    - apply_move: the only mutator of a Position
    - classify_termination: checkmate/stalemate/draw detection
    - resign / timeout_loss: externally triggered game endings

Data Flow:
    (from, to) -> move_kind() -> would_expose_check() -> apply_move()
               -> classify_termination() -> Position.status
"""

from chess_duel.rules.movegen import (
    has_legal_moves,
    is_attacked,
    is_in_check,
    is_path_clear,
    legal_moves,
    move_kind,
    would_expose_check,
)
from chess_duel.rules.moves import apply_move
from chess_duel.rules.termination import (
    classify_termination,
    is_insufficient_material,
    is_threefold_repetition,
    resign,
    timeout_loss,
)

__all__ = [
    'apply_move',
    'classify_termination',
    'has_legal_moves',
    'is_attacked',
    'is_in_check',
    'is_insufficient_material',
    'is_path_clear',
    'is_threefold_repetition',
    'legal_moves',
    'move_kind',
    'resign',
    'timeout_loss',
    'would_expose_check',
]
