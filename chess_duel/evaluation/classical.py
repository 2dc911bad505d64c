"""
Classical Piece-Square Table Evaluation

This module implements a traditional chess evaluation function using:
    1. Material counting (piece values)
    2. Piece-Square Tables for pawns, knights and bishops

Evaluation Components:
    - Material: P=100, N=320, B=330, R=500, Q=900, K=20000
    - Position: PST bonuses for pawns, knights and bishops

The king's value cancels out (both sides always have one) but keeps
king captures unmistakable in any hand-built position.

Reference:
    Simplified Evaluation Function
    https://www.chessprogramming.org/Simplified_Evaluation_Function
"""

import numpy as np

from chess_duel.board.position import (
    BISHOP,
    KING,
    KNIGHT,
    PAWN,
    QUEEN,
    ROOK,
    WHITE,
    Position,
    piece_color,
    piece_kind,
)
from chess_duel.board.representation import mirror_row
from chess_duel.evaluation.base import Evaluator

# fmt: off
# ============================================================================
# Material Values (centipawns)
# ============================================================================

PIECE_VALUES = {
    PAWN: 100,
    KNIGHT: 320,
    BISHOP: 330,
    ROOK: 500,
    QUEEN: 900,
    KING: 20000,
}


# ============================================================================
# Piece-Square Tables (PSTs)
# ============================================================================
# Values are from White's perspective (row 0 = rank 8, row 7 = rank 1).
# Black pieces read the table flipped vertically.
# ============================================================================

# Pawn PST: Encourage central pawns, reward advanced pawns
PAWN_TABLE = np.array([
    [  0,   0,   0,   0,   0,   0,   0,   0],  # Rank 8 (promotion)
    [ 50,  50,  50,  50,  50,  50,  50,  50],  # Rank 7
    [ 10,  10,  20,  30,  30,  20,  10,  10],  # Rank 6
    [  5,   5,  10,  25,  25,  10,   5,   5],  # Rank 5
    [  0,   0,   0,  20,  20,   0,   0,   0],  # Rank 4
    [  5,  -5, -10,   0,   0, -10,  -5,   5],  # Rank 3
    [  5,  10,  10, -20, -20,  10,  10,   5],  # Rank 2
    [  0,   0,   0,   0,   0,   0,   0,   0],  # Rank 1
], dtype=np.int32)

# Knight PST: "Knights on the rim are dim"
KNIGHT_TABLE = np.array([
    [-50, -40, -30, -30, -30, -30, -40, -50],
    [-40, -20,   0,   0,   0,   0, -20, -40],
    [-30,   0,  10,  15,  15,  10,   0, -30],
    [-30,   5,  15,  20,  20,  15,   5, -30],
    [-30,   0,  15,  20,  20,  15,   0, -30],
    [-30,   5,  10,  15,  15,  10,   5, -30],
    [-40, -20,   0,   5,   5,   0, -20, -40],
    [-50, -40, -30, -30, -30, -30, -40, -50],
], dtype=np.int32)

# Bishop PST: Prefer long diagonals, avoid corners
BISHOP_TABLE = np.array([
    [-20, -10, -10, -10, -10, -10, -10, -20],
    [-10,   0,   0,   0,   0,   0,   0, -10],
    [-10,   0,   5,  10,  10,   5,   0, -10],
    [-10,   5,   5,  10,  10,   5,   5, -10],
    [-10,   0,  10,  10,  10,  10,   0, -10],
    [-10,  10,  10,  10,  10,  10,  10, -10],
    [-10,   5,   0,   0,   0,   0,   5, -10],
    [-20, -10, -10, -10, -10, -10, -10, -20],
], dtype=np.int32)
# fmt: on


class ClassicalEvaluator(Evaluator):
    """
    Classical evaluation using material and piece-square tables.

    Attributes:
        piece_tables: Dictionary mapping piece kinds to PST rows
    """

    def __init__(self):
        """Initialize the classical evaluator with piece-square tables."""
        # Plain nested lists: scalar lookups are much cheaper than on ndarrays
        self.piece_tables = {
            PAWN: PAWN_TABLE.tolist(),
            KNIGHT: KNIGHT_TABLE.tolist(),
            BISHOP: BISHOP_TABLE.tolist(),
        }

    def evaluate(self, position: Position) -> float:
        """
        Evaluate position using material + PST.

        Args:
            position: Position to evaluate

        Returns:
            float: Evaluation in centipawns (White's perspective)
        """
        terminal_score = self.evaluate_terminal(position)
        if terminal_score is not None:
            return terminal_score

        score = 0
        for (row, col), piece in position.occupied():
            kind = piece_kind(piece)
            value = PIECE_VALUES[kind]

            table = self.piece_tables.get(kind)
            white = piece_color(piece) == WHITE
            if table is not None:
                value += table[row][col] if white else table[mirror_row(row)][col]

            score += value if white else -value

        return float(score)
