"""
Abstract Evaluator Interface

This module defines the abstract base class for all position evaluators.
By defining a common interface, we can swap between
evaluators without modifying the search algorithm.

Key Principles:
    1. Evaluators are stateless
    2. evaluate() always returns centipawns from White's perspective
    3. Positive = White advantage, Negative = Black advantage
    4. Decided games return +/-MATE_SCORE, drawn games return 0

Convention:
    - Material values in centipawns (1/100th of a pawn, pawn = 100, queen = 900)
    - Mate scores are not adjusted for distance to mate
"""

from abc import ABC, abstractmethod
from typing import Optional

from chess_duel.board.position import BLACK, WHITE, Position

MATE_SCORE = 100000  # Checkmate (or any decided game)


class Evaluator(ABC):
    """
    Abstract base class for position evaluation.

    All evaluator implementations must inherit from this class and implement
    the evaluate() method. This ensures compatibility with the search algorithm.

    Methods:
        evaluate(position): Returns position evaluation in centipawns
    """

    @abstractmethod
    def evaluate(self, position: Position) -> float:
        """
        Evaluate a position from White's perspective.

        Args:
            position: Position to evaluate

        Returns:
            float: Evaluation in centipawns
        """
        pass

    def evaluate_terminal(self, position: Position) -> Optional[float]:
        """
        Evaluate a finished game.

        Args:
            position: Position to evaluate

        Returns:
            float: +MATE_SCORE if White won, -MATE_SCORE if Black won,
                0 for any draw
            None: If the game is still active
        """
        if not position.is_terminal:
            return None

        if position.winner == WHITE:
            return float(MATE_SCORE)
        if position.winner == BLACK:
            return float(-MATE_SCORE)
        return 0.0

    def __repr__(self) -> str:
        """String representation of evaluator."""
        return f"{self.__class__.__name__}()"
