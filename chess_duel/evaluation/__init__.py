"""
Evaluation Module

Position evaluation for the search engine. Evaluators are SWAPPABLE: the
search works with any object implementing the Evaluator interface.

Key Components:
    - Evaluator (ABC): Abstract base class defining the evaluation interface
    - ClassicalEvaluator: Material + piece-square table evaluation

Data Flow:
    Position → evaluator.evaluate() → float (centipawns)
                                       Positive = White advantage
                                       Negative = Black advantage
"""

from chess_duel.evaluation.base import MATE_SCORE, Evaluator
from chess_duel.evaluation.classical import ClassicalEvaluator

__all__ = ['ClassicalEvaluator', 'Evaluator', 'MATE_SCORE']
