"""
Utilities Module

Testing and benchmarking helpers for the rules and search engines.

Key Components:
    - perft: Move generation verification by leaf counting
    - TACTICAL_POSITIONS: Short tactical suite with known best moves
    - run_tactical_suite / evaluate_position: Search accuracy and timing
"""

from chess_duel.utils.testing import (
    TACTICAL_POSITIONS,
    evaluate_position,
    perft,
    run_tactical_suite,
)

__all__ = [
    'TACTICAL_POSITIONS',
    'evaluate_position',
    'perft',
    'run_tactical_suite',
]
