"""
Search Module

Move search for the scripted opponent: minimax with alpha-beta pruning
over cloned positions, plus the difficulty-to-depth mapping.

Key Components:
    - search: Core alpha-beta recursion
    - find_best_move: Root search returning move, score and node count
    - select_move: Root search returning just the move
    - depth_for_difficulty: easy/normal/hard/expert -> 1..4
"""

from chess_duel.search.difficulty import DIFFICULTY_DEPTHS, depth_for_difficulty
from chess_duel.search.minimax import find_best_move, search, select_move

__all__ = [
    'DIFFICULTY_DEPTHS',
    'depth_for_difficulty',
    'find_best_move',
    'search',
    'select_move',
]
