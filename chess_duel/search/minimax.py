"""
Minimax Search with Alpha-Beta Pruning

This module implements the move search for the scripted opponent.
Minimax explores the game tree to find the best move, and alpha-beta
pruning cuts branches that cannot affect the result.

Key Concepts:
    - Minimax: Recursive algorithm that assumes optimal play by both sides
    - Alpha-Beta: Optimization that prunes branches that can't affect result
    - Root shuffle: legal moves are randomly permuted at the root so equal
      moves are chosen fairly

Every node works on its own clone of the position, so sibling branches
never share mutable state. There is no move ordering, transposition table,
quiescence search or time cutoff: a given depth always runs to completion.

Algorithm Complexity:
    - Minimax: O(b^d) where b=branching factor (~35), d=depth
    - Alpha-Beta: between O(b^(d/2)) and O(b^d) depending on move order

References:
    - Minimax: https://www.chessprogramming.org/Minimax
    - Alpha-Beta: https://www.chessprogramming.org/Alpha-Beta
"""

import logging
import random
from typing import List, Optional, Tuple

from chess_duel.board.position import QUEEN, WHITE, Move, Position
from chess_duel.evaluation.base import Evaluator
from chess_duel.evaluation.classical import ClassicalEvaluator
from chess_duel.rules.movegen import legal_moves
from chess_duel.rules.moves import apply_move

logger = logging.getLogger(__name__)

_default_evaluator = ClassicalEvaluator()


def _child(position: Position, move: Move) -> Position:
    child = position.clone()
    apply_move(child, move.from_square, move.to_square, move.promotion or QUEEN)
    return child


def search(
    position: Position,
    depth: int,
    alpha: float,
    beta: float,
    maximizing_player: bool,
    evaluator: Optional[Evaluator] = None,
    nodes_searched: Optional[List[int]] = None,
) -> float:
    """
    Minimax search with alpha-beta pruning.

    Args:
        position: Position to search (never mutated)
        depth: Remaining search depth (decrements each recursive call)
        alpha: Best score the maximizer can already guarantee
        beta: Best score the minimizer can already guarantee
        maximizing_player: True if the side to move wants the highest score
        evaluator: Position evaluation function (default: ClassicalEvaluator)
        nodes_searched: Optional mutable list [count] to track positions visited

    Returns:
        float: Evaluation of the best line found, from White's perspective
    """
    evaluator = evaluator or _default_evaluator
    if nodes_searched is not None:
        nodes_searched[0] += 1

    if depth == 0 or position.is_terminal:
        return evaluator.evaluate(position)

    moves = legal_moves(position, position.side_to_move)
    if not moves:
        # Only reachable for positions that were never classified (e.g. from FEN)
        return evaluator.evaluate(position)

    if maximizing_player:
        max_eval = -float("inf")
        for move in moves:
            eval_score = search(
                _child(position, move),
                depth - 1,
                alpha,
                beta,
                False,
                evaluator,
                nodes_searched,
            )
            max_eval = max(max_eval, eval_score)
            alpha = max(alpha, eval_score)

            if beta <= alpha:
                break

        return max_eval

    else:
        min_eval = float("inf")
        for move in moves:
            eval_score = search(
                _child(position, move),
                depth - 1,
                alpha,
                beta,
                True,
                evaluator,
                nodes_searched,
            )
            min_eval = min(min_eval, eval_score)
            beta = min(beta, eval_score)

            if beta <= alpha:
                break

        return min_eval


def find_best_move(
    position: Position,
    depth: int,
    evaluator: Optional[Evaluator] = None,
    rng: Optional[random.Random] = None,
) -> Tuple[Optional[Move], float, int]:
    """
    Find the best move in the current position.

    Args:
        position: Current position (never mutated)
        depth: Search depth in plies, at least 1
        evaluator: Position evaluation function (default: ClassicalEvaluator)
        rng: Random source for the root shuffle (default: module random)

    Returns:
        Tuple of (best_move, evaluation, nodes)
            - best_move: The best move found, None if there are no legal moves
            - evaluation: Score of the best move (static eval if none)
            - nodes: Number of positions visited

    Raises:
        ValueError: If depth is less than 1
    """
    if depth < 1:
        raise ValueError(f"Search depth must be at least 1, got {depth}")

    evaluator = evaluator or _default_evaluator
    moves = legal_moves(position, position.side_to_move)
    if position.is_terminal or not moves:
        return None, evaluator.evaluate(position), 0

    (rng or random).shuffle(moves)

    maximizing = position.side_to_move == WHITE
    best_move = None
    best_score = -float("inf") if maximizing else float("inf")
    nodes = [0]

    for move in moves:
        score = search(
            _child(position, move),
            depth - 1,
            -float("inf"),
            float("inf"),
            not maximizing,
            evaluator,
            nodes,
        )

        if maximizing:
            if score > best_score:
                best_score = score
                best_move = move
        else:
            if score < best_score:
                best_score = score
                best_move = move

    logger.debug(
        f"Searched depth {depth}: best={best_move}, score={best_score:.1f}, nodes={nodes[0]}"
    )
    return best_move, best_score, nodes[0]


def select_move(
    position: Position,
    depth: int,
    evaluator: Optional[Evaluator] = None,
    rng: Optional[random.Random] = None,
) -> Optional[Move]:
    """
    Pick a move for the side to move.

    Returns:
        The chosen Move, or None if the game is over or no move exists
    """
    best_move, _, _ = find_best_move(position, depth, evaluator, rng)
    return best_move
