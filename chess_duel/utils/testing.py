"""
Engine Testing and Benchmarking

This module provides move-generation verification and a small tactical
test suite for the search engine.

Tools:
    1. Perft: counts leaf nodes of the legal-move tree to a fixed depth.
       Counts match published perft tables for positions without
       promotions (promotions are generated as a single queening move).

    2. Tactical suite: short positions with a known best move
       (mates in one, hanging pieces) that a shallow search must solve.

Evaluation Metrics:
    - Correct Moves: Number of positions where engine found best move
    - Time per Position: Average thinking time
    - Nodes Searched: Total nodes visited

References:
    - Perft: https://www.chessprogramming.org/Perft
"""

import logging
import random
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from chess_duel.board.position import QUEEN, Position
from chess_duel.evaluation.base import Evaluator
from chess_duel.evaluation.classical import ClassicalEvaluator
from chess_duel.game import Game
from chess_duel.notation.algebraic import move_to_uci
from chess_duel.rules.movegen import legal_moves
from chess_duel.rules.moves import apply_move
from chess_duel.search.minimax import find_best_move

logger = logging.getLogger(__name__)


def perft(position: Position, depth: int) -> int:
    """
    Count leaf nodes of the legal-move tree.

    Args:
        position: Starting position (never mutated)
        depth: Depth in plies

    Returns:
        Number of positions reachable in exactly `depth` plies
    """
    if depth == 0:
        return 1
    if position.is_terminal:
        return 0

    moves = legal_moves(position, position.side_to_move)
    if depth == 1:
        return len(moves)

    total = 0
    for move in moves:
        child = position.clone()
        apply_move(child, move.from_square, move.to_square, QUEEN)
        total += perft(child, depth - 1)
    return total


@dataclass
class TestPosition:
    """
    A test position with expected best move(s).

    Attributes:
        fen: Board position in FEN notation
        best_moves: List of acceptable best moves (coordinate notation)
        description: Human-readable description of the position
        id: Position identifier
    """
    __test__ = False  # not a pytest test class

    fen: str
    best_moves: List[str]
    description: str = ""
    id: str = ""


@dataclass
class TestResult:
    """
    Result of testing a single position.

    Attributes:
        position: The test position
        found_move: Move the engine found (coordinate notation)
        score: Evaluation score for the move
        correct: Whether the engine found a best move
        time_taken: Time spent searching (seconds)
        nodes_searched: Number of nodes visited
        depth: Search depth used
    """
    __test__ = False

    position: TestPosition
    found_move: str
    score: float
    correct: bool
    time_taken: float
    nodes_searched: int = 0
    depth: int = 0


TACTICAL_POSITIONS = [
    TestPosition(
        id="TAC.01",
        fen="6k1/5ppp/8/8/8/8/8/R6K w - - 0 1",
        best_moves=["a1a8"],
        description="Back-rank mate with Ra8#"
    ),
    TestPosition(
        id="TAC.02",
        fen="rnbqkbnr/pppp1ppp/8/4p3/6P1/5P2/PPPPP2P/RNBQKBNR b KQkq - 0 2",
        best_moves=["d8h4"],
        description="Fool's mate with Qh4#"
    ),
    TestPosition(
        id="TAC.03",
        fen="4k3/8/8/3q4/8/8/3R4/4K3 w - - 0 1",
        best_moves=["d2d5"],
        description="White wins the undefended queen with Rxd5"
    ),
    TestPosition(
        id="TAC.04",
        fen="4k3/8/8/3r4/8/8/3Q4/4K3 b - - 0 1",
        best_moves=["d5d2"],
        description="Black trades rook for queen with Rxd2"
    ),
    TestPosition(
        id="TAC.05",
        fen="k7/8/1K6/8/8/8/7Q/8 w - - 0 1",
        best_moves=["h2h8"],
        description="Queen mates on the back rank with Qh8#"
    ),
]


def evaluate_position(
    position: TestPosition,
    depth: int,
    evaluator: Optional[Evaluator] = None,
    rng: Optional[random.Random] = None,
) -> TestResult:
    """
    Search a single test position.

    Args:
        position: Test position to evaluate
        depth: Search depth
        evaluator: Position evaluator (default: ClassicalEvaluator)
        rng: Random source for the root shuffle

    Returns:
        TestResult with engine's move and whether it was correct
    """
    game = Game.from_fen(position.fen)
    start_time = time.time()

    best_move, score, nodes = find_best_move(
        game.position,
        depth,
        evaluator or ClassicalEvaluator(),
        rng,
    )

    time_taken = time.time() - start_time
    found_move = move_to_uci(best_move) if best_move else ""
    correct = found_move in position.best_moves

    logger.info(
        f"{position.id}: found {found_move or '-'} (expected {', '.join(position.best_moves)}), "
        f"score={score:.1f}, nodes={nodes}, {'correct' if correct else 'WRONG'}"
    )

    return TestResult(
        position=position,
        found_move=found_move,
        score=score,
        correct=correct,
        time_taken=time_taken,
        nodes_searched=nodes,
        depth=depth,
    )


def run_tactical_suite(
    depth: int = 2,
    evaluator: Optional[Evaluator] = None,
    positions: Optional[List[TestPosition]] = None,
    rng: Optional[random.Random] = None,
) -> Dict[str, Any]:
    """
    Run the tactical test suite.

    Args:
        depth: Search depth (default: 2)
        evaluator: Position evaluator (default: ClassicalEvaluator)
        positions: Positions to test (default: TACTICAL_POSITIONS)
        rng: Random source for the root shuffle

    Returns:
        Dictionary with test results:
            - score: Number of correct positions
            - total: Total number of positions
            - percentage: Success percentage
            - results: List of TestResult objects
            - avg_time: Average time per position
            - total_time: Total search time
    """
    positions = TACTICAL_POSITIONS if positions is None else positions

    results = [evaluate_position(position, depth, evaluator, rng) for position in positions]
    correct_count = sum(1 for result in results if result.correct)
    total_time = sum(result.time_taken for result in results)

    avg_time = total_time / len(positions) if positions else 0
    percentage = (correct_count / len(positions) * 100) if positions else 0

    logger.info(f"Tactical suite at depth {depth}: {correct_count}/{len(positions)} ({percentage:.1f}%)")

    return {
        'score': correct_count,
        'total': len(positions),
        'percentage': percentage,
        'results': results,
        'avg_time': avg_time,
        'total_time': total_time,
    }
