"""
Unit Tests for Search Module

Tests for:
    - Alpha-beta minimax correctness (against plain minimax)
    - Tactical results (captures and mates)
    - Root randomization and determinism under a seed
    - Difficulty levels
"""

import random

import pytest

from chess_duel.board import BLACK, Move, Position, parse_square
from chess_duel.evaluation import MATE_SCORE, ClassicalEvaluator
from chess_duel.notation import from_fen, snapshot
from chess_duel.rules import apply_move, legal_moves
from chess_duel.search import depth_for_difficulty, find_best_move, search, select_move
from chess_duel.search.difficulty import DEFAULT_DIFFICULTY, DIFFICULTY_DEPTHS


def play(position, *moves):
    for text in moves:
        assert apply_move(position, parse_square(text[:2]), parse_square(text[2:4])), text
    return position


def move(text):
    return Move(parse_square(text[:2]), parse_square(text[2:4]))


def plain_minimax(position, depth, evaluator):
    """Reference minimax without pruning."""
    if depth == 0 or position.is_terminal:
        return evaluator.evaluate(position)
    scores = []
    for candidate in legal_moves(position):
        child = position.clone()
        apply_move(child, candidate.from_square, candidate.to_square)
        scores.append(plain_minimax(child, depth - 1, evaluator))
    return max(scores) if position.side_to_move == "white" else min(scores)


class TestFindBestMove:
    """Tests for root move selection."""

    @pytest.mark.parametrize("seed", range(5))
    def test_white_takes_hanging_queen(self, seed):
        position = from_fen("4k3/8/8/3q4/8/8/3R4/4K3 w - - 0 1")
        best, score, _ = find_best_move(position, 1, rng=random.Random(seed))
        assert best == move("d2d5")
        assert score > 0

    @pytest.mark.parametrize("depth", [1, 2])
    @pytest.mark.parametrize("seed", range(5))
    def test_black_takes_queen(self, seed, depth):
        position = from_fen("4k3/8/8/3r4/8/8/3Q4/4K3 b - - 0 1")
        best, _, _ = find_best_move(position, depth, rng=random.Random(seed))
        assert best == move("d5d2")

    def test_finds_back_rank_mate(self):
        position = from_fen("6k1/5ppp/8/8/8/8/8/R6K w - - 0 1")
        best, score, _ = find_best_move(position, 2, rng=random.Random(1))
        assert best == move("a1a8")
        assert score == MATE_SCORE

    def test_finds_fools_mate(self):
        position = play(Position.initial(), "f2f3", "e7e5", "g2g4")
        best, score, _ = find_best_move(position, 1, rng=random.Random(3))
        assert best == move("d8h4")
        assert score == -MATE_SCORE

    def test_terminal_position(self):
        position = play(Position.initial(), "f2f3", "e7e5", "g2g4", "d8h4")
        best, score, nodes = find_best_move(position, 3)
        assert best is None
        assert score == -MATE_SCORE
        assert nodes == 0

    def test_unclassified_position_without_moves(self):
        position = from_fen("k7/2Q5/1K6/8/8/8/8/8 b - - 0 1")
        best, score, nodes = find_best_move(position, 2)
        assert best is None
        assert nodes == 0

    @pytest.mark.parametrize("depth", [0, -1])
    def test_invalid_depth(self, depth):
        with pytest.raises(ValueError):
            find_best_move(Position.initial(), depth)

    def test_position_not_mutated(self):
        position = play(Position.initial(), "e2e4", "d7d5")
        before = snapshot(position)

        find_best_move(position, 2, rng=random.Random(0))

        assert snapshot(position) == before

    def test_seeded_search_is_deterministic(self):
        position = play(Position.initial(), "e2e4", "e7e5")
        first = find_best_move(position, 2, rng=random.Random(42))
        second = find_best_move(position, 2, rng=random.Random(42))
        assert first == second

    def test_node_counts(self):
        _, _, nodes = find_best_move(Position.initial(), 1, rng=random.Random(0))
        assert nodes == 20

        _, _, nodes = find_best_move(Position.initial(), 2, rng=random.Random(0))
        assert 20 < nodes <= 420

    def test_returned_move_is_legal(self):
        position = play(Position.initial(), "d2d4", "g8f6", "c2c4")
        best = select_move(position, 2, rng=random.Random(5))
        assert best in legal_moves(position)
        assert best.promotion is None

    def test_custom_evaluator(self):
        class Constant(ClassicalEvaluator):
            def evaluate(self, position):
                return 7.0

        _, score, _ = find_best_move(Position.initial(), 2, evaluator=Constant())
        assert score == 7.0


class TestAlphaBeta:
    """Tests comparing pruned search against plain minimax."""

    @pytest.mark.parametrize(
        "fen",
        [
            "4k3/8/8/3r4/8/8/3Q4/4K3 b - - 0 1",
            "r1bqkbnr/pppp1ppp/2n5/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R w KQkq - 2 3",
            "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
        ],
    )
    def test_matches_plain_minimax(self, fen):
        evaluator = ClassicalEvaluator()
        position = from_fen(fen)
        _, score, _ = find_best_move(position, 2, evaluator, random.Random(0))
        assert score == plain_minimax(position, 2, evaluator)

    def test_search_counts_nodes(self):
        nodes = [0]
        search(Position.initial(), 1, -float("inf"), float("inf"), True, None, nodes)
        assert nodes[0] == 21

    def test_depth_zero_is_static_eval(self):
        position = from_fen("4k3/8/8/3q4/8/8/3R4/4K3 w - - 0 1")
        score = search(position, 0, -float("inf"), float("inf"), True)
        assert score == ClassicalEvaluator().evaluate(position)


class TestDifficulty:
    """Tests for difficulty levels."""

    @pytest.mark.parametrize(
        "name, depth",
        [("easy", 1), ("normal", 2), ("hard", 3), ("expert", 4), ("Expert", 4)],
    )
    def test_mapping(self, name, depth):
        assert depth_for_difficulty(name) == depth

    def test_default(self):
        assert DEFAULT_DIFFICULTY == "hard"
        assert depth_for_difficulty() == DIFFICULTY_DEPTHS["hard"]

    def test_unknown_difficulty(self):
        with pytest.raises(ValueError):
            depth_for_difficulty("grandmaster")

    def test_easy_opponent_plays_a_move(self):
        position = play(Position.initial(), "e2e4")
        assert position.side_to_move == BLACK
        best = select_move(position, depth_for_difficulty("easy"), rng=random.Random(9))
        assert best in legal_moves(position)
