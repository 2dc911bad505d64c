"""
Unit Tests for the Game Facade

Tests for the operations used by UI, relay, storage and opponent players.
"""

import json
import logging

import pytest

from chess_duel import BLACK, WHITE, Game, GameStatus
from chess_duel.board import DRAW, STARTING_FEN, parse_square


@pytest.fixture
def game():
    return Game()


class TestGameSetup:
    """Tests for game construction."""

    def test_new_game(self, game):
        assert game.to_fen() == STARTING_FEN
        assert game.status is GameStatus.ACTIVE
        assert game.side_to_move == WHITE
        assert game.ply == 0
        assert game.winner is None
        assert not game.is_over
        assert game.last_move is None

    def test_from_fen_classifies(self):
        game = Game.from_fen("k7/2Q5/1K6/8/8/8/8/8 b - - 0 1")
        assert game.status is GameStatus.STALEMATE
        assert game.winner == DRAW
        assert not game.apply_uci("a8b8")

    def test_from_fen_active(self):
        game = Game.from_fen("4k3/8/8/8/8/8/8/R3K3 w Q - 0 1")
        assert game.status is GameStatus.ACTIVE
        assert game.apply_uci("e1c1")
        assert game.move_log == ["O-O-O"]

    def test_from_fen_invalid(self):
        with pytest.raises(ValueError):
            Game.from_fen("not a fen")

    def test_reset(self, game):
        game.apply_uci("e2e4")
        game.reset()
        assert game.to_fen() == STARTING_FEN
        assert game.move_log == []


class TestGameMoves:
    """Tests for move entry points."""

    def test_apply(self, game):
        assert game.apply(parse_square("e2"), parse_square("e4"))
        assert game.side_to_move == BLACK
        assert game.ply == 1
        assert game.move_log == ["e4"]

    def test_apply_uci(self, game):
        assert game.apply_uci("g1f3")
        assert game.apply_uci("G8F6")
        assert game.move_log == ["Nf3", "Nf6"]

    @pytest.mark.parametrize("text", ["e2e5", "e7e5", "zz", "", "e2e4e"])
    def test_apply_uci_rejects(self, game, text):
        assert not game.apply_uci(text)
        assert game.to_fen() == STARTING_FEN

    def test_rejected_move_is_logged(self, game, caplog):
        with caplog.at_level(logging.DEBUG, logger="chess_duel"):
            game.apply_uci("e2e5")
        assert "Rejected move" in caplog.text

    def test_apply_move_with_underpromotion(self):
        game = Game.from_fen("8/P6k/8/8/8/8/8/K7 w - - 0 1")
        assert game.apply_uci("a7a8n")
        assert game.position.piece_at(parse_square("a8")) == "N"

    def test_legal_moves_follow_side_to_move(self, game):
        assert len(game.legal_moves()) == 20
        game.apply_uci("e2e4")
        assert {move.from_square[0] for move in game.legal_moves()} <= {0, 1}
        assert len(game.legal_moves(WHITE)) > 20

    def test_apply_legal_move_object(self, game):
        move = game.legal_moves()[0]
        assert game.apply_move(move)
        assert game.ply == 1

    def test_is_in_check(self, game):
        for text in ("e2e4", "d7d5", "f1b5"):
            game.apply_uci(text)
        assert game.is_in_check()
        assert game.is_in_check(BLACK)
        assert not game.is_in_check(WHITE)

    def test_checkmate_logged(self, game, caplog):
        with caplog.at_level(logging.INFO, logger="chess_duel"):
            for text in ("f2f3", "e7e5", "g2g4", "d8h4"):
                assert game.apply_uci(text)
        assert game.status is GameStatus.CHECKMATE
        assert game.winner == BLACK
        assert "Game over" in caplog.text


class TestGameEndings:
    """Tests for resign and timeout."""

    def test_resign(self, game):
        assert game.resign(BLACK)
        assert game.is_over
        assert game.status is GameStatus.RESIGNED
        assert game.winner == WHITE
        assert not game.resign(WHITE)

    def test_timeout(self, game):
        game.apply_uci("e2e4")
        assert game.timeout_loss(WHITE)
        assert game.status is GameStatus.TIMEOUT
        assert game.winner == BLACK
        assert not game.apply_uci("e7e5")


class TestGameRelay:
    """Tests for state transfer between peers."""

    def test_is_stale(self, game):
        game.apply_uci("e2e4")
        assert game.is_stale(0)
        assert game.is_stale(1)
        assert not game.is_stale(2)

    def test_snapshot_restore_through_json(self, game):
        for text in ("e2e4", "e7e5", "g1f3"):
            game.apply_uci(text)
        payload = json.dumps(game.snapshot())

        peer = Game()
        peer.restore(json.loads(payload))

        assert peer.to_fen() == game.to_fen()
        assert peer.position == game.position
        assert peer.apply_uci("b8c6")

    def test_from_snapshot(self, game):
        game.apply_uci("d2d4")
        copy = Game.from_snapshot(game.snapshot())
        assert copy.position == game.position

    def test_clone_is_independent(self, game):
        game.apply_uci("e2e4")
        copy = game.clone()
        copy.apply_uci("e7e5")

        assert game.ply == 1
        assert copy.ply == 2
        assert game.position.history != copy.position.history

    def test_repr(self, game):
        game.apply_uci("e2e4")
        text = repr(game)
        assert "status=active" in text
        assert "last_move=e2e4" in text
