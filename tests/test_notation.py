"""
Unit Tests for Notation Module

Tests for:
    - FEN import and export
    - Algebraic move log entries
    - Coordinate (UCI) move parsing and extraction
    - JSON snapshots
"""

import json

import chess
import pytest

from chess_duel.board import BLACK, STARTING_FEN, WHITE, GameStatus, Move, MoveKind, Position, parse_square
from chess_duel.notation import (
    extract_uci,
    from_fen,
    move_notation,
    move_to_uci,
    parse_uci,
    restore,
    snapshot,
    to_fen,
)
from chess_duel.rules import apply_move, legal_moves


def play(position, *moves):
    for text in moves:
        assert apply_move(position, parse_square(text[:2]), parse_square(text[2:4])), text
    return position


class TestFen:
    """Tests for FEN conversion."""

    def test_starting_position(self):
        assert to_fen(Position.initial()) == STARTING_FEN

    def test_export_after_moves(self):
        position = play(Position.initial(), "e2e4", "c7c5", "g1f3")
        assert to_fen(position) == "rnbqkbnr/pp1ppppp/8/2p5/4P3/5N2/PPPP1PPP/RNBQKB1R b KQkq - 1 2"

    def test_export_keeps_en_passant_target(self):
        position = play(Position.initial(), "e2e4")
        assert to_fen(position) == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"

    @pytest.mark.parametrize(
        "fen",
        [
            STARTING_FEN,
            "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1",
            "rnbqkbnr/ppp1p1pp/8/3pPp2/8/8/PPPP1PPP/RNBQKBNR w KQkq f6 0 3",
            "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 b - - 12 40",
        ],
    )
    def test_round_trip(self, fen):
        assert to_fen(from_fen(fen)) == fen

    def test_matches_python_chess_placement(self):
        position = play(Position.initial(), "d2d4", "g8f6", "c2c4", "e7e6")
        board = chess.Board()
        for uci in ("d2d4", "g8f6", "c2c4", "e7e6"):
            board.push_uci(uci)

        assert position.placement() == board.board_fen()

    def test_short_fen_defaults_counters(self):
        position = from_fen("4k3/8/8/8/8/8/8/4K3 b - -")
        assert position.side_to_move == BLACK
        assert position.halfmove_clock == 0
        assert position.fullmove_number == 1

    def test_import_records_fingerprint(self):
        position = from_fen(STARTING_FEN)
        assert position.history == [position.fingerprint()]
        assert position.status is GameStatus.ACTIVE

    def test_import_fields(self):
        position = from_fen("r3k2r/8/8/3pP3/8/8/8/R3K2R w Kq d6 4 20")
        assert position.piece_at(parse_square("a8")) == "r"
        assert position.castling_rights.white_kingside
        assert not position.castling_rights.white_queenside
        assert not position.castling_rights.black_kingside
        assert position.castling_rights.black_queenside
        assert position.en_passant_target == parse_square("d6")
        assert position.halfmove_clock == 4
        assert position.fullmove_number == 20

    @pytest.mark.parametrize(
        "fen",
        [
            "",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP w KQkq - 0 1",
            "rnbqkbnr/pppppppp/9/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/ppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNX w KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR x KQkq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQxq - 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq e4 0 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - x 1",
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 0",
        ],
    )
    def test_invalid_fen_raises(self, fen):
        with pytest.raises(ValueError):
            from_fen(fen)


class TestAlgebraic:
    """Tests for move log notation."""

    @pytest.mark.parametrize(
        "piece, from_name, to_name, capture, kind, expected",
        [
            ("P", "e2", "e4", False, MoveKind.NORMAL, "e4"),
            ("N", "g1", "f3", False, MoveKind.NORMAL, "Nf3"),
            ("b", "b4", "c3", True, MoveKind.NORMAL, "Bxc3"),
            ("p", "d7", "c6", True, MoveKind.NORMAL, "dxc6"),
            ("P", "e5", "d6", True, MoveKind.EN_PASSANT, "exd6"),
            ("K", "e1", "g1", False, MoveKind.CASTLE_KINGSIDE, "O-O"),
            ("k", "e8", "c8", False, MoveKind.CASTLE_QUEENSIDE, "O-O-O"),
        ],
    )
    def test_move_notation(self, piece, from_name, to_name, capture, kind, expected):
        assert move_notation(piece, parse_square(from_name), parse_square(to_name), capture, kind) == expected

    def test_ruy_lopez_exchange_log(self):
        position = play(
            Position.initial(),
            "e2e4", "e7e5", "g1f3", "b8c6", "f1b5", "a7a6", "b5c6", "d7c6", "e1g1",
        )
        assert position.move_log == ["e4", "e5", "Nf3", "Nc6", "Bb5", "a6", "Bxc6", "dxc6", "O-O"]

    def test_check_suffix(self):
        position = play(Position.initial(), "e2e4", "d7d5", "f1b5")
        assert position.move_log[-1] == "Bb5+"
        assert position.last_move.check

    def test_promotion_logged_as_pawn_move(self):
        position = play(from_fen("8/P6k/8/8/8/8/8/K7 w - - 0 1"), "a7a8")
        assert position.move_log == ["a8"]


class TestCoordinateNotation:
    """Tests for UCI move strings."""

    def test_parse(self):
        assert parse_uci("e2e4") == Move(parse_square("e2"), parse_square("e4"), None)
        assert parse_uci(" E7E8Q ") == Move(parse_square("e7"), parse_square("e8"), "q")

    @pytest.mark.parametrize("text", ["", "e2", "e2e9", "i2e4", "e7e8k", "e2-e4"])
    def test_parse_invalid(self, text):
        with pytest.raises(ValueError):
            parse_uci(text)

    def test_format(self):
        assert move_to_uci(Move(parse_square("g1"), parse_square("f3"))) == "g1f3"
        assert move_to_uci(Move(parse_square("a7"), parse_square("a8"), "n")) == "a7a8n"
        assert str(parse_uci("b7b8r")) == "b7b8r"

    def test_extract_first_legal(self):
        moves = legal_moves(Position.initial())
        reply = "I considered e2e5 but I will play g1f3, then maybe d2d4."
        assert extract_uci(reply, moves) == parse_uci("g1f3")

    def test_extract_none(self):
        moves = legal_moves(Position.initial())
        assert extract_uci("Let me think about it.", moves) is None
        assert extract_uci("e7e5", moves) is None
        assert extract_uci(None, moves) is None


class TestSnapshot:
    """Tests for snapshot export and restore."""

    @pytest.fixture
    def midgame(self):
        position = play(Position.initial(), "e2e4", "a7a6", "e4e5", "d7d5", "e5d6", "c7d6")
        return position

    def test_json_round_trip(self, midgame):
        data = json.loads(json.dumps(snapshot(midgame)))
        restored = restore(data)

        assert restored == midgame
        assert restored.last_move.from_square == parse_square("c7")
        assert isinstance(restored.last_move.to_square, tuple)

    def test_round_trip_with_en_passant_target(self):
        position = play(Position.initial(), "e2e4")
        restored = restore(json.loads(json.dumps(snapshot(position))))

        assert restored.en_passant_target == parse_square("e3")
        assert restored == position

    def test_restored_position_continues(self, midgame):
        restored = restore(snapshot(midgame))
        play(restored, "g1f3")

        assert restored.side_to_move == BLACK
        assert midgame.side_to_move == WHITE

    def test_terminal_state_survives(self):
        position = play(Position.initial(), "f2f3", "e7e5", "g2g4", "d8h4")
        restored = restore(snapshot(position))

        assert restored.status is GameStatus.CHECKMATE
        assert restored.winner == BLACK
        assert not apply_move(restored, parse_square("e2"), parse_square("e3"))

    def test_snapshot_is_plain_data(self):
        data = snapshot(Position.initial())
        assert data["side_to_move"] == WHITE
        assert data["status"] == "active"
        assert data["last_move"] is None
        assert data["castling_rights"]["black_queenside"] is True
