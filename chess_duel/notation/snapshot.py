"""
Position Snapshots

snapshot() exports every Position field as plain JSON-compatible data
(dicts, lists, strings, numbers, booleans, None); restore() is its exact
inverse. Snapshots are used for session persistence and for bringing a
network peer to an identical state.

restore() trusts its input. Callers loading foreign data must validate its
shape first.
"""

from typing import Any, Dict, Optional

from chess_duel.board.position import (
    BLACK,
    WHITE,
    CastlingRights,
    GameStatus,
    LastMove,
    MoveKind,
    Position,
)


def _square(value) -> Optional[tuple]:
    return tuple(value) if value is not None else None


def snapshot(position: Position) -> Dict[str, Any]:
    """Export a position as JSON-compatible data."""
    rights = position.castling_rights
    last = position.last_move
    return {
        "squares": [list(row) for row in position.squares],
        "side_to_move": position.side_to_move,
        "castling_rights": {
            "white_kingside": rights.white_kingside,
            "white_queenside": rights.white_queenside,
            "black_kingside": rights.black_kingside,
            "black_queenside": rights.black_queenside,
        },
        "en_passant_target": (
            list(position.en_passant_target) if position.en_passant_target else None
        ),
        "halfmove_clock": position.halfmove_clock,
        "fullmove_number": position.fullmove_number,
        "ply": position.ply,
        "status": position.status.value,
        "winner": position.winner,
        "history": list(position.history),
        "move_log": list(position.move_log),
        "captured": {
            WHITE: list(position.captured[WHITE]),
            BLACK: list(position.captured[BLACK]),
        },
        "last_move": None if last is None else {
            "from": list(last.from_square),
            "to": list(last.to_square),
            "captured": last.captured,
            "check": last.check,
            "kind": last.kind.value,
        },
    }


def restore(data: Dict[str, Any]) -> Position:
    """Rebuild a position from snapshot() output."""
    last = data["last_move"]
    return Position(
        squares=[list(row) for row in data["squares"]],
        side_to_move=data["side_to_move"],
        castling_rights=CastlingRights(**data["castling_rights"]),
        en_passant_target=_square(data["en_passant_target"]),
        halfmove_clock=data["halfmove_clock"],
        fullmove_number=data["fullmove_number"],
        ply=data["ply"],
        status=GameStatus(data["status"]),
        winner=data["winner"],
        history=list(data["history"]),
        move_log=list(data["move_log"]),
        captured={
            WHITE: list(data["captured"][WHITE]),
            BLACK: list(data["captured"][BLACK]),
        },
        last_move=None if last is None else LastMove(
            from_square=_square(last["from"]),
            to_square=_square(last["to"]),
            captured=last["captured"],
            check=last["check"],
            kind=MoveKind(last["kind"]),
        ),
    )
