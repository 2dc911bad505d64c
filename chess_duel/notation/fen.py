"""
Forsyth-Edwards Notation (FEN)

Six space-separated fields:

    rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1
    |                                             | |    |  | |
    placement (rank 8 first)                   side |  ep  | fullmove
                                             castling   halfmove
"""

from chess_duel.board.position import (
    BLACK,
    WHITE,
    CastlingRights,
    Position,
)
from chess_duel.board.representation import parse_square, square_name

PIECE_SYMBOLS = set("pnbrqkPNBRQK")


def to_fen(position: Position) -> str:
    """Export a position as a standard six-field FEN string."""
    ep = square_name(position.en_passant_target) if position.en_passant_target else "-"
    side = "w" if position.side_to_move == WHITE else "b"
    return (
        f"{position.placement()} {side} {position.castling_rights.fen()} {ep} "
        f"{position.halfmove_clock} {position.fullmove_number}"
    )


def _parse_placement(placement: str):
    rows = placement.split("/")
    if len(rows) != 8:
        raise ValueError(f"Expected 8 ranks in FEN placement, got {len(rows)}")

    squares = []
    for text in rows:
        row = []
        for char in text:
            if char.isdigit():
                if not 1 <= int(char) <= 8:
                    raise ValueError(f"Invalid empty-run length in FEN: {char!r}")
                row.extend([None] * int(char))
            elif char in PIECE_SYMBOLS:
                row.append(char)
            else:
                raise ValueError(f"Invalid character in FEN placement: {char!r}")
        if len(row) != 8:
            raise ValueError(f"FEN rank {text!r} does not describe 8 squares")
        squares.append(row)
    return squares


def _parse_castling(field: str) -> CastlingRights:
    if field == "-":
        return CastlingRights(False, False, False, False)
    if not field or any(char not in "KQkq" for char in field):
        raise ValueError(f"Invalid castling field in FEN: {field!r}")
    return CastlingRights("K" in field, "Q" in field, "k" in field, "q" in field)


def from_fen(fen: str) -> Position:
    """
    Build a position from a FEN string.

    The halfmove and fullmove fields may be omitted (defaults 0 and 1).
    The resulting position is active and its fingerprint is recorded in
    history; termination is not classified here.

    Args:
        fen: FEN string

    Returns:
        New Position

    Raises:
        ValueError: If the FEN is malformed
    """
    fields = fen.split()
    if not 4 <= len(fields) <= 6:
        raise ValueError(f"Expected 4 to 6 FEN fields, got {len(fields)}: {fen!r}")

    squares = _parse_placement(fields[0])

    if fields[1] not in ("w", "b"):
        raise ValueError(f"Invalid side to move in FEN: {fields[1]!r}")
    side = WHITE if fields[1] == "w" else BLACK

    castling = _parse_castling(fields[2])

    en_passant = None
    if fields[3] != "-":
        en_passant = parse_square(fields[3])
        if en_passant[0] not in (2, 5):
            raise ValueError(f"Invalid en-passant square in FEN: {fields[3]!r}")

    try:
        halfmove = int(fields[4]) if len(fields) > 4 else 0
        fullmove = int(fields[5]) if len(fields) > 5 else 1
    except ValueError:
        raise ValueError(f"Invalid move counters in FEN: {fen!r}")
    if halfmove < 0 or fullmove < 1:
        raise ValueError(f"Invalid move counters in FEN: {fen!r}")

    position = Position(
        squares=squares,
        side_to_move=side,
        castling_rights=castling,
        en_passant_target=en_passant,
        halfmove_clock=halfmove,
        fullmove_number=fullmove,
    )
    position.history.append(position.fingerprint())
    return position
