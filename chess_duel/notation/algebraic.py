"""
Algebraic and Coordinate Move Notation

Two notations are produced here:

    - Short algebraic notation for the move log ("Nf3", "exd5", "O-O").
      Check and mate suffixes are appended by the rules engine once the
      resulting position has been classified.
    - Coordinate (UCI) notation for engine and language-model exchange
      ("e2e4", "e7e8q").
"""

import re
from typing import Iterable, Optional

from chess_duel.board.position import PAWN, PROMOTION_KINDS, Move, MoveKind, piece_kind
from chess_duel.board.representation import FILES, Square, parse_square, square_name

UCI_PATTERN = re.compile(r"[a-h][1-8][a-h][1-8][qrbn]?", re.IGNORECASE)


def move_notation(
    piece: str,
    from_square: Square,
    to_square: Square,
    is_capture: bool,
    kind: MoveKind,
) -> str:
    """
    Build the algebraic notation of a move, without check suffix.

    Args:
        piece: Symbol of the moving piece
        from_square: Source square
        to_square: Destination square
        is_capture: True if the move takes a piece
        kind: Move category

    Returns:
        Notation such as "O-O", "Nf3", "Bxc6" or "exd6"
    """
    if kind is MoveKind.CASTLE_KINGSIDE:
        return "O-O"
    if kind is MoveKind.CASTLE_QUEENSIDE:
        return "O-O-O"

    kind_letter = piece_kind(piece)
    text = "" if kind_letter == PAWN else kind_letter.upper()

    if is_capture:
        if kind_letter == PAWN:
            text += FILES[from_square[1]]
        text += "x"

    return text + square_name(to_square)


def move_to_uci(move: Move) -> str:
    """Coordinate notation of a move, e.g. "e2e4" or "a7a8q"."""
    return str(move)


def parse_uci(text: str) -> Move:
    """
    Parse a coordinate-notation move.

    Args:
        text: Move such as "e2e4" or "e7e8q" (case-insensitive)

    Returns:
        Move with optional promotion kind

    Raises:
        ValueError: If the text is not a coordinate move
    """
    text = text.strip().lower()
    if not UCI_PATTERN.fullmatch(text):
        raise ValueError(f"Invalid coordinate move: {text!r}")

    promotion = text[4] if len(text) == 5 else None
    if promotion is not None and promotion not in PROMOTION_KINDS:
        raise ValueError(f"Invalid promotion piece: {promotion!r}")

    return Move(parse_square(text[0:2]), parse_square(text[2:4]), promotion)


def extract_uci(text: str, legal_moves: Iterable[Move]) -> Optional[Move]:
    """
    Pull the first legal coordinate move out of free-form text.

    Intended for replies from a language-model opponent, which may wrap the
    move in prose. A promotion suffix is kept but ignored when matching.

    Args:
        text: Free-form reply
        legal_moves: Legal moves for the side to move

    Returns:
        The first matching Move, or None if no legal move is mentioned
    """
    legal = {(move.from_square, move.to_square) for move in legal_moves}
    for match in UCI_PATTERN.findall(text or ""):
        move = parse_uci(match)
        if (move.from_square, move.to_square) in legal:
            return move
    return None
