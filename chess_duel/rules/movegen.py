"""
Move Generation and King Safety

This module classifies candidate moves, detects attacks and filters
pseudo-legal moves down to legal ones.

Key Concepts:
    - Pseudo-legal: follows piece geometry and occupancy rules, but may
      leave the mover's own king in check
    - Legal: pseudo-legal and does not expose the mover's king

Attack detection never goes back through move_kind(). Castling legality
asks whether squares are attacked, so routing attacks through move_kind()
would recurse between the two kings forever. Kings are tested by
adjacency instead.
"""

from typing import Iterator, List, Optional

from chess_duel.board.position import (
    BISHOP,
    KING,
    KNIGHT,
    PAWN,
    QUEEN,
    ROOK,
    WHITE,
    Move,
    MoveKind,
    Position,
    home_row,
    make_piece,
    opposite,
    piece_color,
    piece_kind,
)
from chess_duel.board.representation import Square, is_on_board

KNIGHT_OFFSETS = (
    (-2, -1), (-2, 1), (-1, -2), (-1, 2),
    (1, -2), (1, 2), (2, -1), (2, 1),
)
KING_OFFSETS = (
    (-1, -1), (-1, 0), (-1, 1), (0, -1),
    (0, 1), (1, -1), (1, 0), (1, 1),
)
ROOK_DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))
BISHOP_DIRECTIONS = ((-1, -1), (-1, 1), (1, -1), (1, 1))

SLIDER_DIRECTIONS = {
    ROOK: ROOK_DIRECTIONS,
    BISHOP: BISHOP_DIRECTIONS,
    QUEEN: ROOK_DIRECTIONS + BISHOP_DIRECTIONS,
}


def pawn_direction(color: str) -> int:
    """Row delta of a single pawn step (White moves toward row 0)."""
    return -1 if color == WHITE else 1


def is_path_clear(position: Position, from_square: Square, to_square: Square) -> bool:
    """
    Check that every square strictly between two squares is empty.

    The squares must share a rank, file or diagonal.
    """
    (r1, c1), (r2, c2) = from_square, to_square
    dr = (r2 > r1) - (r2 < r1)
    dc = (c2 > c1) - (c2 < c1)
    row, col = r1 + dr, c1 + dc
    while (row, col) != (r2, c2):
        if position.squares[row][col] is not None:
            return False
        row += dr
        col += dc
    return True


def _slider_geometry(kind: str, dr: int, dc: int) -> bool:
    straight = dr == 0 or dc == 0
    diagonal = abs(dr) == abs(dc)
    if kind == ROOK:
        return straight
    if kind == BISHOP:
        return diagonal
    return straight or diagonal


def move_kind(position: Position, piece: str, from_square: Square, to_square: Square) -> MoveKind:
    """
    Classify a single candidate move for the given piece.

    Does not check whether the move leaves the mover's own king in check;
    see would_expose_check().

    Args:
        position: Current position
        piece: Symbol of the moving piece
        from_square: Source square
        to_square: Destination square

    Returns:
        MoveKind (INVALID if the move breaks piece geometry or occupancy rules)
    """
    if from_square == to_square:
        return MoveKind.INVALID

    (r1, c1), (r2, c2) = from_square, to_square
    color = piece_color(piece)
    target = position.squares[r2][c2]

    if target is not None and piece_color(target) == color:
        return MoveKind.INVALID

    kind = piece_kind(piece)
    dr = r2 - r1
    dc = c2 - c1

    if kind == PAWN:
        direction = pawn_direction(color)
        start_row = 6 if color == WHITE else 1
        if dc == 0 and target is None:
            if dr == direction:
                return MoveKind.NORMAL
            if (
                dr == 2 * direction
                and r1 == start_row
                and position.squares[r1 + direction][c1] is None
            ):
                return MoveKind.NORMAL
        if abs(dc) == 1 and dr == direction:
            if target is not None:
                return MoveKind.NORMAL
            if position.en_passant_target == to_square:
                passed = position.squares[r1][c2]
                if passed == make_piece(PAWN, opposite(color)):
                    return MoveKind.EN_PASSANT
        return MoveKind.INVALID

    if kind == KNIGHT:
        if (abs(dr), abs(dc)) in ((1, 2), (2, 1)):
            return MoveKind.NORMAL
        return MoveKind.INVALID

    if kind == KING:
        if abs(dr) <= 1 and abs(dc) <= 1:
            return MoveKind.NORMAL
        if dr == 0 and abs(dc) == 2:
            return _castle_kind(position, color, from_square, dc > 0)
        return MoveKind.INVALID

    if not _slider_geometry(kind, dr, dc):
        return MoveKind.INVALID
    if is_path_clear(position, from_square, to_square):
        return MoveKind.NORMAL
    return MoveKind.INVALID


def _castle_kind(position: Position, color: str, from_square: Square, kingside: bool) -> MoveKind:
    rights = position.castling_rights
    if not (rights.kingside(color) if kingside else rights.queenside(color)):
        return MoveKind.INVALID

    row = home_row(color)
    if from_square != (row, 4):
        return MoveKind.INVALID

    # Flags can outlive a missed update; the pieces themselves must be home.
    rook_col = 7 if kingside else 0
    if position.squares[row][rook_col] != make_piece(ROOK, color):
        return MoveKind.INVALID

    between = (5, 6) if kingside else (1, 2, 3)
    if any(position.squares[row][col] is not None for col in between):
        return MoveKind.INVALID

    if is_in_check(position, color):
        return MoveKind.INVALID

    traversed = (5, 6) if kingside else (3, 2)
    if any(is_attacked(position, (row, col), color) for col in traversed):
        return MoveKind.INVALID

    return MoveKind.CASTLE_KINGSIDE if kingside else MoveKind.CASTLE_QUEENSIDE


def _attacks(position: Position, piece: str, from_square: Square, square: Square) -> bool:
    (r1, c1), (r2, c2) = from_square, square
    dr = r2 - r1
    dc = c2 - c1
    if dr == 0 and dc == 0:
        return False

    kind = piece_kind(piece)
    if kind == PAWN:
        # Pawns attack diagonally whether or not the square is occupied
        return dr == pawn_direction(piece_color(piece)) and abs(dc) == 1
    if kind == KNIGHT:
        return (abs(dr), abs(dc)) in ((1, 2), (2, 1))
    if kind == KING:
        return abs(dr) <= 1 and abs(dc) <= 1
    return _slider_geometry(kind, dr, dc) and is_path_clear(position, from_square, square)


def is_attacked(position: Position, square: Square, defender: str) -> bool:
    """
    Check whether the opponent of `defender` attacks a square.

    Args:
        position: Current position
        square: Square to test
        defender: Color whose safety is being tested

    Returns:
        True if any opposing piece could capture on the square
    """
    attacker = opposite(defender)
    for from_square, piece in position.occupied():
        if piece_color(piece) == attacker and _attacks(position, piece, from_square, square):
            return True
    return False


def is_in_check(position: Position, color: str) -> bool:
    """
    Check whether a color's king is attacked.

    Raises:
        RuntimeError: If the color has no king on the board
    """
    king = position.king_square(color)
    if king is None:
        raise RuntimeError(f"No {color} king on the board")
    return is_attacked(position, king, color)


def would_expose_check(
    position: Position,
    from_square: Square,
    to_square: Square,
    kind: MoveKind,
    color: str,
) -> bool:
    """
    Simulate a move on the live board and report whether it leaves the
    mover's king in check.

    The board is restored before returning; no clone is made.
    """
    squares = position.squares
    (r1, c1), (r2, c2) = from_square, to_square
    moving = squares[r1][c1]
    target = squares[r2][c2]

    squares[r2][c2] = moving
    squares[r1][c1] = None

    passed_pawn = None
    if kind is MoveKind.EN_PASSANT:
        passed_pawn = squares[r1][c2]
        squares[r1][c2] = None

    rook_move = None
    if kind is MoveKind.CASTLE_KINGSIDE:
        rook_move = (7, 5)
    elif kind is MoveKind.CASTLE_QUEENSIDE:
        rook_move = (0, 3)
    if rook_move:
        squares[r1][rook_move[1]] = squares[r1][rook_move[0]]
        squares[r1][rook_move[0]] = None

    try:
        return is_in_check(position, color)
    finally:
        if rook_move:
            squares[r1][rook_move[0]] = squares[r1][rook_move[1]]
            squares[r1][rook_move[1]] = None
        if kind is MoveKind.EN_PASSANT:
            squares[r1][c2] = passed_pawn
        squares[r1][c1] = moving
        squares[r2][c2] = target


def _candidate_squares(position: Position, piece: str, from_square: Square) -> List[Square]:
    """Destinations worth classifying for a piece, in board-scan order."""
    row, col = from_square
    kind = piece_kind(piece)
    candidates = []

    if kind == PAWN:
        direction = pawn_direction(piece_color(piece))
        for dr, dc in ((direction, -1), (direction, 0), (direction, 1), (2 * direction, 0)):
            candidates.append((row + dr, col + dc))
    elif kind == KNIGHT:
        candidates = [(row + dr, col + dc) for dr, dc in KNIGHT_OFFSETS]
    elif kind == KING:
        candidates = [(row + dr, col + dc) for dr, dc in KING_OFFSETS]
        candidates += [(row, col - 2), (row, col + 2)]
    else:
        for dr, dc in SLIDER_DIRECTIONS[kind]:
            r, c = row + dr, col + dc
            while is_on_board(r, c):
                candidates.append((r, c))
                if position.squares[r][c] is not None:
                    break
                r += dr
                c += dc

    return sorted(square for square in candidates if is_on_board(*square))


def iter_legal_moves(position: Position, color: str) -> Iterator[Move]:
    """Lazily yield legal moves for a color in board-scan order."""
    for from_square, piece in position.occupied():
        if piece_color(piece) != color:
            continue
        for to_square in _candidate_squares(position, piece, from_square):
            kind = move_kind(position, piece, from_square, to_square)
            if kind is MoveKind.INVALID:
                continue
            if would_expose_check(position, from_square, to_square, kind, color):
                continue
            yield Move(from_square, to_square)


def legal_moves(position: Position, color: Optional[str] = None) -> List[Move]:
    """
    Enumerate every legal move for a color.

    Args:
        position: Current position
        color: Side to enumerate (default: side to move)

    Returns:
        List of Move(from_square, to_square), ordered by source square then
        destination square (rank 8 to rank 1, file a to file h)
    """
    return list(iter_legal_moves(position, color or position.side_to_move))


def has_legal_moves(position: Position, color: str) -> bool:
    """True as soon as one legal move is found."""
    return next(iter_legal_moves(position, color), None) is not None
