"""
Move Application

apply_move() is the only mutator of a Position. A rejected move leaves the
position untouched; an accepted move updates every field in one pass:

    1. Captured list and halfmove clock
    2. Board relocation (plus rook for castling, passed pawn for en passant)
    3. Castling rights (king/rook leaving home, rook captured at home)
    4. En-passant target
    5. Promotion (queen by default)
    6. Side to move, fullmove number, ply
    7. History fingerprint and move log
    8. Termination, last move and check/mate suffix
"""

from typing import Optional

from chess_duel.board.position import (
    BLACK,
    KING,
    PAWN,
    PROMOTION_KINDS,
    QUEEN,
    ROOK,
    GameStatus,
    LastMove,
    MoveKind,
    Position,
    home_row,
    make_piece,
    opposite,
    piece_color,
    piece_kind,
)
from chess_duel.board.representation import Square, is_on_board
from chess_duel.notation.algebraic import move_notation
from chess_duel.rules.movegen import is_in_check, move_kind, would_expose_check
from chess_duel.rules.termination import classify_termination


def _clear_rook_right(position: Position, color: str, square: Square):
    row, col = square
    if row != home_row(color):
        return
    if col == 7:
        position.castling_rights.clear(color, queenside=False)
    elif col == 0:
        position.castling_rights.clear(color, kingside=False)


def update_castling_rights(
    position: Position,
    piece: str,
    from_square: Square,
    captured: Optional[str],
    to_square: Square,
):
    """
    Revoke castling rights after a move.

    Args:
        position: Position being updated
        piece: Symbol of the moving piece
        from_square: Square the piece left
        captured: Symbol of the piece taken on to_square, if any
        to_square: Square the piece arrived on
    """
    color = piece_color(piece)
    kind = piece_kind(piece)

    if kind == KING:
        position.castling_rights.clear(color)
    elif kind == ROOK:
        _clear_rook_right(position, color, from_square)

    if captured is not None and piece_kind(captured) == ROOK:
        _clear_rook_right(position, piece_color(captured), to_square)


def _promotion_kind(promotion: Optional[str]) -> str:
    kind = promotion.lower() if promotion else QUEEN
    return kind if kind in PROMOTION_KINDS else QUEEN


def apply_move(
    position: Position,
    from_square: Square,
    to_square: Square,
    promotion: Optional[str] = QUEEN,
) -> bool:
    """
    Apply a move if it is legal.

    Args:
        position: Position to mutate
        from_square: Source square
        to_square: Destination square
        promotion: Piece kind for a pawn reaching the last rank; anything
            other than q/r/b/n becomes a queen

    Returns:
        True if the move was applied, False if it was rejected (game over,
        empty source, wrong side, illegal geometry or self-check)
    """
    if position.is_terminal:
        return False

    from_square, to_square = tuple(from_square), tuple(to_square)
    if not (is_on_board(*from_square) and is_on_board(*to_square)):
        return False

    piece = position.piece_at(from_square)
    if piece is None:
        return False

    color = piece_color(piece)
    if color != position.side_to_move:
        return False

    kind = move_kind(position, piece, from_square, to_square)
    if kind is MoveKind.INVALID:
        return False
    if would_expose_check(position, from_square, to_square, kind, color):
        return False

    squares = position.squares
    (r1, c1), (r2, c2) = from_square, to_square
    target = squares[r2][c2]
    mover = piece_kind(piece)
    is_capture = target is not None or kind is MoveKind.EN_PASSANT

    notation = move_notation(piece, from_square, to_square, is_capture, kind)

    if target is not None:
        position.captured[piece_color(target)].append(piece_kind(target))

    if mover == PAWN or target is not None:
        position.halfmove_clock = 0
    else:
        position.halfmove_clock += 1

    squares[r2][c2] = piece
    squares[r1][c1] = None

    if kind is MoveKind.CASTLE_KINGSIDE:
        squares[r1][5] = squares[r1][7]
        squares[r1][7] = None
    elif kind is MoveKind.CASTLE_QUEENSIDE:
        squares[r1][3] = squares[r1][0]
        squares[r1][0] = None
    elif kind is MoveKind.EN_PASSANT:
        passed_pawn = squares[r1][c2]
        position.captured[piece_color(passed_pawn)].append(PAWN)
        squares[r1][c2] = None

    update_castling_rights(position, piece, from_square, target, to_square)

    if mover == PAWN and abs(r2 - r1) == 2:
        position.en_passant_target = ((r1 + r2) // 2, c1)
    else:
        position.en_passant_target = None

    if mover == PAWN and r2 == home_row(opposite(color)):
        squares[r2][c2] = make_piece(_promotion_kind(promotion), color)

    if color == BLACK:
        position.fullmove_number += 1
    position.side_to_move = opposite(color)
    position.ply += 1

    position.history.append(position.fingerprint())
    position.move_log.append(notation)

    classify_termination(position)

    in_check = is_in_check(position, position.side_to_move)
    position.last_move = LastMove(from_square, to_square, is_capture, in_check, kind)

    if position.status is GameStatus.CHECKMATE:
        position.move_log[-1] += "#"
    elif in_check:
        position.move_log[-1] += "+"

    return True
