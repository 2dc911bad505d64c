"""
Game Termination

classify_termination() runs after every applied move. The rules are tested
in a fixed order and only the first match applies:

    1. No legal moves     -> checkmate (in check) or stalemate
    2. Halfmove clock 100 -> draw (fifty-move rule)
    3. Bare kings, or kings plus one knight or bishop -> draw
    4. Current fingerprint seen 3 times -> draw (repetition)

resign() and timeout_loss() are entry points for the UI, clock and network
collaborators; the rules engine never calls them itself.
"""

from chess_duel.board.position import (
    BISHOP,
    DRAW,
    DRAW_FIFTY_MOVES,
    DRAW_INSUFFICIENT_MATERIAL,
    DRAW_REPETITION,
    KING,
    KNIGHT,
    GameStatus,
    Position,
    opposite,
    piece_kind,
)
from chess_duel.rules.movegen import has_legal_moves, is_in_check

FIFTY_MOVE_LIMIT = 100  # half-moves
REPETITION_LIMIT = 3


def is_insufficient_material(position: Position) -> bool:
    """
    Bare kings, or bare kings plus a single knight or bishop.

    Other theoretically drawn material (e.g. two knights) is not covered.
    """
    kinds = [piece_kind(piece) for _, piece in position.occupied()]
    if kinds.count(KING) != 2:
        return False
    if len(kinds) == 2:
        return True
    return len(kinds) == 3 and any(kind in (KNIGHT, BISHOP) for kind in kinds)


def is_threefold_repetition(position: Position) -> bool:
    """True if the current fingerprint appears at least three times in history."""
    return position.history.count(position.fingerprint()) >= REPETITION_LIMIT


def classify_termination(position: Position) -> GameStatus:
    """
    Update status and winner for the side now to move.

    Returns:
        The resulting GameStatus
    """
    color = position.side_to_move

    if not has_legal_moves(position, color):
        if is_in_check(position, color):
            position.status = GameStatus.CHECKMATE
            position.winner = opposite(color)
        else:
            position.status = GameStatus.STALEMATE
            position.winner = DRAW
    elif position.halfmove_clock >= FIFTY_MOVE_LIMIT:
        position.status = GameStatus.DRAW
        position.winner = DRAW_FIFTY_MOVES
    elif is_insufficient_material(position):
        position.status = GameStatus.DRAW
        position.winner = DRAW_INSUFFICIENT_MATERIAL
    elif is_threefold_repetition(position):
        position.status = GameStatus.DRAW
        position.winner = DRAW_REPETITION

    return position.status


def resign(position: Position, color: str) -> bool:
    """
    End the game with `color` resigning.

    Returns:
        False (and does nothing) if the game is already over
    """
    if position.is_terminal:
        return False
    position.status = GameStatus.RESIGNED
    position.winner = opposite(color)
    return True


def timeout_loss(position: Position, color: str) -> bool:
    """
    End the game with `color` losing on time.

    Returns:
        False (and does nothing) if the game is already over
    """
    if position.is_terminal:
        return False
    position.status = GameStatus.TIMEOUT
    position.winner = opposite(color)
    return True
