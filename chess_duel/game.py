"""
Game Facade

Game wraps a Position and exposes the operations consumed by the board UI,
clock, network relay, session storage and opponent players:

    apply / apply_uci        the only mutators of board state
    legal_moves              move hints, opponent enumeration, relay checks
    is_in_check, status,     read-only display state
    winner, ply
    to_fen                   clipboard export
    snapshot / restore       session persistence and peer sync
    resign / timeout_loss    UI and clock termination

Game is not thread-safe. Searches must run on clones (see clone()), and
callers must not mutate the live game while a search over it is running.
"""

import logging
from typing import Any, Dict, List, Optional

from chess_duel.board.position import QUEEN, GameStatus, LastMove, Move, Position
from chess_duel.board.representation import Square, square_name
from chess_duel.notation.algebraic import parse_uci
from chess_duel.notation.fen import from_fen, to_fen
from chess_duel.notation.snapshot import restore, snapshot
from chess_duel.rules import movegen, termination
from chess_duel.rules.moves import apply_move

logger = logging.getLogger(__name__)


class Game:
    """
    A single chess game.

    Attributes:
        position: The live Position
    """

    def __init__(self, position: Optional[Position] = None):
        self.position = position if position is not None else Position.initial()

    @classmethod
    def from_fen(cls, fen: str) -> "Game":
        """
        Start a game from a FEN string.

        The position is classified immediately, so a FEN describing a mate
        or stalemate yields a finished game.

        Raises:
            ValueError: If the FEN is malformed
        """
        position = from_fen(fen)
        termination.classify_termination(position)
        return cls(position)

    @classmethod
    def from_snapshot(cls, data: Dict[str, Any]) -> "Game":
        return cls(restore(data))

    def reset(self):
        """Replace the position with the standard starting array."""
        self.position = Position.initial()

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def status(self) -> GameStatus:
        return self.position.status

    @property
    def winner(self) -> Optional[str]:
        return self.position.winner

    @property
    def is_over(self) -> bool:
        return self.position.is_terminal

    @property
    def side_to_move(self) -> str:
        return self.position.side_to_move

    @property
    def ply(self) -> int:
        return self.position.ply

    @property
    def move_log(self) -> List[str]:
        return self.position.move_log

    @property
    def last_move(self) -> Optional[LastMove]:
        return self.position.last_move

    def is_in_check(self, color: Optional[str] = None) -> bool:
        return movegen.is_in_check(self.position, color or self.position.side_to_move)

    def legal_moves(self, color: Optional[str] = None) -> List[Move]:
        return movegen.legal_moves(self.position, color or self.position.side_to_move)

    def is_stale(self, ply: int) -> bool:
        """
        Check a relayed move's ply tag against this game.

        A peer tags each move with the ply observed after applying it, so a
        tag at or below the local ply is a duplicate or out-of-date packet.
        """
        return ply <= self.position.ply

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------

    def apply(self, from_square: Square, to_square: Square, promotion: Optional[str] = QUEEN) -> bool:
        """
        Apply a move.

        Returns:
            True if applied, False if rejected (state unchanged)
        """
        if not apply_move(self.position, from_square, to_square, promotion):
            logger.debug(
                f"Rejected move {from_square}->{to_square} at ply {self.position.ply}"
            )
            return False

        if self.position.is_terminal:
            logger.info(
                f"Game over after {self.position.move_log[-1]}: "
                f"{self.position.status.value}, winner={self.position.winner}"
            )
        return True

    def apply_uci(self, text: str) -> bool:
        """
        Apply a coordinate-notation move such as "e2e4" or "e7e8n".

        Malformed text is rejected like any other illegal move.
        """
        try:
            move = parse_uci(text)
        except ValueError:
            logger.debug(f"Rejected malformed move text {text!r}")
            return False
        return self.apply(move.from_square, move.to_square, move.promotion or QUEEN)

    def apply_move(self, move: Move) -> bool:
        return self.apply(move.from_square, move.to_square, move.promotion or QUEEN)

    def resign(self, color: str) -> bool:
        """Resign on behalf of `color`. No-op on a finished game."""
        if termination.resign(self.position, color):
            logger.info(f"{color} resigned at ply {self.position.ply}")
            return True
        return False

    def timeout_loss(self, color: str) -> bool:
        """Flag `color` as out of time. No-op on a finished game."""
        if termination.timeout_loss(self.position, color):
            logger.info(f"{color} lost on time at ply {self.position.ply}")
            return True
        return False

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_fen(self) -> str:
        return to_fen(self.position)

    def snapshot(self) -> Dict[str, Any]:
        return snapshot(self.position)

    def restore(self, data: Dict[str, Any]):
        """Replace the whole position with a snapshot."""
        self.position = restore(data)

    def clone(self) -> "Game":
        return Game(self.position.clone())

    def __repr__(self) -> str:
        last = self.position.last_move
        last_text = (
            f"{square_name(last.from_square)}{square_name(last.to_square)}" if last else None
        )
        return (
            f"Game(fen={self.to_fen()!r}, status={self.status.value}, last_move={last_text})"
        )
