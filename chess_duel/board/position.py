"""
Position

The position holds the board and every piece of metadata needed to decide
move legality and game termination. It carries no rules of its own: the
rules engine in chess_duel.rules is the only code that mutates it.

Piece Encoding:
    Pieces are stored as single FEN characters. Uppercase is White,
    lowercase is Black, and None marks an empty square.

        P/p: Pawn    N/n: Knight    B/b: Bishop
        R/r: Rook    Q/q: Queen     K/k: King
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, NamedTuple, Optional

from chess_duel.board.representation import Square, square_name

# Colors
WHITE = "white"
BLACK = "black"

# Piece kinds (lowercase FEN letters)
PAWN = "p"
KNIGHT = "n"
BISHOP = "b"
ROOK = "r"
QUEEN = "q"
KING = "k"
PROMOTION_KINDS = (QUEEN, ROOK, BISHOP, KNIGHT)

# Draw outcomes recorded in Position.winner
DRAW = "draw"
DRAW_FIFTY_MOVES = "draw (fifty-move rule)"
DRAW_INSUFFICIENT_MATERIAL = "draw (insufficient material)"
DRAW_REPETITION = "draw (repetition)"

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

# fmt: off
STARTING_SQUARES = [
    ["r", "n", "b", "q", "k", "b", "n", "r"],
    ["p", "p", "p", "p", "p", "p", "p", "p"],
    [None, None, None, None, None, None, None, None],
    [None, None, None, None, None, None, None, None],
    [None, None, None, None, None, None, None, None],
    [None, None, None, None, None, None, None, None],
    ["P", "P", "P", "P", "P", "P", "P", "P"],
    ["R", "N", "B", "Q", "K", "B", "N", "R"],
]
# fmt: on


def opposite(color: str) -> str:
    """Return the other color."""
    return BLACK if color == WHITE else WHITE


def piece_color(piece: str) -> str:
    """Color of a piece symbol ('P' -> white, 'p' -> black)."""
    return WHITE if piece.isupper() else BLACK


def piece_kind(piece: str) -> str:
    """Kind of a piece symbol, as a lowercase letter."""
    return piece.lower()


def make_piece(kind: str, color: str) -> str:
    """Build a piece symbol from kind and color."""
    return kind.upper() if color == WHITE else kind.lower()


def home_row(color: str) -> int:
    """Back-rank row for a color."""
    return 7 if color == WHITE else 0


class MoveKind(str, Enum):
    """Category of a candidate move."""
    INVALID = "invalid"
    NORMAL = "normal"
    CASTLE_KINGSIDE = "castle-kingside"
    CASTLE_QUEENSIDE = "castle-queenside"
    EN_PASSANT = "en-passant"


class GameStatus(str, Enum):
    """Game status. Anything other than ACTIVE is terminal."""
    ACTIVE = "active"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    DRAW = "draw"
    RESIGNED = "resigned"
    TIMEOUT = "timeout"


class Move(NamedTuple):
    """A move request: source, destination and optional promotion kind."""
    from_square: Square
    to_square: Square
    promotion: Optional[str] = None

    def __str__(self) -> str:
        text = square_name(self.from_square) + square_name(self.to_square)
        return text + (self.promotion or "")


@dataclass(frozen=True)
class LastMove:
    """
    Descriptor of the most recently applied move.

    Attributes:
        from_square: Source square
        to_square: Destination square
        captured: True if a piece was taken (including en passant)
        check: True if the side now to move is in check
        kind: Move category
    """
    from_square: Square
    to_square: Square
    captured: bool
    check: bool
    kind: MoveKind


@dataclass
class CastlingRights:
    """Four independent castling flags. Flags are only ever cleared."""
    white_kingside: bool = True
    white_queenside: bool = True
    black_kingside: bool = True
    black_queenside: bool = True

    def kingside(self, color: str) -> bool:
        return self.white_kingside if color == WHITE else self.black_kingside

    def queenside(self, color: str) -> bool:
        return self.white_queenside if color == WHITE else self.black_queenside

    def clear(self, color: str, kingside: bool = True, queenside: bool = True):
        """Revoke the given rights for one color."""
        if color == WHITE:
            if kingside:
                self.white_kingside = False
            if queenside:
                self.white_queenside = False
        else:
            if kingside:
                self.black_kingside = False
            if queenside:
                self.black_queenside = False

    def fen(self) -> str:
        """Castling field as used in FEN ('-' when none remain)."""
        letters = ""
        if self.white_kingside:
            letters += "K"
        if self.white_queenside:
            letters += "Q"
        if self.black_kingside:
            letters += "k"
        if self.black_queenside:
            letters += "q"
        return letters or "-"


def _empty_squares() -> List[List[Optional[str]]]:
    return [[None] * 8 for _ in range(8)]


def _empty_captures() -> Dict[str, List[str]]:
    return {WHITE: [], BLACK: []}


@dataclass
class Position:
    """
    Complete game state.

    Attributes:
        squares: 8x8 grid of piece symbols (None = empty), row 0 = rank 8
        side_to_move: WHITE or BLACK
        castling_rights: Remaining castling flags
        en_passant_target: Square a pawn may capture onto en passant, valid
            for exactly one reply
        halfmove_clock: Half-moves since the last pawn move or capture
        fullmove_number: Incremented after each Black move
        ply: Half-moves played since the start (0-based)
        status: Current GameStatus
        winner: WHITE, BLACK, a draw description, or None while active
        history: Position fingerprints, one per reached position
        move_log: Algebraic notation of every applied move
        captured: Piece kinds captured from each color, in capture order
        last_move: Most recently applied move, or None
    """
    squares: List[List[Optional[str]]] = field(default_factory=_empty_squares)
    side_to_move: str = WHITE
    castling_rights: CastlingRights = field(default_factory=CastlingRights)
    en_passant_target: Optional[Square] = None
    halfmove_clock: int = 0
    fullmove_number: int = 1
    ply: int = 0
    status: GameStatus = GameStatus.ACTIVE
    winner: Optional[str] = None
    history: List[str] = field(default_factory=list)
    move_log: List[str] = field(default_factory=list)
    captured: Dict[str, List[str]] = field(default_factory=_empty_captures)
    last_move: Optional[LastMove] = None

    @classmethod
    def initial(cls) -> "Position":
        """Standard starting array, with its fingerprint recorded."""
        position = cls(squares=[list(row) for row in STARTING_SQUARES])
        position.history.append(position.fingerprint())
        return position

    @property
    def is_terminal(self) -> bool:
        return self.status != GameStatus.ACTIVE

    def piece_at(self, square: Square) -> Optional[str]:
        row, col = square
        return self.squares[row][col]

    def king_square(self, color: str) -> Optional[Square]:
        """Locate a color's king, or None if it is missing."""
        king = make_piece(KING, color)
        for row in range(8):
            for col in range(8):
                if self.squares[row][col] == king:
                    return row, col
        return None

    def occupied(self):
        """Yield (square, piece) for every occupied square in scan order."""
        for row in range(8):
            for col in range(8):
                piece = self.squares[row][col]
                if piece is not None:
                    yield (row, col), piece

    def placement(self) -> str:
        """Board placement field (first FEN field)."""
        rows = []
        for row in self.squares:
            text = ""
            empty = 0
            for piece in row:
                if piece is None:
                    empty += 1
                    continue
                if empty:
                    text += str(empty)
                    empty = 0
                text += piece
            if empty:
                text += str(empty)
            rows.append(text)
        return "/".join(rows)

    def fingerprint(self) -> str:
        """
        Compact identity of the position for repetition counting.

        Covers board, side to move, castling rights and en-passant target.
        Move counters are deliberately excluded.
        """
        ep = square_name(self.en_passant_target) if self.en_passant_target else "-"
        side = "w" if self.side_to_move == WHITE else "b"
        return f"{self.placement()} {side} {self.castling_rights.fen()} {ep}"

    def clone(self) -> "Position":
        """Deep copy sharing no mutable state with this position."""
        return Position(
            squares=[list(row) for row in self.squares],
            side_to_move=self.side_to_move,
            castling_rights=CastlingRights(
                self.castling_rights.white_kingside,
                self.castling_rights.white_queenside,
                self.castling_rights.black_kingside,
                self.castling_rights.black_queenside,
            ),
            en_passant_target=self.en_passant_target,
            halfmove_clock=self.halfmove_clock,
            fullmove_number=self.fullmove_number,
            ply=self.ply,
            status=self.status,
            winner=self.winner,
            history=list(self.history),
            move_log=list(self.move_log),
            captured={color: list(kinds) for color, kinds in self.captured.items()},
            last_move=self.last_move,
        )
