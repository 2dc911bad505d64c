"""
Board Coordinates

Squares are addressed as (row, col) tuples throughout the engine.

Board Orientation:
    - Row 0 = Rank 8 (Black's back rank)
    - Row 7 = Rank 1 (White's back rank)
    - Column 0 = A-file
    - Column 7 = H-file

This matches the piece-square tables, which are written top-down from
White's point of view.
"""

from typing import Tuple

Square = Tuple[int, int]

FILES = "abcdefgh"
RANKS = "87654321"  # indexed by row


def is_on_board(row: int, col: int) -> bool:
    """Return True if (row, col) lies inside the 8x8 grid."""
    return 0 <= row < 8 and 0 <= col < 8


def square_name(square: Square) -> str:
    """
    Convert (row, col) coordinates to algebraic square name.

    Args:
        square: (row, col) where row 0 is rank 8

    Returns:
        Square name such as "e4"
    """
    row, col = square
    return FILES[col] + RANKS[row]


def parse_square(name: str) -> Square:
    """
    Convert an algebraic square name to (row, col) coordinates.

    Args:
        name: Square name such as "e4" (case-insensitive)

    Returns:
        Tuple of (row, col)

    Raises:
        ValueError: If the name is not a valid square
    """
    if len(name) != 2:
        raise ValueError(f"Invalid square name: {name!r}")

    file_char, rank_char = name[0].lower(), name[1]
    if file_char not in FILES or rank_char not in RANKS:
        raise ValueError(f"Invalid square name: {name!r}")

    return RANKS.index(rank_char), FILES.index(file_char)


def mirror_row(row: int) -> int:
    """Flip a row vertically (rank 8 <-> rank 1)."""
    return 7 - row
