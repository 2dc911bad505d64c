"""
Difficulty Levels

Named difficulty levels map to fixed search depths. The search itself is
depth-parametric and knows nothing about these names.
"""

from typing import Optional

DIFFICULTY_DEPTHS = {
    "easy": 1,    # greedy, one ply
    "normal": 2,  # sees the immediate reply
    "hard": 3,
    "expert": 4,  # noticeably slow
}

DEFAULT_DIFFICULTY = "hard"


def depth_for_difficulty(difficulty: Optional[str] = None) -> int:
    """
    Look up the search depth for a difficulty name.

    Args:
        difficulty: One of DIFFICULTY_DEPTHS (case-insensitive);
            None selects DEFAULT_DIFFICULTY

    Returns:
        Search depth in plies

    Raises:
        ValueError: If the name is unknown
    """
    name = (difficulty or DEFAULT_DIFFICULTY).lower()
    if name not in DIFFICULTY_DEPTHS:
        raise ValueError(
            f"Unknown difficulty {difficulty!r}, expected one of {sorted(DIFFICULTY_DEPTHS)}"
        )
    return DIFFICULTY_DEPTHS[name]
