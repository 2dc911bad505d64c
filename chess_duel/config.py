"""
Engine configuration for the scripted opponent and UCI front end.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from chess_duel.search.difficulty import DEFAULT_DIFFICULTY, DIFFICULTY_DEPTHS

MAX_SEARCH_DEPTH = 10


@dataclass
class EngineConfig:
    """Configuration for the computer opponent.

    Groups the search strength, reproducibility and logging settings in one
    place. An explicit depth overrides the named difficulty.
    """

    # Strength
    difficulty: str = DEFAULT_DIFFICULTY
    """Named difficulty: 'easy', 'normal', 'hard' or 'expert'"""

    depth: Optional[int] = None
    """Explicit search depth in plies (overrides difficulty when set)"""

    # Reproducibility
    random_seed: Optional[int] = None
    """Seed for the root move shuffle (None for nondeterministic play)"""

    # Logging
    log_dir: Path = Path.home() / ".chessduel"
    """Directory for the UCI engine log file"""

    debug: bool = False
    """Log at DEBUG level instead of INFO"""

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.log_dir = Path(self.log_dir)
        self.difficulty = self.difficulty.lower()

        if self.difficulty not in DIFFICULTY_DEPTHS:
            raise ValueError(
                f"difficulty should be one of {sorted(DIFFICULTY_DEPTHS)}, got {self.difficulty!r}"
            )

        if self.depth is not None and not 1 <= self.depth <= MAX_SEARCH_DEPTH:
            raise ValueError(
                f"depth must be between 1 and {MAX_SEARCH_DEPTH}, got {self.depth}"
            )

    @property
    def search_depth(self) -> int:
        """Depth actually used by the search."""
        if self.depth is not None:
            return self.depth
        return DIFFICULTY_DEPTHS[self.difficulty]

    def __repr__(self) -> str:
        """String representation of config."""
        return (
            f"EngineConfig(difficulty={self.difficulty}, depth={self.search_depth}, "
            f"seed={self.random_seed}, log_dir={self.log_dir}, debug={self.debug})"
        )
