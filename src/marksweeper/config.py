"""
Configuration module for MarkSweeper.

Holds board dimensions, mine counts and the standard difficulty presets.
"""
from dataclasses import dataclass
from typing import Dict


# ============================================================================
# Board Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a MarkSweeper board.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Requested number of mines. Counts above
            ``rows * cols - 1`` are accepted and clamped at placement time.
    """

    rows: int = 9
    cols: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")

    @property
    def total_cells(self) -> int:
        """Number of cells on a board of this size."""
        return self.rows * self.cols

    @property
    def max_mines(self) -> int:
        """Largest mine count that still leaves one safe cell."""
        return self.total_cells - 1


# ============================================================================
# Presets
# ============================================================================

BEGINNER = BoardConfig(9, 9, 10)
INTERMEDIATE = BoardConfig(16, 16, 40)
EXPERT = BoardConfig(16, 30, 99)

DIFFICULTIES: Dict[str, BoardConfig] = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}

DEFAULT_DIFFICULTY = "beginner"

# Seconds between elapsed-time ticks
TICK_INTERVAL = 1.0


def get_difficulty(name: str) -> BoardConfig:
    """
    Look up a difficulty preset by name.

    Unknown names fall back to the default difficulty.

    Args:
        name: Preset name, case-insensitive.

    Returns:
        The matching board configuration.
    """
    return DIFFICULTIES.get(name.lower(), DIFFICULTIES[DEFAULT_DIFFICULTY])
