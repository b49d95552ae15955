"""
Cell module for MarkSweeper.

Represents individual cells on the game board with their state
(hidden/revealed/flagged), content (mine/number) and fixed coordinate.
"""
from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Tuple


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


MAX_ADJACENT_MINES = 8

_COORDINATE_FIELDS = ("row", "col")


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the MarkSweeper grid.

    Attributes:
        row: Row index on the board, fixed at construction.
        col: Column index on the board, fixed at construction.
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-8).
        state: Current visual state (hidden, revealed, or flagged).
    """

    row: int = -1
    col: int = -1
    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _COORDINATE_FIELDS and name in self.__dict__:
            raise AttributeError(f"Cell coordinate '{name}' is immutable")
        super().__setattr__(name, value)

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was successfully revealed, False if already
            revealed or flagged.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            The new flagged state. A revealed cell is left untouched and
            reports False.
        """
        if self.state == CellState.REVEALED:
            return False
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        else:
            self.state = CellState.HIDDEN
        return self.is_flagged

    def unflag(self) -> bool:
        """
        Remove the flag from this cell.

        Returns:
            True if a flag was removed, False if the cell was not flagged.
        """
        if self.state != CellState.FLAGGED:
            return False
        self.state = CellState.HIDDEN
        return True

    def set_mine(self) -> None:
        """Mark this cell as a mine."""
        self.is_mine = True

    def set_adjacent_mines(self, count: int) -> None:
        """
        Set the adjacent mine count.

        Args:
            count: Number of neighboring mines.

        Raises:
            ValueError: If count is outside 0-8.
        """
        if not 0 <= count <= MAX_ADJACENT_MINES:
            raise ValueError(
                f"Adjacent mine count must be between 0 and "
                f"{MAX_ADJACENT_MINES}, got {count}"
            )
        self.adjacent_mines = count

    def reset(self) -> None:
        """Return cell to the blank state, keeping its coordinate."""
        self.is_mine = False
        self.adjacent_mines = 0
        self.state = CellState.HIDDEN

    @property
    def position(self) -> Tuple[int, int]:
        """(row, col) of this cell."""
        return self.row, self.col

    @property
    def is_hidden(self) -> bool:
        """Check if cell is hidden."""
        return self.state == CellState.HIDDEN

    @property
    def is_revealed(self) -> bool:
        """Check if cell is revealed."""
        return self.state == CellState.REVEALED

    @property
    def is_flagged(self) -> bool:
        """Check if cell is flagged."""
        return self.state == CellState.FLAGGED

    @property
    def can_reveal(self) -> bool:
        """Check if cell is neither revealed nor flagged."""
        return self.state == CellState.HIDDEN

    def to_observation(self) -> int:
        """
        Convert cell to observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine (game over state)
        """
        if self.state == CellState.HIDDEN:
            return -1
        if self.state == CellState.FLAGGED:
            return -2
        if self.is_mine:
            return 9
        return self.adjacent_mines

    def __str__(self) -> str:
        if self.is_flagged:
            return "F"
        if self.is_hidden:
            return "?"
        if self.is_mine:
            return "*"
        if self.adjacent_mines == 0:
            return " "
        return str(self.adjacent_mines)
