"""
Board module for MarkSweeper.

Implements the game grid with bounds checking, neighbor enumeration,
first-click-safe mine placement and adjacency counts.
"""
import logging
import random
from typing import Iterable, Iterator, List, Optional, Set, Tuple

import numpy as np

from .cell import Cell, CellState
from .config import BoardConfig, BEGINNER


logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Constants
# ============================================================================

NEIGHBOR_OFFSETS: Tuple[Position, ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    MarkSweeper game board.

    Owns the grid of cells and knows where the mines are. It has no notion
    of turns or game phase; the engine drives it.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize the board.

        Args:
            config: Board dimensions and mine count (default: beginner).
            rng: Random source used to shuffle mine positions.
        """
        self.config = config or BEGINNER
        self.rng = rng or random.Random()
        self.rows = self.config.rows
        self.cols = self.config.cols
        self.mine_count = self.config.num_mines
        self._grid: List[List[Cell]] = []
        self._init_grid()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell(row, col) for col in range(self.cols)]
            for row in range(self.rows)
        ]

    def reset(self) -> None:
        """Replace every cell with a blank one and restore the mine count."""
        self.mine_count = self.config.num_mines
        self._init_grid()

    def change_difficulty(self, config: BoardConfig) -> None:
        """
        Resize the board for a new configuration.

        Args:
            config: New dimensions and mine count.
        """
        self.config = config
        self.rows = config.rows
        self.cols = config.cols
        self.mine_count = config.num_mines
        self._init_grid()

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for in-bounds neighbors, 3 to 8 of
            them depending on where the cell sits.
        """
        result = []
        for delta_row, delta_col in NEIGHBOR_OFFSETS:
            new_row = row + delta_row
            new_col = col + delta_col
            if self.is_valid_position(new_row, new_col):
                result.append((new_row, new_col))
        return result

    def adjacent_cells(self, row: int, col: int) -> List[Cell]:
        """Get the neighboring cells of a position."""
        return [self._grid[r][c] for r, c in self.neighbors(row, col)]

    @staticmethod
    def in_safety_zone(
        row: int, col: int, center_row: int, center_col: int
    ) -> bool:
        """Check if a position lies in the 3x3 block around a center."""
        return abs(row - center_row) <= 1 and abs(col - center_col) <= 1

    # ========================================================================
    # Mine Placement (Mid-level)
    # ========================================================================

    def place_mines(
        self,
        exclude_row: Optional[int] = None,
        exclude_col: Optional[int] = None,
    ) -> int:
        """
        Place mines randomly, keeping a safety zone mine-free.

        The excluded cell and its neighbors never receive a mine. Previous
        mines are cleared first and adjacency counts are recomputed before
        returning.

        Args:
            exclude_row: Row of the safety zone center, or None.
            exclude_col: Column of the safety zone center, or None.

        Returns:
            Number of mines actually placed.

        Raises:
            ValueError: If only one exclusion coordinate is given or the
                exclusion lies outside the board.
        """
        exclude = self._check_exclusion(exclude_row, exclude_col)
        self.clear_mines()
        self.mine_count = self.config.num_mines
        self._clamp_mine_count()

        positions = self._get_valid_mine_positions(exclude)
        self.rng.shuffle(positions)

        to_place = min(self.mine_count, len(positions))
        for row, col in positions[:to_place]:
            self._grid[row][col].set_mine()
        self.mine_count = to_place

        self.compute_adjacency()
        logger.debug(
            "Placed %d mines on %dx%d board (exclusion=%s)",
            to_place, self.rows, self.cols, exclude,
        )
        return to_place

    def place_mines_at(self, positions: Iterable[Position]) -> int:
        """
        Place mines at explicit positions.

        Args:
            positions: (row, col) pairs to mine.

        Returns:
            Number of distinct mines placed.

        Raises:
            ValueError: If a position is off the board or the layout
                leaves no safe cell.
        """
        unique = self.check_layout(positions)
        self.clear_mines()
        for row, col in unique:
            self._grid[row][col].set_mine()
        self.mine_count = len(unique)
        self.compute_adjacency()
        return len(unique)

    def check_layout(self, positions: Iterable[Position]) -> Set[Position]:
        """
        Validate an explicit mine layout without touching the grid.

        Args:
            positions: (row, col) pairs to mine.

        Returns:
            The distinct positions.

        Raises:
            ValueError: If a position is off the board or the layout
                leaves no safe cell.
        """
        unique = set(positions)
        for row, col in unique:
            if not self.is_valid_position(row, col):
                raise ValueError(f"Mine position ({row}, {col}) is off the board")
        if len(unique) > self.config.max_mines:
            raise ValueError(f"Too many mines (max {self.config.max_mines})")
        return unique

    def _check_exclusion(
        self, row: Optional[int], col: Optional[int]
    ) -> Optional[Position]:
        if row is None and col is None:
            return None
        if row is None or col is None:
            raise ValueError("Exclusion needs both a row and a column")
        if not self.is_valid_position(row, col):
            raise ValueError(f"Exclusion ({row}, {col}) is off the board")
        return row, col

    def _clamp_mine_count(self) -> None:
        max_mines = self.config.max_mines
        if self.mine_count > max_mines:
            logger.warning(
                "Too many mines for %dx%d board, reducing %d to %d",
                self.rows, self.cols, self.mine_count, max_mines,
            )
            self.mine_count = max_mines

    def _get_valid_mine_positions(
        self, exclude: Optional[Position]
    ) -> List[Position]:
        """Get all positions outside the safety zone."""
        positions = []
        for row in range(self.rows):
            for col in range(self.cols):
                if exclude and self.in_safety_zone(row, col, *exclude):
                    continue
                positions.append((row, col))
        return positions

    def clear_mines(self) -> None:
        """Remove every mine and zero the adjacency counts."""
        for cell in self.cells():
            cell.is_mine = False
            cell.adjacent_mines = 0

    # ========================================================================
    # Adjacency (Mid-level)
    # ========================================================================

    def compute_adjacency(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for cell in self.cells():
            cell.set_adjacent_mines(self._count_adjacent_mines(cell.row, cell.col))

    def recalculate_around(self, row: int, col: int) -> None:
        """Recalculate counts for one cell and its neighbors."""
        if not self.is_valid_position(row, col):
            return
        self._grid[row][col].set_adjacent_mines(
            self._count_adjacent_mines(row, col)
        )
        for neighbor in self.adjacent_cells(row, col):
            neighbor.set_adjacent_mines(
                self._count_adjacent_mines(neighbor.row, neighbor.col)
            )

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        return sum(1 for cell in self.adjacent_cells(row, col) if cell.is_mine)

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def cells(self) -> Iterator[Cell]:
        """Iterate over every cell in row-major order."""
        for board_row in self._grid:
            yield from board_row

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def revealed_count(self) -> int:
        return sum(1 for cell in self.cells() if cell.is_revealed)

    def current_mine_count(self) -> int:
        """Count cells that currently hold a mine."""
        return sum(1 for cell in self.cells() if cell.is_mine)

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            2D int8 array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.rows, self.cols), dtype=np.int8)
        for cell in self.cells():
            obs[cell.row, cell.col] = cell.to_observation()
        return obs

    def get_hidden_positions(self) -> List[Position]:
        """
        Get positions that can still be revealed.

        Returns:
            List of (row, col) positions whose cell is hidden.
        """
        return [
            cell.position for cell in self.cells()
            if cell.state == CellState.HIDDEN
        ]

    def __str__(self) -> str:
        return "\n".join(
            " ".join(str(cell) for cell in board_row) for board_row in self._grid
        )
