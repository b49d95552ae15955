"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path

import pytest

# Add the repo root (main.py) and src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from marksweeper import Board, BoardConfig, Cell, GameEngine


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def default_board() -> Board:
    """Create a default 9x9 board with 10 mines."""
    return Board(rng=random.Random(1234))


@pytest.fixture
def small_board() -> Board:
    """Create a small 3x3 board with 1 mine for testing."""
    return Board(BoardConfig(3, 3, 1), rng=random.Random(7))


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(BoardConfig(5, 5, 0))


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def engine() -> GameEngine:
    """Create a seeded beginner engine."""
    return GameEngine(BoardConfig(9, 9, 10), rng=random.Random(42))


@pytest.fixture
def corner_mine_engine() -> GameEngine:
    """
    5x5 engine with a single mine in the bottom-right corner.

    Layout (* = mine):
        . . . . .
        . . . . .
        . . . . .
        . . . . .
        . . . . *
    """
    game = GameEngine(BoardConfig(5, 5, 1))
    game.load_mines([(4, 4)])
    return game


@pytest.fixture
def walled_engine() -> GameEngine:
    """
    5x5 engine with a vertical wall of mines in column 2.

    Layout (* = mine):
        . . * . .
        . . * . .
        . . * . .
        . . * . .
        . . * . .
    """
    game = GameEngine(BoardConfig(5, 5, 5))
    game.load_mines([(row, 2) for row in range(5)])
    return game


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell(2, 3)


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(0, 0, is_mine=True)


@pytest.fixture
def numbered_cell() -> Cell:
    """Create a revealed cell with adjacent mines."""
    cell = Cell(1, 1, adjacent_mines=3)
    cell.reveal()
    return cell


# ============================================================================
# Helpers
# ============================================================================

def _brute_force_counts(board: Board) -> list:
    """Adjacency counts computed independently of the board's own helpers."""
    counts = []
    for row in range(board.rows):
        line = []
        for col in range(board.cols):
            total = 0
            for r in range(row - 1, row + 2):
                for c in range(col - 1, col + 2):
                    if (r, c) == (row, col):
                        continue
                    if 0 <= r < board.rows and 0 <= c < board.cols:
                        total += board.get_cell(r, c).is_mine
            line.append(total)
        counts.append(line)
    return counts


@pytest.fixture
def brute_force_counts():
    """Reference adjacency counter for comparing against the board."""
    return _brute_force_counts
