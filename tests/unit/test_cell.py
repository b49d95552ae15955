"""
Unit tests for Cell class.

Tests cell state management, reveal/flag behavior, the adjacency guard
and observation conversion.
"""
import pytest
from marksweeper import Cell, CellState


# ============================================================================
# Cell Initialization Tests
# ============================================================================

class TestCellInitialization:
    """Test cell creation and default values."""

    def test_default_cell_is_not_mine(self) -> None:
        """New cell should not be a mine by default."""
        cell = Cell()
        assert cell.is_mine is False

    def test_default_cell_is_hidden(self) -> None:
        """New cell should be hidden by default."""
        cell = Cell()
        assert cell.state == CellState.HIDDEN
        assert cell.is_hidden is True

    def test_default_cell_has_zero_adjacent_mines(self) -> None:
        """New cell should have 0 adjacent mines by default."""
        cell = Cell()
        assert cell.adjacent_mines == 0

    def test_cell_keeps_coordinate(self, hidden_cell: Cell) -> None:
        """Cell should report the coordinate it was built with."""
        assert hidden_cell.row == 2
        assert hidden_cell.col == 3
        assert hidden_cell.position == (2, 3)

    def test_coordinate_is_immutable(self, hidden_cell: Cell) -> None:
        """Reassigning a coordinate should raise."""
        with pytest.raises(AttributeError, match="immutable"):
            hidden_cell.row = 5
        with pytest.raises(AttributeError, match="immutable"):
            hidden_cell.col = 0
        assert hidden_cell.position == (2, 3)


# ============================================================================
# Cell Reveal Tests
# ============================================================================

class TestCellReveal:
    """Test cell reveal behavior."""

    def test_reveal_hidden_cell_returns_true(self, hidden_cell: Cell) -> None:
        """Revealing a hidden cell should succeed."""
        assert hidden_cell.reveal() is True
        assert hidden_cell.is_revealed is True

    def test_reveal_already_revealed_returns_false(
        self, hidden_cell: Cell
    ) -> None:
        """Revealing an already revealed cell should fail."""
        hidden_cell.reveal()
        assert hidden_cell.reveal() is False

    def test_reveal_flagged_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot reveal a flagged cell."""
        hidden_cell.toggle_flag()
        assert hidden_cell.reveal() is False
        assert hidden_cell.is_flagged is True

    def test_can_reveal_only_when_hidden(self, hidden_cell: Cell) -> None:
        """can_reveal should be False once flagged or revealed."""
        assert hidden_cell.can_reveal is True
        hidden_cell.toggle_flag()
        assert hidden_cell.can_reveal is False
        hidden_cell.toggle_flag()
        hidden_cell.reveal()
        assert hidden_cell.can_reveal is False


# ============================================================================
# Cell Flag Tests
# ============================================================================

class TestCellFlag:
    """Test cell flagging behavior."""

    def test_toggle_flag_returns_new_state(self, hidden_cell: Cell) -> None:
        """Toggling should report the flag state after the toggle."""
        assert hidden_cell.toggle_flag() is True
        assert hidden_cell.is_flagged is True
        assert hidden_cell.toggle_flag() is False
        assert hidden_cell.is_hidden is True

    def test_flag_revealed_cell_returns_false(self, hidden_cell: Cell) -> None:
        """Cannot flag a revealed cell."""
        hidden_cell.reveal()
        assert hidden_cell.toggle_flag() is False
        assert hidden_cell.is_revealed is True

    def test_unflag_removes_flag(self, hidden_cell: Cell) -> None:
        """unflag should clear a flag and report it."""
        hidden_cell.toggle_flag()
        assert hidden_cell.unflag() is True
        assert hidden_cell.is_hidden is True

    def test_unflag_without_flag_returns_false(self, hidden_cell: Cell) -> None:
        """unflag on an unflagged cell does nothing."""
        assert hidden_cell.unflag() is False


# ============================================================================
# Mine and Adjacency Tests
# ============================================================================

class TestCellContent:
    """Test mine marking, adjacency counts and reset."""

    def test_set_mine(self, hidden_cell: Cell) -> None:
        """set_mine should mark the cell as a mine."""
        hidden_cell.set_mine()
        assert hidden_cell.is_mine is True

    @pytest.mark.parametrize("count", range(0, 9))
    def test_valid_adjacent_counts_accepted(self, count: int) -> None:
        """Counts from 0 to 8 are accepted."""
        cell = Cell()
        cell.set_adjacent_mines(count)
        assert cell.adjacent_mines == count

    @pytest.mark.parametrize("count", [-1, 9, 42])
    def test_out_of_range_adjacent_count_raises(self, count: int) -> None:
        """Counts outside 0-8 signal an upstream bug."""
        cell = Cell()
        with pytest.raises(ValueError, match="between 0 and 8"):
            cell.set_adjacent_mines(count)
        assert cell.adjacent_mines == 0

    def test_reset_clears_everything_but_coordinate(
        self, numbered_cell: Cell
    ) -> None:
        """reset should return the cell to blank at the same position."""
        numbered_cell.set_mine()
        numbered_cell.reset()
        assert numbered_cell.is_mine is False
        assert numbered_cell.adjacent_mines == 0
        assert numbered_cell.is_hidden is True
        assert numbered_cell.position == (1, 1)


# ============================================================================
# Cell Observation Tests
# ============================================================================

class TestCellObservation:
    """Test cell observation values and debug glyphs."""

    def test_hidden_cell_observation_is_negative_one(
        self, hidden_cell: Cell
    ) -> None:
        """Hidden cell should return -1 for observation."""
        assert hidden_cell.to_observation() == -1

    def test_flagged_cell_observation_is_negative_two(
        self, hidden_cell: Cell
    ) -> None:
        """Flagged cell should return -2 for observation."""
        hidden_cell.toggle_flag()
        assert hidden_cell.to_observation() == -2

    def test_revealed_cell_observation_matches_adjacent_count(
        self, numbered_cell: Cell
    ) -> None:
        """Revealed cell returns its adjacent mine count."""
        assert numbered_cell.to_observation() == 3

    def test_revealed_mine_observation_is_nine(self, mine_cell: Cell) -> None:
        """Revealed mine should return 9 for observation."""
        mine_cell.reveal()
        assert mine_cell.to_observation() == 9

    def test_debug_glyphs(self, hidden_cell: Cell, mine_cell: Cell) -> None:
        """str() should give the debug glyph for each state."""
        assert str(hidden_cell) == "?"
        hidden_cell.toggle_flag()
        assert str(hidden_cell) == "F"
        hidden_cell.toggle_flag()
        hidden_cell.reveal()
        assert str(hidden_cell) == " "
        mine_cell.reveal()
        assert str(mine_cell) == "*"
        assert str(Cell(adjacent_mines=4, state=CellState.REVEALED)) == "4"
