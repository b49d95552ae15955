"""
Result types returned by the rules engine.

Expected failures (clicking off the board, acting after the game ended,
and so on) are reported through these objects rather than raised.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .cell import Cell


class ErrorKind(Enum):
    """Reasons a player action can be rejected."""

    INVALID_POSITION = "Invalid position"
    GAME_ENDED = "Game is over"
    CELL_FLAGGED = "Cell is flagged"
    ALREADY_REVEALED = "Cell already revealed"
    CANNOT_FLAG_REVEALED = "Cannot flag revealed cell"


@dataclass
class RevealResult:
    """
    Outcome of a reveal action.

    Attributes:
        success: Whether the action was applied.
        error: Why it was rejected, when success is False.
        lost: A mine was revealed.
        won: Every safe cell is now revealed.
        revealed_cells: Cells newly revealed by this action, the clicked
            cell first.
    """

    success: bool
    error: Optional[ErrorKind] = None
    lost: bool = False
    won: bool = False
    revealed_cells: List[Cell] = field(default_factory=list)

    @classmethod
    def failure(cls, error: ErrorKind) -> "RevealResult":
        return cls(success=False, error=error)

    @property
    def game_over(self) -> bool:
        return self.lost or self.won


@dataclass
class FlagResult:
    """
    Outcome of a flag toggle.

    Attributes:
        success: Whether the action was applied.
        error: Why it was rejected, when success is False.
        flagged: New flagged state of the cell.
        mines_remaining: Mine counter after the toggle.
    """

    success: bool
    error: Optional[ErrorKind] = None
    flagged: Optional[bool] = None
    mines_remaining: Optional[int] = None

    @classmethod
    def failure(cls, error: ErrorKind) -> "FlagResult":
        return cls(success=False, error=error)
