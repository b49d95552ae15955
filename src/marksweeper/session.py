"""
Session state for a MarkSweeper round.

Tracks the round phase, the remaining-mines counter and elapsed time.
All mutation goes through the transition methods below.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from .events import SessionListener


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class Phase(Enum):
    """Lifecycle stages of a round."""

    IDLE = auto()
    ACTIVE = auto()
    WON = auto()
    LOST = auto()


TERMINAL_PHASES = (Phase.WON, Phase.LOST)


# ============================================================================
# Session State
# ============================================================================

@dataclass
class SessionState:
    """
    State machine for one round.

    IDLE -> ACTIVE on the first reveal, ACTIVE -> WON or LOST when the
    round ends, and any phase back to IDLE on reset.

    Attributes:
        total_mines: Mines in the round.
        mines_remaining: total_mines minus flags placed. May go negative.
        elapsed: Ticks counted while ACTIVE.
        phase: Current phase.
        listeners: Observers notified on every change.
    """

    total_mines: int
    mines_remaining: int = field(init=False)
    elapsed: int = field(init=False, default=0)
    phase: Phase = field(init=False, default=Phase.IDLE)
    listeners: List[SessionListener] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        self.mines_remaining = self.total_mines

    # ========================================================================
    # Transitions
    # ========================================================================

    def start(self) -> bool:
        """
        Begin the round.

        Returns:
            True if the phase moved from IDLE to ACTIVE.
        """
        if self.phase != Phase.IDLE:
            return False
        self.phase = Phase.ACTIVE
        return True

    def win(self) -> bool:
        """End the round as won. Only valid while ACTIVE."""
        return self._finish(Phase.WON)

    def lose(self) -> bool:
        """End the round as lost. Only valid while ACTIVE."""
        return self._finish(Phase.LOST)

    def _finish(self, phase: Phase) -> bool:
        if self.phase != Phase.ACTIVE:
            return False
        self.phase = phase
        logger.info("Round ended: %s after %d ticks", phase.name, self.elapsed)
        for listener in self.listeners:
            listener.on_game_end(phase)
        return True

    def reset(self, total_mines: Optional[int] = None) -> None:
        """
        Return to IDLE for a new round.

        Args:
            total_mines: New mine total, or None to keep the current one.
        """
        if total_mines is not None:
            self.total_mines = total_mines
        self.phase = Phase.IDLE
        self.elapsed = 0
        self.mines_remaining = self.total_mines
        self._notify_timer()
        self._notify_mine_counter()

    # ========================================================================
    # Counters
    # ========================================================================

    def tick(self) -> bool:
        """
        Advance elapsed time by one tick.

        Returns:
            True if the counter advanced, False outside ACTIVE.
        """
        if self.phase != Phase.ACTIVE:
            return False
        self.elapsed += 1
        self._notify_timer()
        return True

    def decrement_mines(self) -> None:
        """Record a flag placed. No floor: over-flagging goes negative."""
        self.mines_remaining -= 1
        self._notify_mine_counter()

    def increment_mines(self) -> None:
        """Record a flag removed, never rising above the total."""
        if self.mines_remaining < self.total_mines:
            self.mines_remaining += 1
            self._notify_mine_counter()

    def adjust_total_mines(self, total_mines: int) -> None:
        """
        Re-base the mine total, shifting the counter by the same amount.

        Args:
            total_mines: Mines actually on the board.
        """
        delta = total_mines - self.total_mines
        if delta == 0:
            return
        self.total_mines = total_mines
        self.mines_remaining += delta
        self._notify_mine_counter()

    def _notify_timer(self) -> None:
        for listener in self.listeners:
            listener.on_timer_update(self.elapsed)

    def _notify_mine_counter(self) -> None:
        for listener in self.listeners:
            listener.on_mine_counter_update(self.mines_remaining)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def is_won(self) -> bool:
        return self.phase == Phase.WON

    @property
    def is_lost(self) -> bool:
        return self.phase == Phase.LOST

    @property
    def is_ended(self) -> bool:
        """True once the round is won or lost."""
        return self.phase in TERMINAL_PHASES
