"""
Observer interface for session changes.

A UI layer subclasses SessionListener and overrides the hooks it cares
about; the rest stay no-ops.
"""
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .session import Phase


class SessionListener:
    """Receives counter, timer and game-end notifications from a session."""

    def on_timer_update(self, elapsed: int) -> None:
        """
        Called when the elapsed counter changes.

        Args:
            elapsed: New elapsed tick count.
        """
        pass

    def on_mine_counter_update(self, mines_remaining: int) -> None:
        """
        Called when the remaining-mines counter changes.

        Args:
            mines_remaining: New counter value, negative when over-flagged.
        """
        pass

    def on_game_end(self, phase: "Phase") -> None:
        """
        Called once when the round is won or lost.

        Args:
            phase: The terminal phase reached.
        """
        pass
