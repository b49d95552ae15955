"""
Rules engine for MarkSweeper.

Coordinates a Board and a SessionState to implement the player actions
(reveal and flag), the flood-fill cascade and win/loss detection.
"""
import logging
import random
import threading
from collections import deque
from enum import Enum, auto
from typing import Callable, Deque, Iterable, Iterator, List, Optional, Set, Tuple

from .board import Board, Position
from .cell import Cell
from .config import BoardConfig, BEGINNER
from .events import SessionListener
from .results import ErrorKind, FlagResult, RevealResult
from .session import Phase, SessionState
from .ticker import SessionTicker


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class MineRevealPolicy(Enum):
    """Whether flagged mines are uncovered at the end of a round."""

    SKIP_FLAGGED = auto()
    INCLUDE_FLAGGED = auto()


# ============================================================================
# Game Engine
# ============================================================================

class GameEngine:
    """
    Owns one board and one session per round and applies the game rules.

    Every action returns a result object; expected failures never raise.
    Mutators run under a single re-entrant lock so a background ticker
    cannot observe a half-applied reveal.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        rng: Optional[random.Random] = None,
        listeners: Optional[Iterable[SessionListener]] = None,
        mine_reveal_policy: MineRevealPolicy = MineRevealPolicy.SKIP_FLAGGED,
        tick_interval: Optional[float] = None,
    ) -> None:
        """
        Initialize the engine.

        Args:
            config: Board configuration (default: beginner).
            rng: Random source for mine placement.
            listeners: Observers for session changes.
            mine_reveal_policy: Whether end-of-round reveals include
                flagged mines.
            tick_interval: Seconds between elapsed ticks. None leaves
                ticking to the caller via tick().
        """
        self._board = Board(config or BEGINNER, rng=rng)
        self._session = SessionState(
            self._board.mine_count, listeners=list(listeners or [])
        )
        self.mine_reveal_policy = mine_reveal_policy
        self.tick_interval = tick_interval
        self._mines_placed = False
        self._lock = threading.RLock()
        self._ticker: Optional[SessionTicker] = None
        self._round = 0

    # ========================================================================
    # Player Actions
    # ========================================================================

    def reveal(self, row: int, col: int) -> RevealResult:
        """
        Reveal a cell.

        The first reveal of a round places the mines around a safety zone
        centered on the clicked cell and starts the session. Revealing a
        zero cell cascades to its region.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            RevealResult describing the newly revealed cells and whether
            the round was won or lost.
        """
        with self._lock:
            error = self._check_reveal(row, col)
            if error is not None:
                return RevealResult.failure(error)

            if not self._mines_placed:
                self._place_mines_safely(row, col)
            self._start_session()

            cell = self._board.get_cell(row, col)
            cell.reveal()

            if self.check_loss_condition(cell):
                self._end_round(self._session.lose)
                return RevealResult(success=True, lost=True, revealed_cells=[cell])

            revealed_cells = [cell]
            if cell.adjacent_mines == 0:
                revealed_cells.extend(self._cascade_reveal(cell))

            if self.check_win_condition():
                self._end_round(self._session.win)
                return RevealResult(
                    success=True, won=True, revealed_cells=revealed_cells
                )

            return RevealResult(success=True, revealed_cells=revealed_cells)

    def _check_reveal(self, row: int, col: int) -> Optional[ErrorKind]:
        if not self._board.is_valid_position(row, col):
            return ErrorKind.INVALID_POSITION
        if self._session.is_ended:
            return ErrorKind.GAME_ENDED
        cell = self._board.get_cell(row, col)
        if cell.is_flagged:
            return ErrorKind.CELL_FLAGGED
        if cell.is_revealed:
            return ErrorKind.ALREADY_REVEALED
        return None

    def toggle_flag(self, row: int, col: int) -> FlagResult:
        """
        Toggle the flag on a hidden cell.

        Flags may be placed before the first reveal. Placing a flag lowers
        the mine counter without a floor; removing one raises it up to the
        round's mine total.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            FlagResult with the new flagged state and mine counter.
        """
        with self._lock:
            if not self._board.is_valid_position(row, col):
                return FlagResult.failure(ErrorKind.INVALID_POSITION)
            if self._session.is_ended:
                return FlagResult.failure(ErrorKind.GAME_ENDED)

            cell = self._board.get_cell(row, col)
            if cell.is_revealed:
                return FlagResult.failure(ErrorKind.CANNOT_FLAG_REVEALED)

            flagged = cell.toggle_flag()
            if flagged:
                self._session.decrement_mines()
            else:
                self._session.increment_mines()

            logger.debug(
                "Flag at (%d, %d) -> %s, %d mines remaining",
                row, col, flagged, self._session.mines_remaining,
            )
            return FlagResult(
                success=True,
                flagged=flagged,
                mines_remaining=self._session.mines_remaining,
            )

    # ========================================================================
    # Cascade
    # ========================================================================

    def _cascade_reveal(self, origin: Cell) -> List[Cell]:
        """
        Flood-fill outward from an already revealed zero cell.

        Numbered cells are revealed but do not spread further, so each
        blank region comes out with exactly one ring of numbers.

        Args:
            origin: The revealed cell the flood starts from.

        Returns:
            Cells revealed by the cascade, in breadth-first order.
        """
        revealed: List[Cell] = []
        visited: Set[Position] = {origin.position}
        queue: Deque[Position] = deque(self._cascade_candidates(origin, visited))

        while queue:
            row, col = queue.popleft()
            cell = self._board.get_cell(row, col)
            if cell is None or not cell.can_reveal or cell.is_mine:
                continue

            cell.reveal()
            revealed.append(cell)

            if cell.adjacent_mines > 0:
                continue
            queue.extend(self._cascade_candidates(cell, visited))

        logger.debug(
            "Cascade from %s revealed %d cells", origin.position, len(revealed)
        )
        return revealed

    def _cascade_candidates(
        self, cell: Cell, visited: Set[Position]
    ) -> Iterator[Position]:
        """Yield unvisited hidden neighbors, marking them visited."""
        for position in self._board.neighbors(cell.row, cell.col):
            if position in visited:
                continue
            neighbor = self._board.get_cell(*position)
            if neighbor.is_revealed or neighbor.is_flagged:
                continue
            visited.add(position)
            yield position

    # ========================================================================
    # Win / Loss
    # ========================================================================

    def check_win_condition(self) -> bool:
        """Check if every non-mine cell is revealed."""
        return all(
            cell.is_revealed for cell in self._board.cells() if not cell.is_mine
        )

    @staticmethod
    def check_loss_condition(cell: Cell) -> bool:
        """Check if the cell just revealed is a mine."""
        return cell.is_mine

    # ========================================================================
    # Round Control
    # ========================================================================

    def _place_mines_safely(self, row: int, col: int) -> None:
        placed = self._board.place_mines(row, col)
        self._mines_placed = True
        self._session.adjust_total_mines(placed)

    def _start_session(self) -> None:
        if not self._session.start():
            return
        logger.debug("Round %d started", self._round)
        if self.tick_interval is not None:
            round_id = self._round
            self._ticker = SessionTicker(
                lambda: self._tick_round(round_id), self.tick_interval
            )
            self._ticker.start()

    def _end_round(self, transition: Callable[[], bool]) -> None:
        transition()
        self._stop_ticker()

    def _stop_ticker(self) -> None:
        if self._ticker is not None:
            # The ticker thread may be blocked on our lock, so do not join.
            self._ticker.cancel(wait=False)
            self._ticker = None

    def load_mines(self, positions: Iterable[Position]) -> int:
        """
        Arm the next round with a fixed mine layout.

        The first reveal then skips random placement. The session stays
        IDLE until that reveal.

        Args:
            positions: (row, col) pairs to mine.

        Returns:
            Number of mines placed.

        Raises:
            ValueError: If the layout is invalid. The current round is
                left as it was.
        """
        with self._lock:
            layout = self._board.check_layout(positions)
            self._reset_round(None)
            placed = self._board.place_mines_at(layout)
            self._mines_placed = True
            self._session.reset(placed)
            return placed

    def reset(self, total_mines: Optional[int] = None) -> None:
        """
        Start a new round on a fresh grid.

        Args:
            total_mines: New mine count, or None to keep the board's.
        """
        with self._lock:
            self._reset_round(total_mines)
            logger.info(
                "New round: %dx%d, %d mines",
                self.rows, self.cols, self._board.mine_count,
            )

    def change_difficulty(self, rows: int, cols: int, mine_count: int) -> None:
        """
        Resize the board and start a new round.

        Raises:
            ValueError: If the dimensions or mine count are invalid.
        """
        config = BoardConfig(rows, cols, mine_count)
        with self._lock:
            self._board.change_difficulty(config)
            self.reset()

    def _reset_round(self, total_mines: Optional[int]) -> None:
        self._stop_ticker()
        self._round += 1
        if total_mines is not None:
            self._board.change_difficulty(
                BoardConfig(self.rows, self.cols, total_mines)
            )
        else:
            self._board.reset()
        self._mines_placed = False
        self._session.reset(self._board.mine_count)

    def tick(self) -> bool:
        """
        Advance elapsed time by one tick if the round is active.

        Returns:
            True if the counter advanced.
        """
        with self._lock:
            return self._session.tick()

    def _tick_round(self, round_id: int) -> bool:
        with self._lock:
            if round_id != self._round:
                return False
            return self._session.tick()

    # ========================================================================
    # Auxiliary Queries
    # ========================================================================

    def unrevealed_mines(self) -> List[Cell]:
        """Mines still covered, filtered by the mine reveal policy."""
        include_flagged = self.mine_reveal_policy == MineRevealPolicy.INCLUDE_FLAGGED
        return [
            cell for cell in self._board.cells()
            if cell.is_mine
            and not cell.is_revealed
            and (include_flagged or not cell.is_flagged)
        ]

    def reveal_all_mines(self) -> List[Cell]:
        """
        Uncover the remaining mines once the round has ended.

        Returns:
            The mine cells uncovered, empty while the round is running.
        """
        with self._lock:
            if not self._session.is_ended:
                return []
            mines = self.unrevealed_mines()
            for cell in mines:
                cell.unflag()
                cell.reveal()
            return mines

    def incorrect_flags(self) -> List[Cell]:
        """Flagged cells that are not mines."""
        return [
            cell for cell in self._board.cells()
            if cell.is_flagged and not cell.is_mine
        ]

    def unflagged_mines(self) -> List[Cell]:
        """Mines without a flag on them."""
        return [
            cell for cell in self._board.cells()
            if cell.is_mine and not cell.is_flagged
        ]

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def board(self) -> Board:
        return self._board

    @property
    def session(self) -> SessionState:
        return self._session

    @property
    def rows(self) -> int:
        return self._board.rows

    @property
    def cols(self) -> int:
        return self._board.cols

    @property
    def dimensions(self) -> Tuple[int, int]:
        return self._board.rows, self._board.cols

    @property
    def phase(self) -> Phase:
        return self._session.phase

    @property
    def mines_remaining(self) -> int:
        return self._session.mines_remaining

    @property
    def elapsed(self) -> int:
        return self._session.elapsed

    @property
    def mines_placed(self) -> bool:
        return self._mines_placed

    @property
    def is_ended(self) -> bool:
        return self._session.is_ended

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        return self._board.get_cell(row, col)
