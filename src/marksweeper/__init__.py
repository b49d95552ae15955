"""
MarkSweeper game module.

Provides the rules engine: board and cell model, session state machine,
reveal/flag actions and a Gymnasium wrapper.
"""
from .cell import Cell, CellState
from .config import (
    BoardConfig,
    BEGINNER,
    INTERMEDIATE,
    EXPERT,
    DIFFICULTIES,
    get_difficulty,
)
from .board import Board
from .results import ErrorKind, RevealResult, FlagResult
from .events import SessionListener
from .session import Phase, SessionState
from .ticker import SessionTicker
from .engine import GameEngine, MineRevealPolicy
from .environment import MinesweeperEnv, make_vec_env

__all__ = [
    "Cell",
    "CellState",
    "BoardConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "DIFFICULTIES",
    "get_difficulty",
    "Board",
    "ErrorKind",
    "RevealResult",
    "FlagResult",
    "SessionListener",
    "Phase",
    "SessionState",
    "SessionTicker",
    "GameEngine",
    "MineRevealPolicy",
    "MinesweeperEnv",
    "make_vec_env",
]
