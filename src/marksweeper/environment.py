"""
Gymnasium environment wrapper for MarkSweeper.

Exposes the rules engine through a standard RL interface so scripted or
learning agents can play it.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .config import BoardConfig, BEGINNER
from .engine import GameEngine


# ============================================================================
# Rewards
# ============================================================================

REWARD_INVALID = -0.1
REWARD_LOSS = -10.0
REWARD_WIN = 10.0
REWARD_SAFE = 1.0


# ============================================================================
# MarkSweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment over a GameEngine.

    Observation:
        2D int8 array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size rows * cols.
        Action i reveals the cell at (i // cols, i % cols).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for a rejected reveal (already revealed or flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Board configuration (default: beginner).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BEGINNER
        self.engine = GameEngine(self.config)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.config.rows * self.config.cols)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new round.

        Args:
            seed: Random seed for reproducible mine layouts.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.engine.board.rng = random.Random(
            int(self.np_random.integers(0, 2**31 - 1))
        )
        self.engine.reset()
        self._steps = 0

        return self.engine.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Reveal the cell selected by an action.

        Args:
            action: Cell index to reveal (row * cols + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self._action_to_position(action)
        self._steps += 1

        result = self.engine.reveal(row, col)
        if not result.success:
            reward = REWARD_INVALID
        elif result.lost:
            reward = REWARD_LOSS
        elif result.won:
            reward = REWARD_WIN
        else:
            reward = REWARD_SAFE

        observation = self.engine.board.get_observation()
        terminated = self.engine.is_ended

        return observation, reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return int(action) // self.config.cols, int(action) % self.config.cols

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        board = self.engine.board
        return {
            "steps": self._steps,
            "revealed": board.revealed_count,
            "total_safe": board.total_cells - board.mine_count,
            "phase": self.engine.phase.name,
            "mines_remaining": self.engine.mines_remaining,
            "valid_actions": len(board.get_hidden_positions()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return str(self.engine.board)
        if self.render_mode == "human":
            print(self.engine.board)
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = hidden cell.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for row, col in self.engine.board.get_hidden_positions():
            mask[row * self.config.cols + col] = True
        return mask


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: Optional[BoardConfig] = None,
) -> gym.vector.VectorEnv:
    """
    Create a vectorized environment for batched play.

    Args:
        n_envs: Number of environments.
        config: Board configuration.

    Returns:
        Vectorized environment.
    """
    def make_env() -> MinesweeperEnv:
        return MinesweeperEnv(config=config)

    return gym.vector.SyncVectorEnv([make_env for _ in range(n_envs)])
