"""
Gymnasium environment wrapper for the volumetric board.

Provides a standard RL interface for training and evaluating agents.
"""
from functools import partial
from typing import Any, Dict, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardConfig
from .cell import EXPLODED_OBSERVATION, FLAGGED_OBSERVATION, HIDDEN_OBSERVATION
from .coords import Coordinate, from_index, to_index
from .errors import TooManyMinesError
from .reveal import RevealKind
from .session import GameSession, SessionStatus


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv3D(gym.Env):
    """
    Gymnasium environment for volumetric Minesweeper.

    Observation:
        3D int8 array indexed [z, y, x] where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-26 = revealed cell with adjacent mine count
        - 27 = exploded mine

    Actions:
        Discrete action space of size width * height * depth.
        Action i reveals the cell at from_index(i), i.e.
        i = x + y * width + z * width * height.

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed/flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        super().__init__()

        self.config = config or BoardConfig()
        if self.config.mine_count > self.config.max_safe_mines:
            raise TooManyMinesError(
                f"Too many mines for every first click to be safe (max {self.config.max_safe_mines})"
            )
        self.session = GameSession(self.config, seed=0)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=FLAGGED_OBSERVATION,
            high=EXPLODED_OBSERVATION,
            shape=(self.config.depth, self.config.height, self.config.width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.config.total_cells)

        self._steps = 0
        self._total_safe_cells = self.config.total_cells - self.config.mine_count

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Seeds the environment RNG, which in turn seeds mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        board_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.session.reset(seed=board_seed)
        self._steps = 0
        return self.session.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Flat index of the cell to reveal.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        self._steps += 1
        reward = self._calculate_reward(self.action_to_position(action))

        observation = self.session.get_observation()
        terminated = self.session.is_over
        return observation, reward, terminated, False, self._get_info()

    def action_to_position(self, action: int) -> Coordinate:
        """Convert flat action index to a coordinate."""
        return from_index(int(action), self.config.bounds)

    def position_to_action(self, c: Coordinate) -> int:
        """Convert a coordinate to its flat action index."""
        return to_index(c, self.config.bounds)

    def _calculate_reward(self, c: Coordinate) -> float:
        """Reveal a cell and score the result."""
        if self.session.is_over or not self.session.board.cell_at(c).is_hidden:
            return -0.1

        outcome = self.session.reveal(c)
        if outcome.kind != RevealKind.REVEALED and outcome.kind != RevealKind.EXPLODED:
            return -0.1
        if self.session.status == SessionStatus.WON:
            return 10.0
        if self.session.status == SessionStatus.LOST:
            return -10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        counts = self.session.counts()
        return {
            "steps": self._steps,
            "revealed": counts.revealed_count,
            "flagged": counts.flagged_count,
            "total_safe": self._total_safe_cells,
            "game_state": self.session.status.name,
            "seed": self.session.seed,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        return render_layers(self.session.get_observation())

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        return (self.session.get_observation() == HIDDEN_OBSERVATION).ravel()


def render_layers(observation: np.ndarray) -> str:
    """Render an observation as text, one z-layer after another."""
    lines = []
    for z, layer in enumerate(observation):
        lines.append(f"z={z}")
        for row in layer:
            lines.append(" ".join(_symbol(int(value)) for value in row))
        lines.append("")
    return "\n".join(lines).rstrip("\n")


def _symbol(value: int) -> str:
    if value == HIDDEN_OBSERVATION:
        return "."
    if value == FLAGGED_OBSERVATION:
        return "F"
    if value == EXPLODED_OBSERVATION:
        return "*"
    if value == 0:
        return " "
    # Counts above 9 do not fit one column; letters continue from 'a' = 10.
    return str(value) if value < 10 else chr(ord("a") + value - 10)


# ============================================================================
# Batched Environments
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: Optional[BoardConfig] = None,
    asynchronous: bool = False,
) -> gym.vector.VectorEnv:
    """
    Batch n_envs copies of the environment on one board shape.

    Every copy checks the mine density up front, so a bad config fails here
    rather than inside a worker process.

    Args:
        n_envs: Number of environments in the batch.
        config: Board configuration shared by every copy.
        asynchronous: Step the copies in worker processes instead of in turn.
    """
    config = config or BoardConfig()
    if config.mine_count > config.max_safe_mines:
        raise TooManyMinesError(
            f"Too many mines for every first click to be safe (max {config.max_safe_mines})"
        )
    env_fns = [partial(MinesweeperEnv3D, config=config) for _ in range(n_envs)]
    if asynchronous:
        return gym.vector.AsyncVectorEnv(env_fns)
    return gym.vector.SyncVectorEnv(env_fns)
