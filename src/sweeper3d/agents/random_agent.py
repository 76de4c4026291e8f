"""
Random agent.

Serves as a baseline by selecting random valid actions.
"""
from typing import Optional

import numpy as np

from ..game.coords import Bounds
from .base_agent import BaseAgent


class RandomAgent(BaseAgent):
    """Agent that selects actions uniformly at random."""

    def __init__(self, bounds: Bounds, seed: Optional[int] = None) -> None:
        super().__init__(bounds)
        self.rng = np.random.default_rng(seed)

    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        if valid_actions is None:
            valid_actions = self.get_valid_actions_from_obs(observation)

        valid_indices = np.flatnonzero(valid_actions)
        if len(valid_indices) == 0:
            # No valid actions, return any action (will be invalid)
            return 0
        return int(self.rng.choice(valid_indices))
