"""
Base agent interface.

Defines the abstract interface that all agents must implement.
"""
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from ..game.cell import HIDDEN_OBSERVATION
from ..game.coords import Bounds, Coordinate, from_index, to_index


# ============================================================================
# Base Agent Interface
# ============================================================================

class BaseAgent(ABC):
    """
    Abstract base class for agents.

    All agents must implement select_action to choose which cell to
    reveal based on the current observation.
    """

    def __init__(self, bounds: Bounds) -> None:
        """
        Initialize the agent.

        Args:
            bounds: Extent of the board the agent plays on.
        """
        self.bounds = Bounds(*bounds)
        self.total_cells = self.bounds.total_cells

    @abstractmethod
    def select_action(
        self,
        observation: np.ndarray,
        valid_actions: Optional[np.ndarray] = None,
    ) -> int:
        """
        Select an action based on the current observation.

        Args:
            observation: 3D array of cell states indexed [z, y, x].
            valid_actions: Optional flat mask of valid actions.

        Returns:
            Flat action index.
        """

    def action_to_position(self, action: int) -> Coordinate:
        """Convert flat action index to a coordinate."""
        return from_index(int(action), self.bounds)

    def position_to_action(self, c: Coordinate) -> int:
        """Convert a coordinate to flat action index."""
        return to_index(c, self.bounds)

    def get_valid_actions_from_obs(self, observation: np.ndarray) -> np.ndarray:
        """Hidden cells are the valid actions."""
        return observation.ravel() == HIDDEN_OBSERVATION

    def reset(self) -> None:
        """Reset agent state for new episode."""

    def update(
        self,
        observation: np.ndarray,
        action: int,
        reward: float,
        next_observation: np.ndarray,
        done: bool,
    ) -> None:
        """Update agent with experience (for learning agents)."""
