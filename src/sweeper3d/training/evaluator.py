"""
Agent evaluation.

Plays a fixed number of seeded games per agent and reports aggregate metrics.
"""
import logging
from typing import Dict, Optional

from ..agents.base_agent import BaseAgent
from ..game.board import BoardConfig
from ..game.environment import MinesweeperEnv3D

logger = logging.getLogger(__name__)


class Evaluator:
    """
    Evaluate and compare multiple agents.

    Every agent plays the same sequence of boards: episode i is reset with
    seed ``base_seed + i``.
    """

    def __init__(
        self,
        board_config: Optional[BoardConfig] = None,
        num_episodes: int = 100,
        max_steps: Optional[int] = None,
        base_seed: int = 0,
    ) -> None:
        """
        Initialize the evaluator.

        Args:
            board_config: Board configuration for evaluation.
            num_episodes: Number of evaluation episodes.
            max_steps: Maximum steps per episode (default: one per cell).
            base_seed: Seed of the first episode.

        Raises:
            ValueError: If num_episodes is less than 1.
        """
        if num_episodes < 1:
            raise ValueError(f"num_episodes must be at least 1, got {num_episodes}")
        self.board_config = board_config or BoardConfig()
        self.num_episodes = num_episodes
        self.max_steps = max_steps or self.board_config.total_cells
        self.base_seed = base_seed

    def evaluate(self, agent: BaseAgent) -> Dict[str, float]:
        """
        Evaluate a single agent.

        Returns:
            Dictionary with win_rate, avg_reward, avg_steps and avg_revealed.
        """
        env = MinesweeperEnv3D(config=self.board_config)

        wins = 0
        total_reward = 0.0
        total_steps = 0
        total_revealed = 0

        for episode in range(self.num_episodes):
            observation, info = env.reset(seed=self.base_seed + episode)
            agent.reset()

            for _ in range(self.max_steps):
                action = agent.select_action(observation, env.get_action_mask())
                observation, reward, terminated, truncated, info = env.step(action)
                total_reward += float(reward)
                total_steps += 1
                if terminated or truncated:
                    break

            if info["game_state"] == "WON":
                wins += 1
            total_revealed += info["revealed"]

        return {
            "win_rate": wins / self.num_episodes,
            "avg_reward": total_reward / self.num_episodes,
            "avg_steps": total_steps / self.num_episodes,
            "avg_revealed": total_revealed / self.num_episodes,
        }

    def compare(self, agents: Dict[str, BaseAgent]) -> Dict[str, Dict[str, float]]:
        """
        Compare multiple agents.

        Args:
            agents: Dictionary of agent_name -> agent.

        Returns:
            Dictionary of agent_name -> evaluation metrics.
        """
        results = {}
        for name, agent in agents.items():
            logger.info("Evaluating %s over %d games", name, self.num_episodes)
            results[name] = self.evaluate(agent)
        return results
