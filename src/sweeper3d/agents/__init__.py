"""
Volumetric Minesweeper agents.

Provides agents that play through MinesweeperEnv3D:
- RandomAgent: Baseline random selection
- LogicAgent: Constraint propagation with subset reduction
"""
from .base_agent import BaseAgent
from .random_agent import RandomAgent
from .logic_agent import LogicAgent

__all__ = [
    "BaseAgent",
    "RandomAgent",
    "LogicAgent",
]
