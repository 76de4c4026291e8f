"""
Evaluation module for volumetric Minesweeper agents.
"""
from .evaluator import Evaluator

__all__ = [
    "Evaluator",
]
