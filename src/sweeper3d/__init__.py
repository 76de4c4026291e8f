"""
sweeper3d - volumetric Minesweeper.

Provides the board engine, a gymnasium environment and baseline agents.
"""
import logging

__version__ = "0.1.4"

logging.getLogger(__name__).addHandler(logging.NullHandler())
