"""
Volumetric Minesweeper game module.

Provides core game logic: coordinates, board, mine generation,
the reveal engine and the session lifecycle.
"""
from .coords import Bounds, Coordinate, NEIGHBOR_OFFSETS, from_index, in_bounds, neighbors_of, to_index
from .errors import (
    CellNotHidableError,
    CoordinateOutOfBoundsError,
    FlagError,
    GenerationError,
    InvalidDimensionsError,
    InvalidMineCountError,
    MinesweeperError,
    SessionOverError,
    TooManyMinesError,
)
from .cell import Cell, CellState, CellView
from .board import Board, BoardConfig, BEGINNER, INTERMEDIATE, EXPERT, PRESETS
from .generator import generate, place_mines
from .reveal import RevealKind, RevealOutcome
from .session import GameSession, SessionCounts, SessionStatus, new_session
from .environment import MinesweeperEnv3D, make_vec_env, render_layers

__all__ = [
    "Bounds",
    "Coordinate",
    "NEIGHBOR_OFFSETS",
    "from_index",
    "in_bounds",
    "neighbors_of",
    "to_index",
    "CellNotHidableError",
    "CoordinateOutOfBoundsError",
    "FlagError",
    "GenerationError",
    "InvalidDimensionsError",
    "InvalidMineCountError",
    "MinesweeperError",
    "SessionOverError",
    "TooManyMinesError",
    "Cell",
    "CellState",
    "CellView",
    "Board",
    "BoardConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "PRESETS",
    "generate",
    "place_mines",
    "RevealKind",
    "RevealOutcome",
    "GameSession",
    "SessionCounts",
    "SessionStatus",
    "new_session",
    "MinesweeperEnv3D",
    "make_vec_env",
    "render_layers",
]
