"""
Board module for the volumetric grid.

Owns the dense cell storage, mine layout and the state-changing
operations that encode the cell state machine.
"""
from dataclasses import dataclass
from typing import Iterator, List, Optional

import numpy as np

from .cell import Cell, CellState
from .coords import NEIGHBOR_OFFSETS, Bounds, Coordinate, from_index, in_bounds, to_index
from .errors import (
    CoordinateOutOfBoundsError,
    GenerationError,
    InvalidDimensionsError,
    InvalidMineCountError,
    TooManyMinesError,
)


# ============================================================================
# Configuration
# ============================================================================

@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a volumetric board.

    Attributes:
        width: Number of cells along x.
        height: Number of cells along y.
        depth: Number of cells along z.
        mine_count: Total mines to place.
    """

    width: int = 5
    height: int = 5
    depth: int = 5
    mine_count: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1 or self.depth < 1:
            raise InvalidDimensionsError("Board dimensions must be positive")
        if self.mine_count < 0:
            raise InvalidMineCountError("Number of mines cannot be negative")
        if self.mine_count >= self.total_cells:
            raise TooManyMinesError(
                f"Too many mines (max {self.total_cells - 1})"
            )

    @property
    def bounds(self) -> Bounds:
        return Bounds(self.width, self.height, self.depth)

    @property
    def total_cells(self) -> int:
        return self.width * self.height * self.depth

    @property
    def max_safe_mines(self) -> int:
        """Most mines that still fit outside the safe zone of any first click."""
        largest_zone = min(self.width, 3) * min(self.height, 3) * min(self.depth, 3)
        return self.total_cells - largest_zone

    @classmethod
    def cube(
        cls, size: int, mine_count: Optional[int] = None, density: float = 0.08
    ) -> "BoardConfig":
        """
        Create a size x size x size configuration.

        Without an explicit mine_count, roughly ``density`` of the cells are
        mined, capped at max_safe_mines so any first click can be generated.
        """
        if mine_count is None:
            room = cls(size, size, size, 0).max_safe_mines
            mine_count = min(max(1, int(size ** 3 * density)), room)
        return cls(size, size, size, mine_count)


# Preset difficulty levels
BEGINNER = BoardConfig(5, 5, 5, 10)
INTERMEDIATE = BoardConfig(8, 8, 8, 60)
EXPERT = BoardConfig(12, 12, 12, 250)

PRESETS = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


# ============================================================================
# Board Class
# ============================================================================

class Board:
    """
    Volumetric Minesweeper board.

    Cells live in a flat list indexed by ``x + y*width + z*width*height``.
    Callers address cells by Coordinate; the translation to the flat index
    happens here.
    """

    def __init__(self, width: int, height: int, depth: int) -> None:
        if width < 1 or height < 1 or depth < 1:
            raise InvalidDimensionsError(
                f"Board dimensions must be positive, got {width}x{height}x{depth}"
            )
        self._bounds = Bounds(width, height, depth)
        self._cells: List[Cell] = [Cell() for _ in range(self._bounds.total_cells)]
        self._mine_count = 0
        self._revealed_count = 0
        self._flagged_count = 0
        self._exploded = False
        self._generated = False

    @classmethod
    def from_config(cls, config: BoardConfig) -> "Board":
        return cls(config.width, config.height, config.depth)

    def __repr__(self) -> str:
        w, h, d = self._bounds
        return f"Board({w}x{h}x{d}, mines={self._mine_count})"

    # ========================================================================
    # Addressing (Low-level)
    # ========================================================================

    def _index_of(self, c: Coordinate) -> int:
        if not in_bounds(c, self._bounds):
            raise CoordinateOutOfBoundsError(
                f"{tuple(c)} is outside {self._bounds.width}x"
                f"{self._bounds.height}x{self._bounds.depth}"
            )
        return to_index(c, self._bounds)

    def cell_at(self, c: Coordinate) -> Cell:
        """
        Get the cell at a coordinate.

        Raises:
            CoordinateOutOfBoundsError: If the coordinate is outside the grid.
        """
        return self._cells[self._index_of(c)]

    def contains(self, c: Coordinate) -> bool:
        return in_bounds(c, self._bounds)

    def iter_coordinates(self) -> Iterator[Coordinate]:
        """Iterate over every coordinate in flat-index order."""
        for index in range(len(self._cells)):
            yield from_index(index, self._bounds)

    # ========================================================================
    # Mine Setup (used by the generator)
    # ========================================================================

    def set_mine(self, c: Coordinate) -> None:
        """
        Mark a cell as a mine.

        Only valid during setup, before any cell has been uncovered.
        """
        cell = self.cell_at(c)
        if self._revealed_count or self._exploded:
            raise GenerationError("Mines cannot be placed once play has begun")
        if not cell.is_mine:
            cell.is_mine = True
            self._mine_count += 1

    def compute_adjacency_counts(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        w, h, d = self._bounds
        mines = np.fromiter(
            (cell.is_mine for cell in self._cells), dtype=bool, count=len(self._cells)
        ).reshape(d, h, w)
        padded = np.pad(mines, 1, constant_values=False)
        counts = np.zeros((d, h, w), dtype=np.uint8)
        for dx, dy, dz in NEIGHBOR_OFFSETS:
            counts += padded[1 + dz:1 + dz + d, 1 + dy:1 + dy + h, 1 + dx:1 + dx + w]
        for cell, count in zip(self._cells, counts.ravel().tolist()):
            cell.adjacent_mines = count
        self._generated = True

    # ========================================================================
    # State Machine (used by the reveal engine)
    # ========================================================================

    def mark_revealed(self, c: Coordinate) -> bool:
        """Move a hidden safe cell to REVEALED, keeping counters in sync."""
        cell = self.cell_at(c)
        if cell.is_mine or not cell.reveal():
            return False
        self._revealed_count += 1
        return True

    def mark_exploded(self, c: Coordinate) -> bool:
        """Move a hidden mine to EXPLODED."""
        if not self.cell_at(c).explode():
            return False
        self._exploded = True
        return True

    def toggle_flag_at(self, c: Coordinate) -> bool:
        """Flip a cell between HIDDEN and FLAGGED, keeping counters in sync."""
        cell = self.cell_at(c)
        if not cell.toggle_flag():
            return False
        self._flagged_count += 1 if cell.state == CellState.FLAGGED else -1
        return True

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def bounds(self) -> Bounds:
        return self._bounds

    @property
    def width(self) -> int:
        return self._bounds.width

    @property
    def height(self) -> int:
        return self._bounds.height

    @property
    def depth(self) -> int:
        return self._bounds.depth

    @property
    def total_cells(self) -> int:
        return len(self._cells)

    @property
    def mine_count(self) -> int:
        """Number of mines placed so far."""
        return self._mine_count

    @property
    def mines_placed(self) -> bool:
        return self._mine_count > 0

    @property
    def revealed_count(self) -> int:
        return self._revealed_count

    @property
    def flagged_count(self) -> int:
        return self._flagged_count

    @property
    def has_exploded(self) -> bool:
        return self._exploded

    @property
    def is_untouched(self) -> bool:
        """True until a layout has been finalized or a cell has been uncovered."""
        return not (
            self._generated or self._mine_count or self._revealed_count or self._exploded
        )

    def mine_coordinates(self) -> List[Coordinate]:
        return [
            from_index(index, self._bounds)
            for index, cell in enumerate(self._cells)
            if cell.is_mine
        ]

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array.

        Returns:
            int8 array shaped (depth, height, width), indexed [z, y, x], where:
                -1 = hidden
                -2 = flagged
                0-26 = revealed with adjacent count
                27 = exploded mine
        """
        w, h, d = self._bounds
        return np.fromiter(
            (cell.to_observation() for cell in self._cells),
            dtype=np.int8,
            count=len(self._cells),
        ).reshape(d, h, w)

    def get_valid_actions(self) -> List[Coordinate]:
        """
        Get list of cells that can still be revealed.

        Returns:
            Coordinates of hidden cells.
        """
        return [
            from_index(index, self._bounds)
            for index, cell in enumerate(self._cells)
            if cell.state == CellState.HIDDEN
        ]
