"""
Cell module for the volumetric board.

Represents individual cells of the grid with their state
(hidden/flagged/revealed/exploded) and content (mine/number).
"""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    FLAGGED = auto()
    REVEALED = auto()
    EXPLODED = auto()


HIDDEN_OBSERVATION = -1
FLAGGED_OBSERVATION = -2
EXPLODED_OBSERVATION = 27


# ============================================================================
# Cell Data Class
# ============================================================================

@dataclass
class Cell:
    """
    Represents a single cell in the grid.

    Attributes:
        is_mine: Whether this cell contains a mine.
        adjacent_mines: Count of mines in neighboring cells (0-26).
        state: Current visual state.
    """

    is_mine: bool = False
    adjacent_mines: int = 0
    state: CellState = CellState.HIDDEN

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if the cell went from hidden to revealed, False otherwise.
        """
        if self.state != CellState.HIDDEN:
            return False
        self.state = CellState.REVEALED
        return True

    def explode(self) -> bool:
        """
        Detonate this cell.

        Returns:
            True if a hidden mine went off, False otherwise.
        """
        if self.state != CellState.HIDDEN or not self.is_mine:
            return False
        self.state = CellState.EXPLODED
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed or exploded.
        """
        if self.state == CellState.HIDDEN:
            self.state = CellState.FLAGGED
        elif self.state == CellState.FLAGGED:
            self.state = CellState.HIDDEN
        else:
            return False
        return True

    @property
    def is_hidden(self) -> bool:
        return self.state == CellState.HIDDEN

    @property
    def is_flagged(self) -> bool:
        return self.state == CellState.FLAGGED

    @property
    def is_revealed(self) -> bool:
        return self.state == CellState.REVEALED

    @property
    def is_exploded(self) -> bool:
        return self.state == CellState.EXPLODED

    def to_observation(self) -> int:
        """
        Convert cell to observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-26: Revealed cell with adjacent mine count
            27: Exploded mine
        """
        if self.state == CellState.HIDDEN:
            return HIDDEN_OBSERVATION
        if self.state == CellState.FLAGGED:
            return FLAGGED_OBSERVATION
        if self.state == CellState.EXPLODED:
            return EXPLODED_OBSERVATION
        return self.adjacent_mines

    def to_view(self) -> "CellView":
        """Snapshot the cell, hiding content that has not been uncovered."""
        if self.state in (CellState.REVEALED, CellState.EXPLODED):
            return CellView(self.state, self.adjacent_mines, self.is_mine)
        return CellView(self.state)


@dataclass(frozen=True)
class CellView:
    """Read-only snapshot of a cell handed to renderers."""

    state: CellState
    adjacent_mines: Optional[int] = None
    is_mine: Optional[bool] = None
