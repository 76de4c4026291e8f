"""
Reveal engine: flag toggling, single reveals and cascading flood-fill.

All functions operate on a board passed in for the duration of one call.
"""
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import FrozenSet, List

from .board import Board
from .cell import CellState
from .coords import Coordinate, neighbors_of, to_index
from .errors import CellNotHidableError


# ============================================================================
# Outcomes
# ============================================================================

class RevealKind(Enum):
    """What a reveal request did."""

    REVEALED = auto()
    EXPLODED = auto()
    IGNORED = auto()
    ALREADY_REVEALED = auto()


@dataclass(frozen=True)
class RevealOutcome:
    """
    Result of a reveal, handed to renderers as one batch.

    Attributes:
        kind: What happened.
        coordinates: Newly revealed cells for REVEALED, the detonated cell
            for EXPLODED, empty otherwise.
    """

    kind: RevealKind
    coordinates: FrozenSet[Coordinate] = field(default_factory=frozenset)

    @classmethod
    def revealed(cls, coordinates: FrozenSet[Coordinate]) -> "RevealOutcome":
        return cls(RevealKind.REVEALED, frozenset(coordinates))

    @classmethod
    def exploded(cls, c: Coordinate) -> "RevealOutcome":
        return cls(RevealKind.EXPLODED, frozenset({Coordinate(*c)}))

    @classmethod
    def ignored(cls) -> "RevealOutcome":
        return cls(RevealKind.IGNORED)

    @classmethod
    def already_revealed(cls) -> "RevealOutcome":
        return cls(RevealKind.ALREADY_REVEALED)

    @property
    def is_revealed(self) -> bool:
        return self.kind == RevealKind.REVEALED

    @property
    def is_exploded(self) -> bool:
        return self.kind == RevealKind.EXPLODED


# ============================================================================
# Flags
# ============================================================================

def toggle_flag(board: Board, c: Coordinate) -> CellState:
    """
    Flag a hidden cell or unflag a flagged one.

    Returns:
        The cell's new state.

    Raises:
        CoordinateOutOfBoundsError: If c is outside the board.
        CellNotHidableError: If the cell is revealed or exploded.
    """
    cell = board.cell_at(c)
    if not board.toggle_flag_at(c):
        raise CellNotHidableError(f"Cannot flag {tuple(c)}: cell is {cell.state.name.lower()}")
    return cell.state


# ============================================================================
# Reveal
# ============================================================================

def reveal(board: Board, c: Coordinate) -> RevealOutcome:
    """
    Reveal a cell, cascading through zero-count neighbors.

    Flagged cells are never revealed, neither directly nor by a cascade.

    Args:
        board: Board with mines already placed.
        c: Cell to reveal.

    Returns:
        ALREADY_REVEALED for a revealed cell, IGNORED for a flagged or
        exploded cell, EXPLODED when the cell is a mine and REVEALED with
        every newly uncovered coordinate otherwise.
    """
    cell = board.cell_at(c)
    if cell.state == CellState.REVEALED:
        return RevealOutcome.already_revealed()
    if cell.state != CellState.HIDDEN:
        return RevealOutcome.ignored()
    if cell.is_mine:
        board.mark_exploded(c)
        return RevealOutcome.exploded(c)
    return RevealOutcome.revealed(_flood_fill(board, Coordinate(*c)))


def _flood_fill(board: Board, start: Coordinate) -> FrozenSet[Coordinate]:
    """Reveal start and, breadth first, everything reachable through zero cells."""
    bounds = board.bounds
    visited = {to_index(start, bounds)}
    queue = deque([start])
    newly_revealed: List[Coordinate] = []

    while queue:
        current = queue.popleft()
        cell = board.cell_at(current)
        if cell.state != CellState.HIDDEN or cell.is_mine:
            continue
        board.mark_revealed(current)
        newly_revealed.append(current)
        if cell.adjacent_mines:
            continue
        for neighbor in neighbors_of(current, bounds):
            index = to_index(neighbor, bounds)
            if index not in visited:
                visited.add(index)
                queue.append(neighbor)

    return frozenset(newly_revealed)


def chord(board: Board, c: Coordinate) -> RevealOutcome:
    """
    Chord action: reveal all hidden neighbors once enough flags surround a number.

    Applies only to a revealed cell whose flagged-neighbor count equals its
    adjacent mine count. If a wrongly placed flag leaves a mine among the
    hidden neighbors, that mine explodes and nothing else is uncovered.
    """
    cell = board.cell_at(c)
    if not cell.is_revealed or cell.adjacent_mines == 0:
        return RevealOutcome.ignored()

    neighbors = list(neighbors_of(Coordinate(*c), board.bounds))
    flagged = sum(1 for n in neighbors if board.cell_at(n).is_flagged)
    if flagged != cell.adjacent_mines:
        return RevealOutcome.ignored()

    hidden = [n for n in neighbors if board.cell_at(n).is_hidden]
    if not hidden:
        return RevealOutcome.ignored()

    for neighbor in hidden:
        if board.cell_at(neighbor).is_mine:
            board.mark_exploded(neighbor)
            return RevealOutcome.exploded(neighbor)

    newly_revealed = set()
    for neighbor in hidden:
        newly_revealed |= _flood_fill(board, neighbor)
    return RevealOutcome.revealed(frozenset(newly_revealed))


# ============================================================================
# Win Condition
# ============================================================================

def is_cleared(board: Board) -> bool:
    """Check if all non-mine cells are revealed."""
    return board.revealed_count == board.total_cells - board.mine_count
