"""
Seeded mine placement.

Mines are placed only once the first cell has been chosen, so the first
click and every neighbor around it can be kept mine-free.
"""
import logging
import random
from typing import Iterable, Optional

from .board import Board
from .coords import Coordinate, safe_zone, to_index
from .errors import CoordinateOutOfBoundsError, GenerationError, InvalidMineCountError, TooManyMinesError

logger = logging.getLogger(__name__)


def place_mines(board: Board, mines: Iterable[Coordinate]) -> None:
    """
    Mark an explicit set of coordinates as mines and compute counts.

    Args:
        board: Board in its setup phase.
        mines: Coordinates to mine. Duplicates are ignored.
    """
    mines = list(mines)
    if board.revealed_count or board.has_exploded:
        raise GenerationError("Mines cannot be placed once play has begun")
    for c in mines:
        if not board.contains(c):
            raise CoordinateOutOfBoundsError(f"Mine position {tuple(c)} is outside the board")
    for c in mines:
        board.set_mine(c)
    board.compute_adjacency_counts()


def generate(
    board: Board,
    mine_count: int,
    first_click: Coordinate,
    rng_seed: Optional[int],
) -> None:
    """
    Place mines at random while keeping the first click safe.

    The safe zone is the first click plus its neighbors (up to 27 cells).
    Mines are drawn uniformly without replacement from every other cell,
    so the same seed always yields the same layout for a given board shape
    and first click.

    Args:
        board: Freshly created board with no mines and no uncovered cells.
        mine_count: Number of mines to place.
        first_click: Cell the player revealed first.
        rng_seed: Seed for the placement RNG.

    Raises:
        InvalidMineCountError: If mine_count is negative.
        CoordinateOutOfBoundsError: If first_click is outside the board.
        GenerationError: If the board has already been generated or played.
        TooManyMinesError: If the mines do not fit outside the safe zone.
    """
    if mine_count < 0:
        raise InvalidMineCountError("Number of mines cannot be negative")
    if not board.contains(first_click):
        raise CoordinateOutOfBoundsError(f"First click {tuple(first_click)} is outside the board")
    if not board.is_untouched:
        raise GenerationError("Board has already been generated or played")

    bounds = board.bounds
    excluded = {to_index(c, bounds) for c in safe_zone(first_click, bounds)}
    candidates = [c for c in board.iter_coordinates() if to_index(c, bounds) not in excluded]
    if mine_count > len(candidates):
        raise TooManyMinesError(
            f"Cannot fit {mine_count} mines outside the safe zone "
            f"({len(candidates)} cells available)"
        )

    rng = random.Random(rng_seed)
    place_mines(board, rng.sample(candidates, mine_count))
    logger.debug(
        "Placed %d mines on %r (first click %s, seed %s)",
        mine_count, board, tuple(first_click), rng_seed,
    )
