"""
Coordinate and neighbor model for the volumetric grid.

Cells are addressed by integer (x, y, z) triples. Two cells are neighbors
when they differ by at most one step on every axis (26-connectivity).
"""
from typing import Iterator, NamedTuple, Tuple


# ============================================================================
# Types
# ============================================================================

class Coordinate(NamedTuple):
    """Integer position of a cell inside the grid."""

    x: int
    y: int
    z: int


class Bounds(NamedTuple):
    """Extent of the grid along each axis."""

    width: int
    height: int
    depth: int

    @property
    def total_cells(self) -> int:
        return self.width * self.height * self.depth


# Ordered lexicographically by (dz, dy, dx) so neighbor iteration is stable.
NEIGHBOR_OFFSETS: Tuple[Tuple[int, int, int], ...] = tuple(
    (dx, dy, dz)
    for dz in (-1, 0, 1)
    for dy in (-1, 0, 1)
    for dx in (-1, 0, 1)
    if not (dx == 0 and dy == 0 and dz == 0)
)


# ============================================================================
# Neighbor Utilities
# ============================================================================

def in_bounds(c: Coordinate, bounds: Bounds) -> bool:
    """Check if a coordinate lies inside the grid."""
    return (
        0 <= c[0] < bounds.width
        and 0 <= c[1] < bounds.height
        and 0 <= c[2] < bounds.depth
    )


def neighbors_of(c: Coordinate, bounds: Bounds) -> Iterator[Coordinate]:
    """
    Yield the in-bounds neighbors of a cell.

    Offsets that fall outside the grid are clipped, so a corner cell yields
    7 neighbors, an edge cell 11, a face cell 17 and an interior cell 26.

    Args:
        c: Center cell.
        bounds: Grid extent used for clipping.

    Yields:
        Neighbor coordinates in (dz, dy, dx) order.
    """
    x, y, z = c
    for dx, dy, dz in NEIGHBOR_OFFSETS:
        nx, ny, nz = x + dx, y + dy, z + dz
        if (
            0 <= nx < bounds.width
            and 0 <= ny < bounds.height
            and 0 <= nz < bounds.depth
        ):
            yield Coordinate(nx, ny, nz)


def safe_zone(c: Coordinate, bounds: Bounds) -> Tuple[Coordinate, ...]:
    """Return a cell together with all of its neighbors."""
    return (Coordinate(*c),) + tuple(neighbors_of(c, bounds))


# ============================================================================
# Flat Index Translation
# ============================================================================

def to_index(c: Coordinate, bounds: Bounds) -> int:
    """Convert a coordinate to its flat storage index."""
    return c[0] + c[1] * bounds.width + c[2] * bounds.width * bounds.height


def from_index(index: int, bounds: Bounds) -> Coordinate:
    """Convert a flat storage index back to a coordinate."""
    layer = bounds.width * bounds.height
    z, rest = divmod(index, layer)
    y, x = divmod(rest, bounds.width)
    return Coordinate(x, y, z)
