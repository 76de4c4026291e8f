"""
Exceptions raised by the board engine.

Every error is recoverable: the operation that raises it leaves the board
and session exactly as they were before the call.
"""


class MinesweeperError(Exception):
    """Base class for all board engine errors."""


class InvalidDimensionsError(MinesweeperError, ValueError):
    """A board dimension was zero or negative."""


class InvalidMineCountError(MinesweeperError, ValueError):
    """A negative number of mines was requested."""


class GenerationError(MinesweeperError, ValueError):
    """Mines could not be placed on the board."""


class TooManyMinesError(GenerationError):
    """The requested mines do not fit outside the first-click safe zone."""


class CoordinateOutOfBoundsError(MinesweeperError, IndexError):
    """A coordinate addressed a cell outside the grid."""


class FlagError(MinesweeperError):
    """A flag toggle was rejected."""


class CellNotHidableError(FlagError):
    """Tried to flag or unflag a revealed or exploded cell."""


class SessionOverError(MinesweeperError):
    """The session has already been won or lost."""
