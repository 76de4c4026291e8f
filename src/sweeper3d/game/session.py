"""
Game session lifecycle.

A GameSession owns exactly one Board and drives it through
NOT_STARTED -> IN_PROGRESS -> WON | LOST. It is the only surface hosts
(renderers, input handlers, environments) talk to.

The session is not thread-safe. Hosts that handle input and rendering on
different threads must serialize calls into it.
"""
import logging
import random
from enum import Enum, auto
from typing import NamedTuple, Optional

import numpy as np

from . import generator, reveal as engine
from .board import Board, BoardConfig
from .cell import CellState, CellView
from .coords import Coordinate
from .errors import CoordinateOutOfBoundsError, SessionOverError
from .reveal import RevealKind, RevealOutcome

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class SessionStatus(Enum):
    """Possible states of a session."""

    NOT_STARTED = auto()
    IN_PROGRESS = auto()
    WON = auto()
    LOST = auto()


class SessionCounts(NamedTuple):
    """Counters shown by the host UI."""

    revealed_count: int
    flagged_count: int
    mine_count: int
    total_cells: int


def _random_seed() -> int:
    return random.getrandbits(32)


# ============================================================================
# Session Class
# ============================================================================

class GameSession:
    """
    One play-through of a volumetric board.

    Mines are generated lazily on the first reveal so that the first cell
    and its neighborhood are always safe.
    """

    def __init__(self, config: Optional[BoardConfig] = None, seed: Optional[int] = None) -> None:
        """
        Initialize the session.

        Args:
            config: Board configuration (default: 5x5x5 with 10 mines).
            seed: Seed for mine placement. A random one is drawn if omitted.
        """
        self._config = config or BoardConfig()
        self._seed = seed if seed is not None else _random_seed()
        self._board = Board.from_config(self._config)
        self._status = SessionStatus.NOT_STARTED

    def __repr__(self) -> str:
        return (
            f"GameSession({self._config.width}x{self._config.height}x{self._config.depth}, "
            f"mines={self._config.mine_count}, status={self._status.name})"
        )

    # ========================================================================
    # Game Actions
    # ========================================================================

    def reveal(self, c: Coordinate) -> RevealOutcome:
        """
        Reveal a cell.

        The first reveal of a session generates the mine layout around it.

        Raises:
            SessionOverError: If the session is already won or lost.
            CoordinateOutOfBoundsError: If c is outside the board.
            TooManyMinesError: If the mines do not fit outside the safe zone
                of the first click. The session stays NOT_STARTED.
        """
        self._ensure_playable()
        c = self._checked(c)

        if self._status == SessionStatus.NOT_STARTED:
            if self._board.cell_at(c).is_flagged:
                return RevealOutcome.ignored()
            generator.generate(self._board, self._config.mine_count, c, self._seed)
            self._set_status(SessionStatus.IN_PROGRESS)

        outcome = engine.reveal(self._board, c)
        self._apply(outcome)
        return outcome

    def chord(self, c: Coordinate) -> RevealOutcome:
        """Reveal the hidden neighbors of a satisfied number."""
        self._ensure_playable()
        c = self._checked(c)
        if self._status == SessionStatus.NOT_STARTED:
            return RevealOutcome.ignored()
        outcome = engine.chord(self._board, c)
        self._apply(outcome)
        return outcome

    def toggle_flag(self, c: Coordinate) -> CellState:
        """
        Toggle a flag on a hidden or flagged cell.

        Returns:
            The cell's new state.

        Raises:
            SessionOverError: If the session is already won or lost.
            CoordinateOutOfBoundsError: If c is outside the board.
            CellNotHidableError: If the cell is revealed.
        """
        self._ensure_playable()
        return engine.toggle_flag(self._board, self._checked(c))

    def reset(self, config: Optional[BoardConfig] = None, seed: Optional[int] = None) -> None:
        """
        Start a new round on a fresh board.

        Args:
            config: New configuration, or None to keep the current one.
            seed: Seed for the new round, or None to draw a new one.
        """
        self._config = config or self._config
        self._seed = seed if seed is not None else _random_seed()
        self._board = Board.from_config(self._config)
        self._status = SessionStatus.NOT_STARTED
        logger.debug("Session reset: %r seed=%d", self, self._seed)

    def _apply(self, outcome: RevealOutcome) -> None:
        if outcome.kind == RevealKind.EXPLODED:
            self._set_status(SessionStatus.LOST)
        elif outcome.kind == RevealKind.REVEALED and engine.is_cleared(self._board):
            self._set_status(SessionStatus.WON)

    def _set_status(self, status: SessionStatus) -> None:
        logger.debug("Session %s -> %s", self._status.name, status.name)
        self._status = status

    def _ensure_playable(self) -> None:
        if self.is_over:
            raise SessionOverError(f"Session already {self._status.name.lower()}")

    def _checked(self, c: Coordinate) -> Coordinate:
        if not self._board.contains(c):
            raise CoordinateOutOfBoundsError(f"{tuple(c)} is outside the board")
        return Coordinate(*c)

    # ========================================================================
    # State Accessors
    # ========================================================================

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def is_over(self) -> bool:
        return self._status in (SessionStatus.WON, SessionStatus.LOST)

    @property
    def config(self) -> BoardConfig:
        return self._config

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def board(self) -> Board:
        """The current board. Hosts must treat it as read-only."""
        return self._board

    def cell_view(self, c: Coordinate) -> CellView:
        """Snapshot of a cell for rendering."""
        return self._board.cell_at(c).to_view()

    def counts(self) -> SessionCounts:
        return SessionCounts(
            revealed_count=self._board.revealed_count,
            flagged_count=self._board.flagged_count,
            mine_count=self._config.mine_count,
            total_cells=self._config.total_cells,
        )

    def get_observation(self) -> np.ndarray:
        return self._board.get_observation()


def new_session(
    width: int,
    height: int,
    depth: int,
    mine_count: int,
    seed: Optional[int] = None,
) -> GameSession:
    """Create a session for the given board shape and mine count."""
    return GameSession(BoardConfig(width, height, depth, mine_count), seed=seed)
