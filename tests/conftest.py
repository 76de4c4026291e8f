"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sweeper3d.game import Board, BoardConfig, Cell, Coordinate, GameSession, SessionStatus, place_mines


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def cube_board() -> Board:
    """Create an empty 3x3x3 board without mines."""
    return Board(3, 3, 3)


@pytest.fixture
def far_corner_mine_board() -> Board:
    """3x3x3 board with a single mine in the far corner (2, 2, 2)."""
    board = Board(3, 3, 3)
    place_mines(board, [Coordinate(2, 2, 2)])
    return board


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    board = Board(5, 5, 5)
    place_mines(board, [])
    return board


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def default_session() -> GameSession:
    """Create a default 5x5x5 session with 10 mines and a fixed seed."""
    return GameSession(BoardConfig(), seed=1234)


@pytest.fixture
def started_session() -> GameSession:
    """5x5x5 session with 30 mines, opened at the origin corner and still in progress."""
    for seed in range(100):
        session = GameSession(BoardConfig(5, 5, 5, 30), seed=seed)
        session.reveal(Coordinate(0, 0, 0))
        if session.status == SessionStatus.IN_PROGRESS:
            return session
    pytest.fail("no seed left the session in progress")


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)
