"""
Unit tests for GameSession.

Tests deferred generation, first-click safety, the lifecycle state
machine, atomicity of failing calls and resets.
"""
import pytest
from sweeper3d.game import (
    Board,
    BoardConfig,
    CellNotHidableError,
    CellState,
    Coordinate,
    CoordinateOutOfBoundsError,
    GameSession,
    RevealKind,
    SessionCounts,
    SessionOverError,
    SessionStatus,
    TooManyMinesError,
    new_session,
)


def find_mine(session: GameSession) -> Coordinate:
    return session.board.mine_coordinates()[0]


def reveal_all_safe(session: GameSession) -> None:
    for c in session.board.iter_coordinates():
        if session.is_over:
            return
        cell = session.board.cell_at(c)
        if not cell.is_mine and cell.is_hidden:
            session.reveal(c)


# ============================================================================
# Creation Tests
# ============================================================================

class TestSessionCreation:
    """Test session setup."""

    def test_new_session_not_started(self, default_session: GameSession) -> None:
        assert default_session.status == SessionStatus.NOT_STARTED
        assert default_session.is_over is False
        assert default_session.seed == 1234

    def test_mines_not_placed_before_first_reveal(self, default_session: GameSession) -> None:
        assert default_session.board.mine_count == 0
        assert default_session.board.mines_placed is False

    def test_new_session_helper(self) -> None:
        session = new_session(4, 3, 2, 5, seed=9)
        assert session.config == BoardConfig(4, 3, 2, 5)
        assert session.counts() == SessionCounts(0, 0, 5, 24)

    def test_seed_is_drawn_when_omitted(self) -> None:
        assert isinstance(GameSession(BoardConfig()).seed, int)


# ============================================================================
# First Click Tests
# ============================================================================

class TestFirstClick:
    """Deferred generation keeps the first click safe."""

    def test_first_reveal_places_mines_and_starts(self, default_session: GameSession) -> None:
        default_session.reveal(Coordinate(2, 2, 2))
        assert default_session.board.mine_count == 10
        assert default_session.status in (SessionStatus.IN_PROGRESS, SessionStatus.WON)

    @pytest.mark.parametrize("seed", range(25))
    def test_first_click_never_explodes(self, seed: int) -> None:
        session = new_session(5, 5, 5, 5, seed=seed)
        outcome = session.reveal(Coordinate(0, 0, 0))
        assert outcome.kind == RevealKind.REVEALED
        assert Coordinate(0, 0, 0) in outcome.coordinates
        assert session.status != SessionStatus.LOST

    @pytest.mark.parametrize("seed", range(10))
    def test_densest_legal_board_still_cascades(self, seed: int) -> None:
        session = new_session(4, 4, 4, 64 - 27, seed=seed)
        first = Coordinate(1, 2, 1)
        outcome = session.reveal(first)
        assert session.cell_view(first).adjacent_mines == 0
        assert len(outcome.coordinates) > 1

    def test_mines_fit_board_but_not_outside_safe_zone(self) -> None:
        session = new_session(3, 3, 3, 1, seed=0)
        with pytest.raises(TooManyMinesError):
            session.reveal(Coordinate(1, 1, 1))
        assert session.status == SessionStatus.NOT_STARTED
        assert session.board.is_untouched is True

        outcome = session.reveal(Coordinate(0, 0, 0))
        assert outcome.kind == RevealKind.REVEALED
        assert session.board.mine_count == 1

    def test_same_seed_same_layout(self) -> None:
        first, second = new_session(6, 6, 6, 30, seed=5), new_session(6, 6, 6, 30, seed=5)
        first.reveal(Coordinate(3, 3, 3))
        second.reveal(Coordinate(3, 3, 3))
        assert first.board.mine_coordinates() == second.board.mine_coordinates()

    def test_flagged_first_click_is_ignored(self, default_session: GameSession) -> None:
        default_session.toggle_flag(Coordinate(0, 0, 0))
        outcome = default_session.reveal(Coordinate(0, 0, 0))
        assert outcome.kind == RevealKind.IGNORED
        assert default_session.status == SessionStatus.NOT_STARTED
        assert default_session.board.mine_count == 0


# ============================================================================
# Win/Lose Condition Tests
# ============================================================================

class TestGameEndConditions:
    """Test win and lose conditions."""

    def test_reveal_mine_loses_game(self, started_session: GameSession) -> None:
        mine = find_mine(started_session)
        outcome = started_session.reveal(mine)
        assert outcome.kind == RevealKind.EXPLODED
        assert started_session.status == SessionStatus.LOST
        assert started_session.cell_view(mine).is_mine is True

    def test_reveal_all_safe_cells_wins(self, started_session: GameSession) -> None:
        reveal_all_safe(started_session)
        assert started_session.status == SessionStatus.WON
        counts = started_session.counts()
        assert counts.revealed_count == counts.total_cells - counts.mine_count

    def test_flags_are_not_needed_to_win(self, started_session: GameSession) -> None:
        reveal_all_safe(started_session)
        assert started_session.counts().flagged_count == 0
        assert started_session.status == SessionStatus.WON

    def test_zero_mines_wins_on_first_reveal(self) -> None:
        session = new_session(4, 4, 4, 0, seed=0)
        outcome = session.reveal(Coordinate(3, 0, 2))
        assert len(outcome.coordinates) == 64
        assert session.status == SessionStatus.WON

    def test_single_cell_board(self) -> None:
        session = new_session(1, 1, 1, 0)
        session.reveal(Coordinate(0, 0, 0))
        assert session.status == SessionStatus.WON

    def test_cannot_act_after_loss(self, started_session: GameSession) -> None:
        started_session.reveal(find_mine(started_session))
        hidden = started_session.board.get_valid_actions()[0]
        with pytest.raises(SessionOverError):
            started_session.reveal(hidden)
        with pytest.raises(SessionOverError):
            started_session.toggle_flag(hidden)
        with pytest.raises(SessionOverError):
            started_session.chord(hidden)
        assert started_session.status == SessionStatus.LOST
        assert started_session.board.cell_at(hidden).is_hidden

    def test_cannot_act_after_win(self, started_session: GameSession) -> None:
        reveal_all_safe(started_session)
        with pytest.raises(SessionOverError):
            started_session.reveal(find_mine(started_session))
        assert started_session.status == SessionStatus.WON


# ============================================================================
# Action Tests
# ============================================================================

class TestSessionActions:
    """Reveal, flag and chord through the session."""

    def test_repeat_reveal_does_not_double_count(self, started_session: GameSession) -> None:
        before = started_session.counts().revealed_count
        outcome = started_session.reveal(Coordinate(0, 0, 0))
        assert outcome.kind == RevealKind.ALREADY_REVEALED
        assert started_session.counts().revealed_count == before

    def test_out_of_bounds_changes_nothing(self, default_session: GameSession) -> None:
        with pytest.raises(CoordinateOutOfBoundsError):
            default_session.reveal(Coordinate(5, 0, 0))
        assert default_session.status == SessionStatus.NOT_STARTED
        with pytest.raises(CoordinateOutOfBoundsError):
            default_session.toggle_flag(Coordinate(0, -1, 0))

    def test_flag_counts(self, started_session: GameSession) -> None:
        mine = find_mine(started_session)
        assert started_session.toggle_flag(mine) == CellState.FLAGGED
        assert started_session.counts().flagged_count == 1
        assert started_session.cell_view(mine).state == CellState.FLAGGED
        assert started_session.toggle_flag(mine) == CellState.HIDDEN
        assert started_session.counts().flagged_count == 0

    def test_flag_revealed_cell_raises(self, started_session: GameSession) -> None:
        with pytest.raises(CellNotHidableError):
            started_session.toggle_flag(Coordinate(0, 0, 0))

    def test_chord_before_start_is_ignored(self, default_session: GameSession) -> None:
        assert default_session.chord(Coordinate(0, 0, 0)).kind == RevealKind.IGNORED
        assert default_session.status == SessionStatus.NOT_STARTED

    def test_cell_view_hides_unrevealed_content(self, started_session: GameSession) -> None:
        mine = find_mine(started_session)
        view = started_session.cell_view(mine)
        assert view.state == CellState.HIDDEN
        assert view.is_mine is None
        assert view.adjacent_mines is None

        revealed = started_session.cell_view(Coordinate(0, 0, 0))
        assert revealed.state == CellState.REVEALED
        assert revealed.is_mine is False
        assert revealed.adjacent_mines == 0

    def test_board_property_is_live(self, default_session: GameSession) -> None:
        assert isinstance(default_session.board, Board)
        assert default_session.get_observation().shape == (5, 5, 5)


# ============================================================================
# Reset Tests
# ============================================================================

class TestReset:
    """Test session reset."""

    def test_reset_replaces_board(self, started_session: GameSession) -> None:
        old_board = started_session.board
        started_session.reset(seed=11)
        assert started_session.board is not old_board
        assert started_session.status == SessionStatus.NOT_STARTED
        assert started_session.seed == 11
        assert started_session.counts() == SessionCounts(0, 0, 30, 125)
        assert started_session.board.mine_count == 0

    def test_reset_after_loss_allows_play(self, started_session: GameSession) -> None:
        started_session.reveal(find_mine(started_session))
        started_session.reset()
        outcome = started_session.reveal(Coordinate(4, 4, 4))
        assert outcome.kind == RevealKind.REVEALED

    def test_reset_with_new_config(self, default_session: GameSession) -> None:
        default_session.reset(BoardConfig(3, 4, 6, 2), seed=1)
        assert default_session.board.bounds == (3, 4, 6)
        assert default_session.counts().mine_count == 2
