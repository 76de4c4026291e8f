"""
Unit tests for seeded mine generation.
"""
import pytest
from sweeper3d.game import (
    Board,
    Coordinate,
    CoordinateOutOfBoundsError,
    GenerationError,
    InvalidMineCountError,
    TooManyMinesError,
    generate,
    neighbors_of,
)
from sweeper3d.game.coords import safe_zone


def count_mines(board: Board) -> int:
    return sum(1 for c in board.iter_coordinates() if board.cell_at(c).is_mine)


class TestGenerate:
    """Mine placement around the first click."""

    def test_places_exact_mine_count(self) -> None:
        board = Board(5, 5, 5)
        generate(board, 5, Coordinate(0, 0, 0), rng_seed=1)
        assert count_mines(board) == 5
        assert board.mine_count == 5

    @pytest.mark.parametrize("dims", [(5, 5, 5), (9, 2, 4), (1, 1, 40), (12, 3, 1)])
    def test_mine_count_conserved_for_any_shape(self, dims) -> None:
        board = Board(*dims)
        mines = board.total_cells // 4
        generate(board, mines, Coordinate(0, 0, 0), rng_seed=99)
        assert count_mines(board) == mines

    @pytest.mark.parametrize("seed", range(20))
    def test_safe_zone_is_mine_free(self, seed: int) -> None:
        board = Board(6, 6, 6)
        first = Coordinate(3, 2, 4)
        generate(board, 150, first, rng_seed=seed)
        for c in safe_zone(first, board.bounds):
            assert board.cell_at(c).is_mine is False
        assert board.cell_at(first).adjacent_mines == 0

    def test_tightest_fit_fills_everything_outside_safe_zone(self) -> None:
        board = Board(4, 4, 4)
        first = Coordinate(1, 1, 1)
        generate(board, 64 - 27, first, rng_seed=3)
        zone = set(safe_zone(first, board.bounds))
        for c in board.iter_coordinates():
            assert board.cell_at(c).is_mine is (c not in zone)

    def test_same_seed_same_layout(self) -> None:
        first, second = Board(7, 6, 5), Board(7, 6, 5)
        generate(first, 30, Coordinate(2, 2, 2), rng_seed=42)
        generate(second, 30, Coordinate(2, 2, 2), rng_seed=42)
        assert first.mine_coordinates() == second.mine_coordinates()

    def test_counts_are_computed(self) -> None:
        board = Board(5, 5, 5)
        generate(board, 20, Coordinate(0, 0, 0), rng_seed=5)
        for c in board.iter_coordinates():
            expected = sum(1 for n in neighbors_of(c, board.bounds) if board.cell_at(n).is_mine)
            assert board.cell_at(c).adjacent_mines == expected

    def test_zero_mines(self) -> None:
        board = Board(3, 3, 3)
        generate(board, 0, Coordinate(1, 1, 1), rng_seed=0)
        assert board.mine_count == 0


class TestGenerateErrors:
    """Rejected requests leave the board untouched."""

    def test_center_of_cube_leaves_no_room(self) -> None:
        board = Board(3, 3, 3)
        with pytest.raises(TooManyMinesError):
            generate(board, 1, Coordinate(1, 1, 1), rng_seed=0)
        assert board.is_untouched is True

    def test_corner_of_cube_has_room(self) -> None:
        board = Board(3, 3, 3)
        generate(board, 19, Coordinate(0, 0, 0), rng_seed=0)
        assert board.mine_count == 19

    def test_one_more_than_fits_raises(self) -> None:
        board = Board(3, 3, 3)
        with pytest.raises(TooManyMinesError):
            generate(board, 20, Coordinate(0, 0, 0), rng_seed=0)
        assert count_mines(board) == 0

    def test_too_many_mines_is_a_generation_error(self) -> None:
        with pytest.raises(GenerationError):
            generate(Board(2, 2, 2), 1, Coordinate(0, 0, 0), rng_seed=0)

    def test_negative_mine_count(self) -> None:
        with pytest.raises(InvalidMineCountError):
            generate(Board(3, 3, 3), -1, Coordinate(0, 0, 0), rng_seed=0)

    def test_first_click_out_of_bounds(self) -> None:
        with pytest.raises(CoordinateOutOfBoundsError):
            generate(Board(3, 3, 3), 1, Coordinate(3, 0, 0), rng_seed=0)

    def test_board_is_generated_only_once(self) -> None:
        board = Board(5, 5, 5)
        generate(board, 5, Coordinate(0, 0, 0), rng_seed=1)
        layout = board.mine_coordinates()
        with pytest.raises(GenerationError):
            generate(board, 5, Coordinate(4, 4, 4), rng_seed=2)
        assert board.mine_coordinates() == layout

    def test_empty_layout_still_counts_as_generated(self) -> None:
        board = Board(5, 5, 5)
        generate(board, 0, Coordinate(0, 0, 0), rng_seed=1)
        assert board.is_untouched is False
        with pytest.raises(GenerationError):
            generate(board, 5, Coordinate(4, 4, 4), rng_seed=2)
        assert board.mine_count == 0
