import os

import pytest

from patrolsim.data_models import Direction, GuardPose
from patrolsim.exceptions import PatrolLoopError
from patrolsim.navigation.patrol import (
    find_unique_positions,
    run_trial,
    step,
    visited_cells,
    walk,
)
from patrolsim.world.patrol_grid import PatrolGrid

dirname = os.path.dirname(os.path.abspath(__file__))

# Walking up from (1, 3) the guard turns at (1, 1), (3, 1) and (3, 3), then
# leaves through the left edge. An obstacle at (0, 3) sends it back to its start.
SQUARE_GRID = """
.#...
....#
.....
.^...
...#.
"""

BOXED_GRID = """
.#.
#^#
.#.
"""


def test_step():
    grid = PatrolGrid.from_text(".#.\n...\n.^.")
    assert step(grid, GuardPose(1, 2, Direction.UP)) == GuardPose(1, 1, Direction.UP)
    # blocked: turn in place
    assert step(grid, GuardPose(1, 1, Direction.UP)) == GuardPose(1, 1, Direction.RIGHT)
    assert step(grid, GuardPose(2, 1, Direction.RIGHT)) is None
    assert (
        step(grid, GuardPose(1, 2, Direction.UP), extra_obstacle=(1, 1))
        == GuardPose(1, 2, Direction.RIGHT)
    )


def test_walk_path():
    grid = PatrolGrid.from_text(".#.\n...\n.^.")
    assert list(walk(grid, grid.find_start())) == [
        GuardPose(1, 2, Direction.UP),
        GuardPose(1, 1, Direction.UP),
        GuardPose(1, 1, Direction.RIGHT),
        GuardPose(2, 1, Direction.RIGHT),
    ]


def test_unique_positions_small_grid():
    grid = PatrolGrid.from_text(".#.\n...\n.^.")
    assert find_unique_positions(grid) == 3
    assert visited_cells(grid) == {(1, 2), (1, 1), (2, 1)}


def test_unique_positions_single_cell():
    grid = PatrolGrid.from_text("^")
    assert find_unique_positions(grid) == 1


def test_unique_positions_sample():
    grid = PatrolGrid.load_from_file(f"{dirname}/../scenarios/sample_patrol.txt")
    assert find_unique_positions(grid) == 41


def test_unique_positions_square():
    grid = PatrolGrid.from_text(SQUARE_GRID)
    assert visited_cells(grid) == {
        (1, 3),
        (1, 2),
        (1, 1),
        (2, 1),
        (3, 1),
        (3, 2),
        (3, 3),
        (2, 3),
        (0, 3),
    }


def test_unique_positions_on_looping_grid():
    grid = PatrolGrid.from_text(BOXED_GRID)
    with pytest.raises(PatrolLoopError):
        find_unique_positions(grid)


def test_walk_is_deterministic():
    grid = PatrolGrid.from_text(SQUARE_GRID)
    start = grid.find_start()
    assert list(walk(grid, start)) == list(walk(grid, start))
    assert run_trial(grid, start, (0, 3)) == run_trial(grid, start, (0, 3))


def test_transitions_bounded_by_state_count():
    grid = PatrolGrid.load_from_file(f"{dirname}/../scenarios/sample_patrol.txt")
    n_transitions = len(list(walk(grid, grid.find_start()))) - 1
    assert n_transitions <= 4 * grid.rows * grid.cols


class TestRunTrial:
    def setup_method(self):
        self.grid = PatrolGrid.from_text(SQUARE_GRID)
        self.start = self.grid.find_start()

    def test_no_extra_obstacle_exits(self):
        assert not run_trial(self.grid, self.start)

    def test_obstacle_closing_the_square_loops(self):
        assert run_trial(self.grid, self.start, extra_obstacle=(0, 3))

    def test_obstacle_written_to_grid_loops(self):
        with self.grid.temporary_obstacle((0, 3)):
            assert run_trial(self.grid)
        assert not run_trial(self.grid)

    def test_other_obstacles_on_path_exit(self):
        for cell in [(1, 2), (1, 1), (2, 1), (3, 1), (3, 2), (3, 3), (2, 3)]:
            assert not run_trial(self.grid, self.start, extra_obstacle=cell), cell

    def test_obstacles_off_path_exit(self):
        for cell in [(0, 0), (4, 4), (2, 2), (4, 3)]:
            assert not run_trial(self.grid, self.start, extra_obstacle=cell), cell

    def test_does_not_modify_grid(self):
        before = self.grid.copy()
        run_trial(self.grid, self.start, extra_obstacle=(0, 3))
        assert self.grid == before


def test_boxed_guard_loops():
    grid = PatrolGrid.from_text(BOXED_GRID)
    assert run_trial(grid)


def test_trial_single_cell_exits():
    assert not run_trial(PatrolGrid.from_text("^"))
