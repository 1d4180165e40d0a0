import typing as t

from patrolsim.data_models import GridCell, GridCellSet, GuardPose
from patrolsim.exceptions import PatrolLoopError
from patrolsim.world.patrol_grid import PatrolGrid


def step(
    grid: PatrolGrid, pose: GuardPose, extra_obstacle: GridCell | None = None
) -> GuardPose | None:
    """Computes the guard's next pose, or None once the guard walks off the grid.

    A blocked guard turns right in place instead of moving.
    """
    ahead = pose.advance()
    if not grid.is_in_bounds(ahead):
        return None
    if grid.is_obstacle(ahead.x, ahead.y, extra_obstacle):
        return pose.turn_right()
    return ahead


def walk(
    grid: PatrolGrid, start: GuardPose, extra_obstacle: GridCell | None = None
) -> t.Iterator[GuardPose]:
    """Yields the start pose followed by every pose the guard takes until it exits.

    Never ends for a looping guard.
    """
    pose: GuardPose | None = start
    while pose is not None:
        yield pose
        pose = step(grid, pose, extra_obstacle)


def visited_cells(grid: PatrolGrid, start: GuardPose | None = None) -> GridCellSet:
    """Cells the guard stands on before leaving the grid; raises `PatrolLoopError` if it never leaves."""
    if start is None:
        start = grid.find_start()

    cells: GridCellSet = set()
    seen_poses: t.Set[GuardPose] = set()
    for n_steps, pose in enumerate(walk(grid, start)):
        if pose in seen_poses:
            raise PatrolLoopError(pose.x, pose.y, n_steps)
        seen_poses.add(pose)
        cells.add(pose.cell)
    return cells


def find_unique_positions(grid: PatrolGrid, start: GuardPose | None = None) -> int:
    """Number of distinct cells visited, start cell included."""
    return len(visited_cells(grid, start))


def run_trial(
    grid: PatrolGrid,
    start: GuardPose | None = None,
    extra_obstacle: GridCell | None = None,
) -> bool:
    """Returns True if the guard loops forever, False if it leaves the grid.

    Transitions are deterministic, so reaching a pose twice means the whole
    path from that pose repeats.
    """
    if start is None:
        start = grid.find_start()

    visited: t.Set[GuardPose] = set()
    for pose in walk(grid, start, extra_obstacle):
        if pose in visited:
            return True
        visited.add(pose)
    return False
