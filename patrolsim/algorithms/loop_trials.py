import typing as t
from functools import partial
from multiprocessing.pool import Pool

from patrolsim.data_models import GridCell, GuardPose
from patrolsim.navigation.patrol import run_trial
from patrolsim.world.patrol_grid import PatrolGrid

RowCallback = t.Callable[[int, int], None]


def scan_row(grid: PatrolGrid, start: GuardPose, y: int) -> t.List[GridCell]:
    """Runs one trial per candidate cell of row `y` and returns the cells that trap the guard.

    Each candidate is written to the grid for the duration of its trial and
    restored afterwards.
    """
    loop_cells: t.List[GridCell] = []
    for cell in list(grid.iter_candidate_cells(y)):
        with grid.temporary_obstacle(cell):
            if run_trial(grid, start):
                loop_cells.append(cell)
    return loop_cells


def find_loop_obstacles(
    grid: PatrolGrid,
    start: GuardPose | None = None,
    on_row: RowCallback | None = None,
    workers: int = 1,
) -> t.List[GridCell]:
    """Lists every single-obstacle placement that traps the guard in a loop.

    Rows are scanned in order and `on_row(row_index, rows)` is called once a
    row is done. With `workers > 1` rows are scanned in a process pool where
    each worker gets its own copy of the grid; the caller's grid is never
    modified in that case.
    """
    if start is None:
        start = grid.find_start()

    loop_cells: t.List[GridCell] = []

    if workers <= 1:
        for y in range(grid.rows):
            loop_cells.extend(scan_row(grid, start, y))
            if on_row is not None:
                on_row(y, grid.rows)
        return loop_cells

    with Pool(processes=workers) as pool:
        row_results = pool.imap(partial(scan_row, grid, start), range(grid.rows))
        for y, row_cells in enumerate(row_results):
            loop_cells.extend(row_cells)
            if on_row is not None:
                on_row(y, grid.rows)
    return loop_cells


def run_trials(
    grid: PatrolGrid,
    start: GuardPose | None = None,
    on_row: RowCallback | None = None,
    workers: int = 1,
) -> int:
    return len(find_loop_obstacles(grid, start=start, on_row=on_row, workers=workers))
