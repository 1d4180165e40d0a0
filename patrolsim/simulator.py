import os
import time

from patrolsim.algorithms.loop_trials import find_loop_obstacles
from patrolsim.data_models import (
    PatrolConfigYamlModel,
    patrol_config_from_yaml,
)
from patrolsim.navigation.patrol import find_unique_positions
from patrolsim.report import PatrolReport
from patrolsim.utils import utils
from patrolsim.world.patrol_grid import PatrolGrid


class Simulator:
    """Runs the configured patrol analyses on a grid: counting the cells the guard
    visits, and/or counting the single-obstacle placements that trap it in a loop."""

    def __init__(
        self,
        *,
        grid: PatrolGrid,
        config: PatrolConfigYamlModel | None = None,
        logger: utils.PatrolLogger | None = None,
    ):
        self.grid = grid
        self.config = config if config is not None else PatrolConfigYamlModel()
        self.logger = logger if logger is not None else utils.PatrolLogger()
        self.logger.append(
            utils.PatrolLog(
                "Grid successfully loaded ({}x{}).".format(grid.rows, grid.cols), 0
            )
        )
        n_unknown = grid.count_unknown_cells()
        if n_unknown > 0:
            self.logger.append(
                utils.PatrolLog(
                    f"Grid contains {n_unknown} cells with unknown symbols, treated as free.",
                    0,
                )
            )

    def _log_row(self, y: int, rows: int):
        self.logger.append(utils.PatrolLog(f"Running trial {y + 1}/{rows}", y + 1))

    def run(self) -> PatrolReport:
        start_time = time.time()
        start = self.grid.find_start(
            strict=self.config.require_start, logger=self.logger
        )
        report = PatrolReport(
            rows=self.grid.rows,
            cols=self.grid.cols,
            start=start.cell,
            mode=self.config.mode,
        )

        if self.config.mode in ("unique", "both"):
            report.unique_positions = find_unique_positions(self.grid, start)
            self.logger.append(
                utils.PatrolLog(
                    f"Guard visited {report.unique_positions} unique positions.", 0
                )
            )

        if self.config.mode in ("loops", "both"):
            self.logger.append(utils.PatrolLog("Running trials...", 0))
            report.loop_obstacles = find_loop_obstacles(
                self.grid,
                start,
                on_row=self._log_row if self.config.progress else None,
                workers=self.config.workers,
            )
            report.loop_count = len(report.loop_obstacles)
            self.logger.append(
                utils.PatrolLog(
                    f"Found {report.loop_count} obstacle placements causing a loop.",
                    self.grid.rows,
                )
            )

        report.elapsed_seconds = time.time() - start_time
        return report


def create_sim_from_file(
    input_file: str | None = None,
    config_file: str | None = None,
    logger: utils.PatrolLogger | None = None,
) -> Simulator:
    """Builds a simulator from a grid file and an optional YAML config.

    An explicit `input_file` takes precedence over the one named in the config.
    """
    if config_file is not None:
        config = patrol_config_from_yaml(os.path.abspath(config_file))
    else:
        config = PatrolConfigYamlModel()

    if input_file is not None:
        config.input_file = input_file

    grid = PatrolGrid.load_from_file(config.input_file, symbols=config.symbols)
    return Simulator(grid=grid, config=config, logger=logger)
