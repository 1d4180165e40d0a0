import typing as t

import typer

from patrolsim.exceptions import PatrolsimError
from patrolsim.navigation.patrol import visited_cells
from patrolsim.simulator import Simulator, create_sim_from_file
from patrolsim.utils import utils

app = typer.Typer()

InputArgument = t.Annotated[t.Optional[str], typer.Argument()]
ConfigOption = t.Annotated[t.Optional[str], typer.Option("--config")]


def _load(input_file: str | None, config: str | None, printout: bool = True) -> Simulator:
    try:
        return create_sim_from_file(
            input_file=input_file,
            config_file=config,
            logger=utils.PatrolLogger(printout=printout),
        )
    except PatrolsimError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)


def _run(sim: Simulator):
    try:
        report = sim.run()
    except PatrolsimError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    for line in report.result_lines():
        typer.echo(line)


@app.command()
def walk(input_file: InputArgument = None, config: ConfigOption = None):
    """Counts the cells the guard visits before leaving the grid."""
    sim = _load(input_file, config)
    sim.config.mode = "unique"
    _run(sim)


@app.command()
def trials(
    input_file: InputArgument = None,
    config: ConfigOption = None,
    workers: t.Annotated[t.Optional[int], typer.Option("--workers", min=1)] = None,
    quiet: t.Annotated[bool, typer.Option("--quiet")] = False,
):
    """Counts the single-obstacle placements that trap the guard in a loop."""
    sim = _load(input_file, config, printout=not quiet)
    sim.config.mode = "loops"
    if workers is not None:
        sim.config.workers = workers
    _run(sim)


@app.command()
def run(config: str):
    """Runs the mode named in a YAML config file."""
    _run(_load(None, config))


@app.command()
def render(input_file: InputArgument = None, config: ConfigOption = None):
    """Prints the grid with the guard's patrol path marked."""
    sim = _load(input_file, config)
    try:
        start = sim.grid.find_start(strict=sim.config.require_start, logger=sim.logger)
        cells = visited_cells(sim.grid, start)
    except PatrolsimError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(code=1)
    typer.echo(sim.grid.to_text(cells))


if __name__ == "__main__":
    app()
