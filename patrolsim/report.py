import typing as t

from pydantic import BaseModel

from patrolsim.data_models import GridCell


class PatrolReport(BaseModel):
    rows: int
    cols: int
    start: GridCell
    """Cell the guard started from"""

    mode: t.Literal["unique", "loops", "both"]

    unique_positions: int | None = None
    """Number of distinct cells visited on the unmodified grid, start included.
    """

    loop_count: int | None = None
    """Number of single-obstacle placements that trap the guard in a loop.
    """

    loop_obstacles: t.List[GridCell] = []
    """The placements counted by `loop_count`, in row-major order.
    """

    elapsed_seconds: float = 0.0

    def result_lines(self) -> t.List[str]:
        lines = []
        if self.unique_positions is not None:
            lines.append(f"Unique positions: {self.unique_positions}")
        if self.loop_count is not None:
            lines.append(f"Number of loops: {self.loop_count}")
        return lines
