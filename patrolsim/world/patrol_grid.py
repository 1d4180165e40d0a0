import copy
import typing as t
from contextlib import contextmanager

import numpy as np
import numpy.typing as npt
from typing_extensions import Self

from patrolsim.data_models import (
    Direction,
    GridCell,
    GridSymbolsModel,
    GuardPose,
)
from patrolsim.exceptions import InputReadError
from patrolsim.utils import utils
from patrolsim.world.custom_exceptions import (
    CellOutOfBoundsError,
    GridParseError,
    StartNotFoundError,
)


class PatrolGrid:
    """A fixed-size grid of single characters, indexed as `cells[y, x]`.

    x is the column and y the row, both zero-based from the top-left corner.
    """

    def __init__(
        self,
        *,
        cells: npt.NDArray[np.str_],
        symbols: GridSymbolsModel | None = None,
    ):
        if cells.ndim != 2 or cells.shape[0] == 0:
            raise GridParseError("A grid needs at least one row")
        self.cells = cells
        self.rows, self.cols = cells.shape
        self.symbols = symbols if symbols is not None else GridSymbolsModel()

    @classmethod
    def from_text(cls, text: str, symbols: GridSymbolsModel | None = None) -> Self:
        lines = [line.strip() for line in text.splitlines()]
        lines = [line for line in lines if line]
        if len(lines) == 0:
            raise GridParseError("Input contains no grid rows")

        cols = len(lines[0])
        for row, line in enumerate(lines):
            if len(line) != cols:
                raise GridParseError(
                    f"Row {row} has {len(line)} cells, expected {cols}"
                )

        cells = np.array([list(line) for line in lines], dtype="<U1")
        return cls(cells=cells, symbols=symbols)

    @classmethod
    def load_from_file(
        cls, file_path: str, symbols: GridSymbolsModel | None = None
    ) -> Self:
        try:
            with open(file_path, "r") as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise InputReadError(file_path, str(e)) from e
        try:
            return cls.from_text(text, symbols=symbols)
        except GridParseError as e:
            raise GridParseError(f"Error parsing {file_path}: {e}") from e

    def copy(self) -> Self:
        return type(self)(cells=self.cells.copy(), symbols=copy.copy(self.symbols))

    def is_in_bounds(self, position: GuardPose | GridCell) -> bool:
        x, y = position[0], position[1]
        return 0 <= x < self.cols and 0 <= y < self.rows

    def _check_bounds(self, x: int, y: int):
        if not self.is_in_bounds((x, y)):
            raise CellOutOfBoundsError(x, y, self.rows, self.cols)

    def get_cell_value(self, x: int, y: int) -> str:
        self._check_bounds(x, y)
        return str(self.cells[y, x])

    def set_cell_value(self, x: int, y: int, symbol: str):
        self._check_bounds(x, y)
        self.cells[y, x] = symbol

    def is_obstacle(self, x: int, y: int, extra_obstacle: GridCell | None = None) -> bool:
        """Obstacle test that treats `extra_obstacle` as blocked without writing it to the grid."""
        if extra_obstacle is not None and extra_obstacle == (x, y):
            return True
        return bool(self.cells[y, x] == self.symbols.obstacle)

    def count_unknown_cells(self) -> int:
        """Cells holding none of the free, obstacle or start symbols. The guard walks through them."""
        known = [self.symbols.free, self.symbols.obstacle, self.symbols.start]
        return int(np.count_nonzero(~np.isin(self.cells, known)))

    def is_candidate_cell(self, x: int, y: int) -> bool:
        value = self.cells[y, x]
        return bool(value != self.symbols.obstacle and value != self.symbols.start)

    def iter_candidate_cells(self, y: int) -> t.Iterator[GridCell]:
        """Cells of row `y` where an extra obstacle may be placed."""
        for x in range(self.cols):
            if self.is_candidate_cell(x, y):
                yield (x, y)

    @contextmanager
    def temporary_obstacle(self, cell: GridCell):
        x, y = cell
        previous = self.get_cell_value(x, y)
        self.set_cell_value(x, y, self.symbols.obstacle)
        try:
            yield self
        finally:
            self.set_cell_value(x, y, previous)

    def find_start(
        self, strict: bool = False, logger: utils.PatrolLogger | None = None
    ) -> GuardPose:
        """Returns the first start cell in row-major order, facing up.

        When no start symbol exists, raises `StartNotFoundError` if `strict`,
        otherwise logs the problem and returns the pose (0, 0, UP).
        """
        ys, xs = np.where(self.cells == self.symbols.start)
        if len(xs) == 0:
            if strict:
                raise StartNotFoundError("Starting position not found")
            if logger is None:
                logger = utils.PatrolLogger()
            logger.append(utils.PatrolLog("Starting position not found", 0))
            return GuardPose(0, 0, Direction.UP)

        if len(xs) > 1 and logger is not None:
            logger.append(
                utils.PatrolLog(
                    f"Found {len(xs)} starting positions, using ({xs[0]}, {ys[0]})", 0
                )
            )
        return GuardPose(int(xs[0]), int(ys[0]), Direction.UP)

    def to_text(self, marked: t.Iterable[GridCell] = ()) -> str:
        cells = self.cells.copy()
        for x, y in marked:
            if cells[y, x] != self.symbols.start:
                cells[y, x] = self.symbols.visited
        return "\n".join("".join(row) for row in cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PatrolGrid):
            return NotImplemented
        return bool(np.array_equal(self.cells, other.cells))

    def __str__(self):
        return self.to_text()
