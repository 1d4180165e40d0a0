from patrolsim.exceptions import PatrolsimError


class GridParseError(PatrolsimError):
    pass


class StartNotFoundError(PatrolsimError):
    pass


class CellOutOfBoundsError(PatrolsimError, IndexError):
    def __init__(self, x: int, y: int, rows: int, cols: int, *args: object):
        super().__init__(
            f"Cell ({x}, {y}) is outside of the {rows}x{cols} grid", *args
        )
        self.x = x
        self.y = y
