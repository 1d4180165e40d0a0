class PatrolsimError(Exception):
    pass


class InputReadError(PatrolsimError):
    def __init__(self, path: str, reason: str):
        super().__init__(f"Error reading file {path}: {reason}")
        self.path = path
        self.reason = reason


class PatrolLoopError(PatrolsimError):
    """Raised when a walk that is expected to leave the grid revisits a pose instead."""

    def __init__(self, x: int, y: int, steps: int):
        super().__init__(
            f"Guard is trapped in a loop at ({x}, {y}) after {steps} transitions"
        )
        self.x = x
        self.y = y
        self.steps = steps


class ConfigError(PatrolsimError):
    pass
