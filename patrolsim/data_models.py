import os
import typing as t
from enum import Enum

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from patrolsim.exceptions import ConfigError, InputReadError


class Direction(Enum):
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    def turn_right(self) -> "Direction":
        return Direction((self.value + 1) % 4)

    @property
    def offset(self) -> t.Tuple[int, int]:
        return DIRECTION_OFFSETS[self]


# (dx, dy) with y growing downwards
DIRECTION_OFFSETS: t.Dict[Direction, t.Tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}

GridCell = t.Tuple[int, int]
GridCellSet = t.Set[GridCell]


class GuardPose(t.NamedTuple):
    x: int
    y: int
    direction: Direction

    @property
    def cell(self) -> GridCell:
        return (self.x, self.y)

    def advance(self) -> "GuardPose":
        dx, dy = self.direction.offset
        return GuardPose(self.x + dx, self.y + dy, self.direction)

    def turn_right(self) -> "GuardPose":
        return GuardPose(self.x, self.y, self.direction.turn_right())


# YAML MODELS


class GridSymbolsModel(BaseModel):
    free: str = Field(default=".", min_length=1, max_length=1)
    obstacle: str = Field(default="#", min_length=1, max_length=1)
    start: str = Field(default="^", min_length=1, max_length=1)
    visited: str = Field(default="X", min_length=1, max_length=1)
    """Only used when rendering a patrol path."""

    @model_validator(mode="after")
    def check_distinct(self) -> "GridSymbolsModel":
        symbols = [self.free, self.obstacle, self.start, self.visited]
        if len(set(symbols)) != len(symbols):
            raise ValueError(
                f"Grid symbols must be distinct, got free={self.free!r} "
                f"obstacle={self.obstacle!r} start={self.start!r} visited={self.visited!r}"
            )
        return self


class PatrolConfigYamlModel(BaseModel):
    input_file: str = "input.txt"
    mode: t.Literal["unique", "loops", "both"] = "loops"
    workers: int = Field(default=1, ge=1)
    require_start: bool = True
    progress: bool = True
    symbols: GridSymbolsModel = GridSymbolsModel()


def patrol_config_from_yaml(file_path: str) -> PatrolConfigYamlModel:
    try:
        with open(file_path, "r") as stream:
            config = yaml.safe_load(stream) or {}
    except OSError as e:
        raise InputReadError(file_path, str(e)) from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {file_path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"Invalid config in {file_path}: expected a mapping")
    try:
        model = PatrolConfigYamlModel(**config)
    except ValidationError as e:
        raise ConfigError(f"Invalid config in {file_path}: {e}") from e

    if not os.path.isabs(model.input_file):
        model.input_file = os.path.join(
            os.path.dirname(os.path.abspath(file_path)), model.input_file
        )
    return model
