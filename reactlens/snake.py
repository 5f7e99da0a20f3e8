"""A snake game expressed as a pure model and update function."""

from __future__ import annotations

import dataclasses
import random as _random
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar

__all__ = [
    "Action",
    "Direction",
    "SnakeModel",
    "GameModel",
    "AppModel",
    "random_apple_pos",
    "make_initial",
    "update",
]

Point = tuple[int, int]


class Action(Enum):
    """Everything that can happen to the game."""

    GO_LEFT = "go_left"
    GO_RIGHT = "go_right"
    GO_UP = "go_up"
    GO_DOWN = "go_down"
    RESET = "reset"
    TICK = "tick"


class Direction(Enum):
    """Where the snake is heading."""

    LEFT = "left"
    UP = "up"
    RIGHT = "right"
    DOWN = "down"


@dataclass(frozen=True)
class SnakeModel:
    """The snake's body, head first, and its heading."""

    body: tuple[Point, ...] = ()
    dir: Direction = Direction.LEFT


@dataclass(frozen=True)
class GameModel:
    """One game: the snake, the apple and whether the game is over."""

    snake: SnakeModel
    apple_pos: Point = (0, 0)
    over: bool = False

    WIDTH: ClassVar[int] = 25
    HEIGHT: ClassVar[int] = 25


@dataclass(frozen=True)
class AppModel:
    """The game together with the random generator used for apples."""

    rng: _random.Random = field(compare=False)
    game: GameModel


def random_apple_pos(random: Callable[[], int]) -> Point:
    """An apple position built from two draws of ``random``."""
    x = random()
    y = random()
    return (x, y)


def _turn_horizontal(initial: Direction, target: Direction) -> Direction:
    if initial in (Direction.UP, Direction.DOWN):
        return target
    return initial


def _turn_vertical(initial: Direction, target: Direction) -> Direction:
    if initial in (Direction.LEFT, Direction.RIGHT):
        return target
    return initial


_TURNS = {
    Action.GO_LEFT: lambda d: _turn_horizontal(d, Direction.LEFT),
    Action.GO_RIGHT: lambda d: _turn_horizontal(d, Direction.RIGHT),
    Action.GO_UP: lambda d: _turn_vertical(d, Direction.UP),
    Action.GO_DOWN: lambda d: _turn_vertical(d, Direction.DOWN),
}

_STEPS = {
    Direction.LEFT: (-1, 0),
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
}


def _step(pos: Point, direction: Direction) -> Point:
    dx, dy = _STEPS[direction]
    return (pos[0] + dx, pos[1] + dy)


def _move_forward(body: tuple[Point, ...], direction: Direction) -> tuple[Point, ...]:
    return (_step(body[0], direction), *body[:-1])


def _in_bounds(p: Point) -> bool:
    x, y = p
    return 0 <= x < GameModel.WIDTH and 0 <= y < GameModel.HEIGHT


def _make_game(random: Callable[[], int]) -> GameModel:
    hx, hy = GameModel.WIDTH // 2, GameModel.HEIGHT // 2
    body = ((hx, hy), (hx - 1, hy), (hx - 2, hy))
    return GameModel(SnakeModel(body, Direction.RIGHT), random_apple_pos(random), False)


def _drawer(rng: _random.Random) -> Callable[[], int]:
    return lambda: rng.randint(0, GameModel.WIDTH - 1)


def _copy_rng(rng: _random.Random) -> _random.Random:
    clone = _random.Random()
    clone.setstate(rng.getstate())
    return clone


def make_initial(seed: int) -> AppModel:
    """A fresh application model whose apples come from ``seed``."""
    rng = _random.Random(seed)
    return AppModel(rng, _make_game(_drawer(rng)))


def _tick(model: AppModel) -> AppModel:
    game = model.game
    prev_back = game.snake.body[-1]
    body = _move_forward(game.snake.body, game.snake.dir)
    head = body[0]
    if head in body[1:] or not _in_bounds(head):
        return dataclasses.replace(model, game=dataclasses.replace(game, over=True))
    rng = model.rng
    apple = game.apple_pos
    if prev_back == apple:
        body = (*body, prev_back)
        rng = _copy_rng(rng)
        apple = random_apple_pos(_drawer(rng))
    snake = dataclasses.replace(game.snake, body=body)
    return AppModel(rng, dataclasses.replace(game, snake=snake, apple_pos=apple))


def update(model: AppModel, action: Action) -> AppModel:
    """The model that follows ``model`` after ``action``."""
    if not isinstance(action, Action):
        raise TypeError(f"unknown action: {action!r}")
    if action in _TURNS:
        snake = model.game.snake
        turned = dataclasses.replace(snake, dir=_TURNS[action](snake.dir))
        return dataclasses.replace(
            model, game=dataclasses.replace(model.game, snake=turned)
        )
    if action is Action.TICK:
        return _tick(model)
    rng = _copy_rng(model.rng)
    return AppModel(rng, _make_game(_drawer(rng)))