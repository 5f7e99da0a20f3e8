import random

import pytest

from reactlens.snake import (
    Action,
    AppModel,
    Direction,
    GameModel,
    SnakeModel,
    make_initial,
    random_apple_pos,
    update,
)


def in_bounds(p):
    return 0 <= p[0] < GameModel.WIDTH and 0 <= p[1] < GameModel.HEIGHT


def model_with(body, direction, apple=(0, 0)):
    game = GameModel(SnakeModel(tuple(body), direction), apple, False)
    return AppModel(random.Random(7), game)


INITIAL_BODY = ((12, 12), (11, 12), (10, 12))


def test_random_apple_pos_draws_x_then_y():
    draws = iter([3, 7])
    assert random_apple_pos(lambda: next(draws)) == (3, 7)


def test_initial_model_shape():
    m = make_initial(42)
    body = m.game.snake.body
    assert len(body) == 3
    assert m.game.snake.dir is Direction.RIGHT
    assert not m.game.over
    head = body[0]
    assert body[1] == (head[0] - 1, head[1])
    assert body[2] == (head[0] - 2, head[1])
    assert head == (GameModel.WIDTH // 2, GameModel.HEIGHT // 2)
    assert in_bounds(m.game.apple_pos)


def test_initial_model_is_deterministic_for_seed():
    first = make_initial(5)
    second = make_initial(5)
    assert first.game.snake.body == INITIAL_BODY
    assert second.game.snake.body == INITIAL_BODY
    assert first.game.apple_pos == second.game.apple_pos


def test_turning_vertical_from_horizontal():
    m = make_initial(1)
    assert update(m, Action.GO_UP).game.snake.dir is Direction.UP
    assert update(m, Action.GO_DOWN).game.snake.dir is Direction.DOWN


def test_cannot_turn_along_the_same_axis():
    m = make_initial(1)
    assert update(m, Action.GO_LEFT).game.snake.dir is Direction.RIGHT
    up = update(m, Action.GO_UP)
    assert update(up, Action.GO_DOWN).game.snake.dir is Direction.UP
    assert update(up, Action.GO_LEFT).game.snake.dir is Direction.LEFT


def test_tick_moves_head_and_drops_tail():
    m = make_initial(3)
    body = m.game.snake.body
    moved = update(m, Action.TICK).game.snake.body
    assert moved[0] == (body[0][0] + 1, body[0][1])
    assert moved[1:] == body[:-1]
    assert m.game.snake.body == body


def test_update_is_pure():
    body = [(5, 5), (4, 5), (3, 5)]
    m = model_with(body, Direction.RIGHT, apple=(20, 20))
    after = update(m, Action.TICK)
    assert after.game.snake.body == ((6, 5), (5, 5), (4, 5))
    assert m.game.snake.body == tuple(body)
    assert m.game.apple_pos == (20, 20)


def test_running_into_wall_ends_game():
    m = make_initial(9)
    for _ in range(GameModel.WIDTH):
        if m.game.over:
            break
        m = update(m, Action.TICK)
    assert m.game.over
    assert in_bounds(m.game.snake.body[0])
    assert len(m.game.snake.body) == 3


def test_self_collision_ends_game():
    body = [(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)]
    m = model_with(body, Direction.DOWN, apple=(20, 20))
    after = update(m, Action.TICK)
    assert after.game.over
    assert after.game.snake.body == tuple(body)


def test_eating_apple_grows_snake_and_moves_apple():
    body = [(5, 5), (4, 5), (3, 5)]
    m = model_with(body, Direction.RIGHT, apple=(3, 5))
    after = update(m, Action.TICK)
    grown = after.game.snake.body
    assert len(grown) == 4
    assert grown[-1] == (3, 5)
    assert grown[0] == (6, 5)
    assert in_bounds(after.game.apple_pos)
    assert not after.game.over


def test_reset_starts_new_game():
    body = [(5, 5), (6, 5), (6, 6), (5, 6), (4, 6)]
    m = update(model_with(body, Direction.DOWN), Action.TICK)
    assert m.game.over
    fresh = update(m, Action.RESET)
    assert not fresh.game.over
    assert fresh.game.snake.body == INITIAL_BODY
    assert fresh.game.snake.dir is Direction.RIGHT


def test_unknown_action_raises():
    with pytest.raises(TypeError):
        update(make_initial(0), "tick")