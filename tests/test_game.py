import random
from dataclasses import replace

from snakegame.game import (
    DIRECTIONS,
    GRID_SIZE,
    EventKind,
    initial_state,
    place_food,
    step,
)


def running_state(**changes):
    return replace(initial_state(), running=True, **changes)


def test_initial_state_matches_mount_values():
    state = initial_state(high_score=40)
    assert state.snake == ((10, 10),)
    assert state.food == (5, 5)
    assert state.direction == DIRECTIONS["UP"]
    assert not state.running and not state.over
    assert state.score == 0
    assert state.high_score == 40


def test_step_moves_head_by_direction():
    state = running_state(snake=((3, 3), (2, 3), (1, 3)), direction=DIRECTIONS["RIGHT"])
    result = step(state, random.Random(0))
    assert result.state.snake == ((4, 3), (3, 3), (2, 3))
    assert result.events == []
    assert not result.collision


def test_step_does_not_mutate_input_state():
    state = running_state()
    step(state, random.Random(0))
    assert state == running_state()


def test_step_is_noop_when_not_running_or_over():
    paused = initial_state()
    assert step(paused).state is paused

    over = replace(initial_state(), over=True)
    result = step(over)
    assert result.state is over
    assert result.events == []


def test_walks_up_to_wall_then_collides():
    state = running_state()
    rng = random.Random(1)
    for _ in range(10):
        state = step(state, rng).state
    assert state.head == (10, 0)
    assert not state.over

    result = step(state, rng)
    assert result.collision is EventKind.WALL_COLLISION
    assert result.state.over
    assert not result.state.running
    assert result.state.score == 0
    assert result.state.snake == ((10, 0),)


def test_no_wrap_around_on_any_edge():
    for head, direction in [
        ((0, 7), DIRECTIONS["LEFT"]),
        ((GRID_SIZE - 1, 7), DIRECTIONS["RIGHT"]),
        ((7, GRID_SIZE - 1), DIRECTIONS["DOWN"]),
        ((7, 0), DIRECTIONS["UP"]),
    ]:
        result = step(running_state(snake=(head,), direction=direction))
        assert result.collision is EventKind.WALL_COLLISION


def test_eating_food_grows_and_scores():
    state = running_state(snake=((1, 1),), food=(2, 1), direction=DIRECTIONS["RIGHT"])
    result = step(state, random.Random(7))
    assert result.ate_food
    assert result.state.score == 10
    assert result.state.snake == ((2, 1), (1, 1))
    assert result.state.food not in result.state.snake
    assert 0 <= result.state.food[0] < GRID_SIZE
    assert 0 <= result.state.food[1] < GRID_SIZE


def test_score_rises_by_ten_per_food():
    state = running_state(snake=((1, 1),), food=(2, 1), direction=DIRECTIONS["RIGHT"])
    state = step(state, random.Random(3)).state
    assert state.score == 10

    state = replace(state, food=(3, 1))
    state = step(state, random.Random(3)).state
    assert state.score == 20
    assert len(state.snake) == 3


def test_new_high_score_event_only_when_beaten():
    state = running_state(snake=((1, 1),), food=(2, 1), direction=DIRECTIONS["RIGHT"])
    result = step(state, random.Random(0))
    assert [event.kind for event in result.events] == [
        EventKind.NEW_HIGH_SCORE,
        EventKind.FOOD_EATEN,
    ]
    assert result.state.high_score == 10

    state = replace(state, high_score=30)
    result = step(state, random.Random(0))
    assert not result.new_high_score
    assert result.state.high_score == 30


def test_self_collision_leaves_board_untouched():
    snake = ((5, 5), (5, 4), (4, 4), (4, 5), (4, 6))
    state = running_state(snake=snake, direction=DIRECTIONS["LEFT"], food=(0, 0), score=30, high_score=30)
    result = step(state, random.Random(0))
    assert result.collision is EventKind.SELF_COLLISION
    assert result.state.over
    assert not result.state.running
    assert result.state.snake == snake
    assert result.state.food == (0, 0)
    assert result.state.score == 30


def test_snake_never_holds_duplicates_while_alive():
    rng = random.Random(11)
    state = running_state(snake=((5, 10), (4, 10), (3, 10)), direction=DIRECTIONS["RIGHT"], food=(8, 10))
    turns = [DIRECTIONS["RIGHT"], DIRECTIONS["DOWN"], DIRECTIONS["LEFT"], DIRECTIONS["UP"]]
    for i in range(40):
        state = replace(state, direction=turns[(i // 3) % 4])
        result = step(state, rng)
        if result.done:
            break
        state = result.state
        assert len(set(state.snake)) == len(state.snake)


def test_place_food_avoids_snake():
    snake = [(x, y) for x in range(GRID_SIZE) for y in range(GRID_SIZE) if (x + y) % 3]
    rng = random.Random(5)
    for _ in range(50):
        assert place_food(snake, rng) not in snake


def test_place_food_finds_last_free_cell():
    free = (13, 17)
    snake = [(x, y) for x in range(GRID_SIZE) for y in range(GRID_SIZE) if (x, y) != free]
    assert place_food(snake, random.Random(0)) == free


def test_place_food_returns_none_on_full_board():
    snake = [(x, y) for x in range(GRID_SIZE) for y in range(GRID_SIZE)]
    assert place_food(snake, random.Random(0)) is None


def test_filling_the_board_ends_the_game():
    # A serpentine covering every cell except the head's target, which holds the food.
    cells = []
    for y in range(GRID_SIZE):
        row = [(x, y) for x in range(GRID_SIZE)]
        cells.extend(row if y % 2 == 0 else reversed(row))
    food = cells[-1]
    snake = tuple(reversed(cells[:-1]))
    state = running_state(snake=snake, food=food, direction=DIRECTIONS["LEFT"])
    result = step(state, random.Random(0))
    assert result.has(EventKind.BOARD_FULL)
    assert result.state.over
    assert len(result.state.snake) == GRID_SIZE * GRID_SIZE
