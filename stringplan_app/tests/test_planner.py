# stringplan_app/tests/test_planner.py

import numpy as np
import pytest

from stringplan_app.errors import ErrorKind, InvalidArgument, PreconditionError
from stringplan_app.path_algorithms import ALGORITHMS
from stringplan_app.path_algorithms.greedy import ERASE_INCREMENT
from stringplan_app.pin_layouts import Pin, Shape, generate_pins
from stringplan_app.planner import generate_string_art
from stringplan_app.session import StringArtSession


def session_with(grid: np.ndarray) -> StringArtSession:
    session = StringArtSession()
    session.grid = grid
    return session


def noisy_grid(size: int = 40, seed: int = 3) -> np.ndarray:
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(size, size), dtype=np.uint8)


def test_greedy_is_registered():
    assert "greedy" in ALGORITHMS


def test_two_by_two_black_grid_with_corner_pins():
    """
    From pin 0 every corner scores 2 dark pixels, so the tie goes to pin 1.
    Erasing (0,0),(1,0) makes pin 0 worth less than pin 3 on the next pick.
    """
    session = session_with(np.zeros((2, 2), dtype=np.uint8))
    pins = generate_pins(Shape.SQUARE, 4, 2, 2)

    path = generate_string_art(session, pins, 2)

    assert path == [1, 3]
    assert session.grid.tolist() == [[150, 150], [0, 150]]


def test_zero_lines_returns_empty_and_leaves_grid_alone():
    grid = noisy_grid()
    before = grid.copy()
    session = session_with(grid)

    assert generate_string_art(session, generate_pins("circle", 12, 40, 40), 0) == []
    np.testing.assert_array_equal(session.grid, before)


def test_never_selects_the_current_pin():
    session = session_with(noisy_grid())
    pins = generate_pins(Shape.CIRCLE, 16, 40, 40)

    path = generate_string_art(session, pins, 60)

    assert len(path) == 60
    previous = 0
    for idx in path:
        assert idx != previous
        assert 0 <= idx < len(pins)
        previous = idx


def test_erasure_saturates_at_255():
    session = session_with(np.full((30, 30), 200, dtype=np.uint8))
    pins = generate_pins(Shape.CIRCLE, 8, 30, 30)

    generate_string_art(session, pins, 40)

    grid = session.grid
    assert grid.dtype == np.uint8
    assert grid.min() >= 200  # a wrap-around would drop below the start value
    assert grid.max() == 255


def test_erasure_adds_fixed_increment():
    session = session_with(np.zeros((1, 5), dtype=np.uint8))
    pins = [Pin(0, 0), Pin(4, 0)]

    assert generate_string_art(session, pins, 1) == [1]
    assert session.grid.tolist() == [[ERASE_INCREMENT] * 5]


def test_white_grid_ties_resolve_to_lowest_index():
    session = session_with(np.full((10, 10), 255, dtype=np.uint8))
    pins = generate_pins(Shape.SQUARE, 4, 10, 10)

    assert generate_string_art(session, pins, 4) == [1, 0, 1, 0]


def test_same_grid_state_gives_same_path():
    pins = generate_pins(Shape.CIRCLE, 24, 40, 40)
    first = generate_string_art(session_with(noisy_grid()), pins, 30)
    second = generate_string_art(session_with(noisy_grid()), pins, 30)
    assert first == second


def test_repeated_planning_sees_previous_erasure():
    session = session_with(np.zeros((2, 2), dtype=np.uint8))
    pins = generate_pins(Shape.SQUARE, 4, 2, 2)

    first = generate_string_art(session, pins, 2)
    second = generate_string_art(session, pins, 2)

    assert first != second
    assert second[0] == 3


def test_vector_callback_receives_each_thread():
    session = session_with(noisy_grid())
    pins = generate_pins(Shape.CIRCLE, 10, 40, 40)
    seen = []

    path = generate_string_art(session, pins, 5, vector_callback=lambda a, b: seen.append((a, b)))

    assert [b for _, b in seen] == path
    assert [a for a, _ in seen] == [0] + path[:-1]


def test_planning_without_grid_is_a_precondition_error():
    with pytest.raises(PreconditionError) as excinfo:
        generate_string_art(StringArtSession(), [Pin(0, 0), Pin(1, 1)], 3)
    assert excinfo.value.kind is ErrorKind.PRECONDITION_ERROR


def test_empty_pins_is_a_precondition_error():
    with pytest.raises(PreconditionError):
        generate_string_art(session_with(noisy_grid()), [], 3)


def test_single_pin_cannot_place_a_thread():
    grid = noisy_grid()
    before = grid.copy()
    with pytest.raises(PreconditionError):
        generate_string_art(session_with(grid), [Pin(0, 0)], 1)
    np.testing.assert_array_equal(grid, before)


def test_negative_line_count_is_rejected():
    with pytest.raises(InvalidArgument):
        generate_string_art(session_with(noisy_grid()), [Pin(0, 0), Pin(1, 1)], -1)


def test_unknown_algorithm_is_rejected():
    with pytest.raises(ValueError) as excinfo:
        generate_string_art(session_with(noisy_grid()), [Pin(0, 0), Pin(1, 1)], 1, algorithm="nope")
    assert "Valid options: greedy" in str(excinfo.value)


@pytest.mark.parametrize("bad", [Pin(float("nan"), 1.0), Pin(1.0, float("inf")), Pin(float("-inf"), 0.0)])
def test_non_finite_pin_is_rejected_before_any_erasure(bad):
    grid = noisy_grid()
    before = grid.copy()
    with pytest.raises(InvalidArgument) as excinfo:
        generate_string_art(session_with(grid), [Pin(0, 0), bad], 1)
    assert excinfo.value.kind is ErrorKind.INVALID_ARGUMENT
    np.testing.assert_array_equal(grid, before)


@pytest.mark.parametrize("bad", [Pin(1e9, 0.0), Pin(-1.0, 5.0), Pin(5.0, 41.0)])
def test_pin_outside_the_canvas_is_rejected(bad):
    grid = noisy_grid(size=40)
    before = grid.copy()
    with pytest.raises(InvalidArgument) as excinfo:
        generate_string_art(session_with(grid), [Pin(0, 0), bad], 1)
    assert excinfo.value.context["pin"] == 1
    np.testing.assert_array_equal(grid, before)


def test_pins_on_the_far_canvas_edge_are_accepted():
    session = session_with(np.zeros((10, 10), dtype=np.uint8))
    pins = [Pin(0, 0), Pin(10, 10), Pin(10, 0)]
    assert len(generate_string_art(session, pins, 3)) == 3


def test_non_contiguous_grid_is_still_erased_in_the_session():
    session = session_with(np.zeros((1, 10), dtype=np.uint8)[:, ::2])
    assert not session.grid.flags.c_contiguous

    generate_string_art(session, [Pin(0, 0), Pin(4, 0)], 1)

    assert session.grid.tolist() == [[ERASE_INCREMENT] * 5]
