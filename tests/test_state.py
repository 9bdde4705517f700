import numpy as np
import pytest

from seirtv import COMPARTMENTS, State


def test_layout(rng):
    n = 3
    y = rng.random(12 * n)
    state = State(y, n)
    for k, name in enumerate(COMPARTMENTS):
        np.testing.assert_array_equal(getattr(state, name), y[k * n:(k + 1) * n])


def test_views_share_the_buffer():
    state = State.zeros(2)
    state.s = [0.25, 0.75]
    state.d_cum = 1.0
    np.testing.assert_array_equal(state.y[:2], [0.25, 0.75])
    np.testing.assert_array_equal(state.y[-2:], [1.0, 1.0])

    state.i[1] = 5.0
    assert state.y[2 * 2 + 1] == 5.0


def test_wrap_infers_groups():
    state = State.wrap(np.zeros(24))
    assert state.n == 2
    with pytest.raises(ValueError):
        State.wrap(np.zeros(25))


def test_wrong_length():
    with pytest.raises(ValueError):
        State(np.zeros(10), 1)


def test_population_excludes_counters():
    state = State.zeros(1)
    for name in COMPARTMENTS:
        setattr(state, name, 1.0)
    np.testing.assert_array_equal(state.population(), [8.0])
    assert set(state.as_dict()) == set(COMPARTMENTS)
