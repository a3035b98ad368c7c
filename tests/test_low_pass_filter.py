import numpy as np
import pytest

from iiwactl.low_pass_filter import LowPassFilter


def test_alpha_above_one_rejected():
    with pytest.raises(ValueError):
        LowPassFilter(1.5)


def test_alpha_below_zero_rejected():
    with pytest.raises(ValueError):
        LowPassFilter(-0.1)


def test_negative_cutoff_rejected():
    with pytest.raises(ValueError):
        LowPassFilter.from_cutoff(-1.0, 0.001)


def test_from_cutoff_alpha_in_range_and_monotonic():
    low = LowPassFilter.from_cutoff(10.0, 0.005)
    high = LowPassFilter.from_cutoff(40.0, 0.005)
    assert 0.0 < high.alpha < low.alpha < 1.0


def test_zero_alpha_passes_input_through():
    f = LowPassFilter(0.0)
    f.set_initial(3.0)
    assert f.filter(7.5) == pytest.approx(7.5)
    assert f.filtered() == pytest.approx(7.5)


def test_unit_alpha_holds_initial_value():
    f = LowPassFilter(1.0)
    f.set_initial(2.0)
    for value in (10.0, -4.0, 100.0):
        assert f.filter(value) == pytest.approx(2.0)


def test_output_lies_between_previous_and_input():
    f = LowPassFilter(0.3)
    f.set_initial(0.0)
    out = f.filter(10.0)
    assert 0.0 < out < 10.0


def test_constant_input_converges():
    f = LowPassFilter.from_cutoff(40.0, 0.005)
    f.set_initial(0.0)
    for _ in range(500):
        out = f.filter(5.0)
    assert out == pytest.approx(5.0, abs=1e-9)


def test_vector_values_filtered_elementwise():
    f = LowPassFilter(0.5)
    init = np.array([1.0, 2.0, 3.0])
    f.set_initial(init)
    target = np.array([3.0, 2.0, 1.0])
    out = f.filter(target)
    assert out.shape == (3,)
    assert np.allclose(out, (init + target) / 2)
    assert np.allclose(f.filtered(), out)


def test_set_initial_resets_state():
    f = LowPassFilter(0.9)
    f.set_initial(0.0)
    f.filter(100.0)
    f.set_initial(4.0)
    assert f.filtered() == pytest.approx(4.0)