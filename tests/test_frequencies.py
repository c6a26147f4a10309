"""Test frequency sweep model."""

import numpy as np
import pytest

from mwnetworks.frequency import Frequencies


def test_frequencies_init(frequency_list):
    """Test init and get of simple frequencies."""
    fspan = Frequencies(f_list=frequency_list)
    assert np.array_equal(np.array(frequency_list) * 1e9, fspan.f)


def test_frequencies_init_arange(frequency_arange):
    """Test init and get of simple frequencies from arange."""
    fspan = Frequencies(f_arange=frequency_arange)
    fspan.f_list = [1, 2]
    assert np.array_equal(np.arange(*frequency_arange) * 1e9, fspan.f)


@pytest.mark.parametrize(
    "unit, multiplier", [("Hz", 1), ("kHz", 1e3), ("MHz", 1e6), ("GHz", 1e9), ("THz", 1e12)]
)
def test_frequencies_unit(frequency_list, unit, multiplier):
    """Test conversion of the sweep to Hz."""
    fspan = Frequencies(f_list=frequency_list, unit=unit)
    assert fspan.unit_multiplier == multiplier
    assert np.allclose(fspan.f, np.array(frequency_list) * multiplier)


def test_frequencies_empty():
    """Test sweep without frequencies."""
    assert Frequencies().f.size == 0


def test_frequencies_negative():
    """Test negative frequencies are rejected."""
    with pytest.raises(ValueError):
        Frequencies(f_list=[-1, 2])


def test_frequencies_dump(frequency_list):
    """Test unset sweep definitions are excluded from serialization."""
    dumped = Frequencies(f_list=frequency_list).model_dump()
    assert "f_arange" not in dumped
    assert dumped["f_list"] == frequency_list


@pytest.mark.parametrize(
    "sweep",
    [
        {"f_list": [1, float("nan")]},
        {"f_list": [float("inf")]},
        {"f_arange": (0, 1, 0)},
        {"f_arange": (0, float("inf"), 0.1)},
    ],
)
def test_frequencies_not_finite(sweep):
    """Test sweeps with non-finite values or a null step are rejected."""
    with pytest.raises(ValueError):
        Frequencies(**sweep)
