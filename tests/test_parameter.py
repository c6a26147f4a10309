"""Tests for parameter module."""

import math

import numpy as np
import pytest
from pydantic import ValidationError

from mwnetworks.exceptions import InvalidArgument
from mwnetworks.parameter import NetworkParameter, compare_magnitude_phase


def test_one():
    """Test unity parameter views."""
    assert NetworkParameter.One.magnitude_dB == 0
    assert NetworkParameter.One.phase_deg == 0
    assert NetworkParameter.One == NetworkParameter.from_polar_degree(1, 0)


def test_zero():
    """Test zero parameter views."""
    assert NetworkParameter.Zero.magnitude == 0
    assert NetworkParameter.Zero.magnitude_dB == -np.inf


def test_polar_degree_conversion():
    """Test creation from linear magnitude and degrees."""
    s = NetworkParameter.from_polar_degree(100, 180)
    assert s.magnitude_dB == pytest.approx(40)
    assert s.phase_deg == pytest.approx(180)

    s = NetworkParameter.from_polar_degree(100 * math.sqrt(2), 45)
    assert s.real == pytest.approx(100, abs=1e-3)
    assert s.imaginary == pytest.approx(100, abs=1e-3)


def test_polar_decibel_conversion():
    """Test creation from magnitude in dB and degrees."""
    s = NetworkParameter.from_polar_decibel_degree(40, 180)
    assert s.magnitude == pytest.approx(100)
    assert s.phase_deg == pytest.approx(180)


def test_rectangular_phase():
    """Test phase of parameters created from rectangular components."""
    assert NetworkParameter(10, 10).phase_deg == pytest.approx(45)
    assert NetworkParameter(10, -10).phase_deg == pytest.approx(-45)
    assert NetworkParameter(10, 10).phase_rad == pytest.approx(np.pi / 4)
    assert NetworkParameter(3, 4).magnitude == pytest.approx(5)


@pytest.mark.parametrize(
    "magnitude, phase_deg", [(0.5, 0), (1, 90), (2.5, -135), (1e-6, 179)]
)
def test_polar_roundtrip(magnitude, phase_deg):
    """Test magnitude and phase views of parameters created from polar coordinates."""
    s = NetworkParameter.from_polar_degree(magnitude, phase_deg)
    assert s.magnitude == pytest.approx(magnitude)
    assert s.phase_deg == pytest.approx(phase_deg)
    assert s.phase_deg == pytest.approx(s.phase_rad * 180 / np.pi)


@pytest.mark.parametrize("magnitude_dB", [-60, -3, 0, 12.5])
def test_decibel_roundtrip(magnitude_dB):
    """Test dB view of parameters created from dB."""
    s = NetworkParameter.from_polar_decibel_degree(magnitude_dB, 30)
    assert s.magnitude_dB == pytest.approx(magnitude_dB)
    assert s.magnitude == pytest.approx(10 ** (magnitude_dB / 20))


def test_negative_infinity_dB():
    """Test -inf dB maps to a zero parameter."""
    s = NetworkParameter.from_polar_decibel_degree(-np.inf, 45)
    assert s.magnitude == 0
    assert s.magnitude_dB == -np.inf


def test_invalid_magnitude():
    """Test negative and NaN magnitudes are rejected."""
    with pytest.raises(InvalidArgument, match="non-negative"):
        NetworkParameter.from_polar_degree(-1, 0)
    with pytest.raises(InvalidArgument):
        NetworkParameter.from_polar(float("nan"), 0)
    with pytest.raises(ValueError):
        NetworkParameter.from_polar_degree(-1e-9, 0)


def test_equality():
    """Test equality by value."""
    assert NetworkParameter.from_polar_decibel_degree(
        40, 100
    ) == NetworkParameter.from_polar_degree(100, 100)
    assert NetworkParameter(1, 2) == NetworkParameter(1.0, 2.0)
    assert NetworkParameter(1, 2) != NetworkParameter(1, -2)
    assert NetworkParameter(1, 2) == 1 + 2j
    assert NetworkParameter(3, 0) == 3
    assert NetworkParameter(1, 2) != "1+2j"


def test_hash():
    """Test parameters are hashable consistently with complex numbers."""
    assert hash(NetworkParameter(1, 2)) == hash(1 + 2j)
    assert len({NetworkParameter(1, 2), NetworkParameter(1, 2), NetworkParameter.One}) == 2


def test_immutable():
    """Test fields cannot be reassigned."""
    s = NetworkParameter(1, 2)
    with pytest.raises(ValidationError):
        s.real = 5
    assert s.real == 1


def test_isclose():
    """Test approximate equality."""
    s = NetworkParameter.from_polar_degree(1, 45)
    assert s.isclose(NetworkParameter(np.sqrt(0.5), np.sqrt(0.5)))
    assert s.isclose(complex(np.sqrt(0.5), np.sqrt(0.5)))
    assert not s.isclose(NetworkParameter(0.7, 0.7))
    assert s.isclose(NetworkParameter(0.7, 0.7), abs_tol=0.02)


def test_arithmetic():
    """Test complex arithmetic returning new parameters."""
    a = NetworkParameter(1, 1)
    b = NetworkParameter(1, -1)
    assert a * b == NetworkParameter(2, 0)
    assert a + b == NetworkParameter(2, 0)
    assert a - b == NetworkParameter(0, 2)
    assert a / b == NetworkParameter(0, 1)
    assert -a == NetworkParameter(-1, -1)
    assert 2 * a == NetworkParameter(2, 2)
    assert 1 - a == NetworkParameter(0, -1)
    assert 2 / NetworkParameter(2, 0) == NetworkParameter.One
    assert isinstance(a + 1j, NetworkParameter)
    assert abs(NetworkParameter(3, 4)) == pytest.approx(5)


def test_conjugate_and_reciprocal():
    """Test conjugate and reciprocal."""
    a = NetworkParameter(0, 2)
    assert a.conjugate() == NetworkParameter(0, -2)
    assert a.reciprocal() == NetworkParameter(0, -0.5)
    assert complex(a) == 2j


def test_from_complex():
    """Test creation from python and numpy complex numbers."""
    assert NetworkParameter.from_complex(1 - 1j) == NetworkParameter(1, -1)
    assert NetworkParameter.from_complex(np.complex128(2 + 3j)) == NetworkParameter(2, 3)
    assert str(NetworkParameter(1, -1)) == str(1 - 1j)


def test_compare_magnitude_phase():
    """Test ordering by magnitude first and phase second."""
    s = NetworkParameter.from_polar_decibel_degree(20, 0)
    s2 = NetworkParameter.from_polar_decibel_degree(10, 180)
    assert compare_magnitude_phase(s, s2) == 1
    assert compare_magnitude_phase(s2, s) == -1
    assert compare_magnitude_phase(NetworkParameter(1, 0), NetworkParameter(0, 1)) == -1
    assert compare_magnitude_phase(NetworkParameter(0, 1), NetworkParameter(1, 0)) == 1
    assert compare_magnitude_phase(s, NetworkParameter(s.real, s.imaginary)) == 0


def test_model_dump():
    """Test serialization of the rectangular components."""
    assert NetworkParameter(1, -2).model_dump() == {"real": 1.0, "imaginary": -2.0}
