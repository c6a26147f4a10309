"""Definition of shared fixtures."""

import numpy as np
import pytest

from mwnetworks.collection import NetworkParametersCollection
from mwnetworks.matrices import ScatteringParametersMatrix
from mwnetworks.parameter import NetworkParameter


def matched_attenuator(gain_dB: float, phase_deg: float = 0) -> ScatteringParametersMatrix:
    """Return the S-parameters of a matched, reciprocal two-port."""
    s = ScatteringParametersMatrix(2)
    transmission = NetworkParameter.from_polar_decibel_degree(gain_dB, phase_deg)
    s[1, 1] = NetworkParameter.from_polar_decibel_degree(-np.inf, 0)
    s[2, 2] = NetworkParameter.from_polar_decibel_degree(-np.inf, 0)
    s[1, 2] = transmission
    s[2, 1] = transmission
    return s


@pytest.fixture()
def array2x2_numpy():
    """Predefined data for 2x2 matrices arrays."""
    return np.array([[[1, 2], [3, 4]], [[5, 6], [7, 8j]]], dtype=np.complex128)


@pytest.fixture()
def s_matrix():
    """Fixture providing a two-port S-parameters matrix with distinct entries."""
    return ScatteringParametersMatrix.from_array(np.array([[0.1, 0.9j], [0.8j, 0.2 - 0.1j]]))


@pytest.fixture()
def attenuator():
    """Factory of matched two-ports with given transmission in dB."""
    return matched_attenuator


@pytest.fixture()
def attenuator_3dB():
    """Matched two-port with 3 dB of transmission."""
    return matched_attenuator(3)


@pytest.fixture()
def attenuator_5dB():
    """Matched two-port with 5 dB of transmission."""
    return matched_attenuator(5)


@pytest.fixture()
def sweep_collection():
    """Collection from 1 to 20 GHz where S21 in dB equals the frequency index in GHz."""
    collection = NetworkParametersCollection(2)
    for i in range(1, 21):
        collection[i * 1.0e9, 2, 1] = NetworkParameter.from_polar_decibel_degree(i, 0)
    return collection


@pytest.fixture()
def frequency_list():
    """Return example simple list."""
    return list(range(0, 10))


@pytest.fixture()
def frequency_arange():
    """Return example arange tuple."""
    return (0, 1, 10)
