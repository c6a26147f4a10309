"""
Utility functions for network parameter conversions.

This module provides the decibel and angle conversions used by single network parameters,
together with Numba-optimized kernels operating on arrays of 2x2 matrices: matrix
multiplication and conversions between scattering (S) and transfer (T) parameters.
"""

import numba as nb
import numpy as np

from mwnetworks.typing import complex_array, float_array


def to_dB(values: float | float_array | complex_array) -> float | float_array:
    """
    Convert linear magnitudes (or the modulus of complex values) to dB.

    A magnitude of zero is mapped to ``-inf`` without emitting warnings.

    Args:
        values (float | float_array | complex_array): Values to be converted.

    Returns:
        float | float_array: Magnitudes in dB.
    """
    with np.errstate(divide="ignore"):
        return 20 * np.log10(np.abs(values))


def dB_to_linear(values: float | float_array) -> float | float_array:
    """
    Convert magnitudes in dB to linear magnitudes.

    Args:
        values (float | float_array): Magnitudes in dB, ``-inf`` gives zero.

    Returns:
        float | float_array: Linear magnitudes.
    """
    return np.power(10.0, np.divide(values, 20))


def deg_to_rad(angle_deg: float | float_array) -> float | float_array:
    """Convert angles from degrees to radians."""
    return np.multiply(angle_deg, np.pi) / 180


def rad_to_deg(angle_rad: float | float_array) -> float | float_array:
    """Convert angles from radians to degrees."""
    return np.multiply(angle_rad, 180) / np.pi


@nb.njit(cache=True)
def matmul_2x2(
    matrices_a: complex_array,
    matrices_b: complex_array,
) -> complex_array:
    """
    Fast multiplication between arrays of 2x2 matrices.

    Args:
        matrices_a (complex_array): Array of 2x2 complex matrices.
        matrices_b (complex_array): Array of 2x2 complex matrices.

    Returns:
        complex_array: Resultant array of 2x2 complex matrices after multiplication.
    """
    assert matrices_a.shape == matrices_b.shape
    assert matrices_a.shape[1] == 2 and matrices_a.shape[2] == 2

    n_mat = matrices_a.shape[0]
    result_matrices = np.empty((n_mat, 2, 2), dtype=np.complex128)
    for k in range(n_mat):
        for i in range(2):
            for j in range(2):
                result_matrices[k, i, j] = (
                    matrices_a[k, i, 0] * matrices_b[k, 0, j]
                    + matrices_a[k, i, 1] * matrices_b[k, 1, j]
                )

    return result_matrices


@nb.njit(cache=True)
def s2t(spar: complex_array) -> complex_array:
    """
    Convert arrays of S-parameters to arrays of T-parameters.

    Args:
        spar (complex_array): Array of 2x2 S-parameter matrices.

    Returns:
        complex_array: Array of 2x2 T-parameter matrices.
    """
    assert spar.shape[1] == 2 and spar.shape[2] == 2
    n_mat = spar.shape[0]
    tpar = np.empty((n_mat, 2, 2), dtype=np.complex128)
    for i in range(n_mat):
        S11 = spar[i, 0, 0]
        S12 = spar[i, 0, 1]
        S21 = spar[i, 1, 0]
        S22 = spar[i, 1, 1]
        tpar[i, 0, 0] = -(S11 * S22 - S12 * S21) / S21
        tpar[i, 0, 1] = S11 / S21
        tpar[i, 1, 0] = -S22 / S21
        tpar[i, 1, 1] = 1.0 / S21
    return tpar


@nb.njit(cache=True)
def t2s(tpar: complex_array) -> complex_array:
    """
    Convert arrays of T-parameters to arrays of S-parameters.

    Args:
        tpar (complex_array): Array of 2x2 T-parameter matrices.

    Returns:
        complex_array: Array of 2x2 S-parameter matrices.
    """
    assert tpar.shape[1] == 2 and tpar.shape[2] == 2
    n_mat = tpar.shape[0]
    spar = np.empty((n_mat, 2, 2), dtype=np.complex128)
    for i in range(n_mat):
        T11 = tpar[i, 0, 0]
        T12 = tpar[i, 0, 1]
        T21 = tpar[i, 1, 0]
        T22 = tpar[i, 1, 1]
        spar[i, 0, 0] = T12 / T22
        spar[i, 0, 1] = (T11 * T22 - T12 * T21) / T22
        spar[i, 1, 0] = 1.0 / T22
        spar[i, 1, 1] = -T21 / T22
    return spar
