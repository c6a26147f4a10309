"""
Single network parameter module.

This module defines :class:`NetworkParameter`, an immutable complex value describing the
signal behaviour between two ports at one frequency, with views of its magnitude in linear
units or decibels and of its phase in radians or degrees.

Examples
--------
Create parameters from polar coordinates:

.. code-block:: python

    s21 = NetworkParameter.from_polar_decibel_degree(-3, 90)
    s11 = NetworkParameter.from_polar_degree(0.1, -45)

Read the different views:

.. code-block:: python

    s21.magnitude, s21.magnitude_dB, s21.phase_deg, s21.real, s21.imaginary
"""

import numbers
from typing import ClassVar

import numpy as np
from pydantic import ConfigDict, Field

from mwnetworks.basemodel import BaseModel
from mwnetworks.exceptions import InvalidArgument
from mwnetworks.mathutils import dB_to_linear, deg_to_rad, rad_to_deg, to_dB


class NetworkParameter(BaseModel):
    """Immutable complex network parameter stored in rectangular form."""

    model_config = ConfigDict(frozen=True)

    real: float = Field(default=0.0, description="Real component of the parameter.")
    imaginary: float = Field(
        default=0.0, description="Imaginary component of the parameter."
    )

    One: ClassVar["NetworkParameter"]
    Zero: ClassVar["NetworkParameter"]

    def __init__(self, real: float = 0.0, imaginary: float = 0.0, **data):
        """
        Initialize the parameter from its rectangular components.

        Args:
            real (float): Real component.
            imaginary (float): Imaginary component.
        """
        super().__init__(real=float(real), imaginary=float(imaginary), **data)

    @classmethod
    def from_complex(cls, value: complex) -> "NetworkParameter":
        """
        Instantiate from a complex number.

        Args:
            value (complex): Any value convertible to a Python complex.

        Returns:
            NetworkParameter: The new parameter.
        """
        value = complex(value)
        return cls(value.real, value.imag)

    @classmethod
    def from_polar(cls, magnitude: float, phase_rad: float) -> "NetworkParameter":
        """
        Instantiate from linear magnitude and phase in radians.

        Args:
            magnitude (float): Non-negative linear magnitude.
            phase_rad (float): Phase in radians.

        Returns:
            NetworkParameter: The new parameter.
        """
        magnitude = float(magnitude)
        if not magnitude >= 0:
            raise InvalidArgument(
                f"Magnitude must be a non-negative number, got {magnitude}."
            )
        return cls(magnitude * np.cos(phase_rad), magnitude * np.sin(phase_rad))

    @classmethod
    def from_polar_degree(cls, magnitude: float, phase_deg: float) -> "NetworkParameter":
        """
        Instantiate from linear magnitude and phase in degrees.

        Args:
            magnitude (float): Non-negative linear magnitude.
            phase_deg (float): Phase in degrees.

        Returns:
            NetworkParameter: The new parameter.
        """
        return cls.from_polar(magnitude, deg_to_rad(phase_deg))

    @classmethod
    def from_polar_decibel_degree(
        cls, magnitude_dB: float, phase_deg: float
    ) -> "NetworkParameter":
        """
        Instantiate from magnitude in dB and phase in degrees.

        A magnitude of ``-inf`` dB gives a parameter with zero magnitude.

        Args:
            magnitude_dB (float): Magnitude in dB.
            phase_deg (float): Phase in degrees.

        Returns:
            NetworkParameter: The new parameter.
        """
        return cls.from_polar_degree(dB_to_linear(magnitude_dB), phase_deg)

    @property
    def magnitude(self) -> float:
        """Linear magnitude (absolute value) of the parameter."""
        return float(np.hypot(self.real, self.imaginary))

    @property
    def magnitude_dB(self) -> float:
        """Magnitude of the parameter in dB, ``-inf`` for a zero parameter."""
        return float(to_dB(self.magnitude))

    @property
    def phase_rad(self) -> float:
        """Phase of the parameter in radians, in the range (-pi, pi]."""
        return float(np.arctan2(self.imaginary, self.real))

    @property
    def phase_deg(self) -> float:
        """Phase of the parameter in degrees, in the range (-180, 180]."""
        return float(rad_to_deg(self.phase_rad))

    def conjugate(self) -> "NetworkParameter":
        """Return the complex conjugate."""
        return self.__class__(self.real, -self.imaginary)

    def reciprocal(self) -> "NetworkParameter":
        """Return the multiplicative inverse."""
        return self.__class__.from_complex(1 / complex(self))

    def isclose(
        self, other: "NetworkParameter | complex", rel_tol: float = 1e-9, abs_tol: float = 0.0
    ) -> bool:
        """
        Check approximate equality with another parameter or number.

        Args:
            other (NetworkParameter | complex): Value to compare with.
            rel_tol (float): Relative tolerance.
            abs_tol (float): Absolute tolerance.

        Returns:
            bool: True if the two complex values are within tolerance.
        """
        return bool(
            np.isclose(complex(self), complex(other), rtol=rel_tol, atol=abs_tol)
        )

    def __complex__(self) -> complex:
        return complex(self.real, self.imaginary)

    def __abs__(self) -> float:
        return self.magnitude

    def __eq__(self, other: object) -> bool:
        if isinstance(other, NetworkParameter):
            return self.real == other.real and self.imaginary == other.imaginary
        if isinstance(other, numbers.Number):
            return complex(self) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(complex(self))

    def __str__(self) -> str:
        return str(complex(self))

    def __neg__(self) -> "NetworkParameter":
        return self.__class__(-self.real, -self.imaginary)

    def _binary(self, other, operation):
        if not isinstance(other, (NetworkParameter, numbers.Number)):
            return NotImplemented
        return self.__class__.from_complex(operation(complex(self), complex(other)))

    def __add__(self, other):
        return self._binary(other, lambda a, b: a + b)

    def __radd__(self, other):
        return self._binary(other, lambda a, b: b + a)

    def __sub__(self, other):
        return self._binary(other, lambda a, b: a - b)

    def __rsub__(self, other):
        return self._binary(other, lambda a, b: b - a)

    def __mul__(self, other):
        return self._binary(other, lambda a, b: a * b)

    def __rmul__(self, other):
        return self._binary(other, lambda a, b: b * a)

    def __truediv__(self, other):
        return self._binary(other, lambda a, b: a / b)

    def __rtruediv__(self, other):
        return self._binary(other, lambda a, b: b / a)


NetworkParameter.One = NetworkParameter(1.0, 0.0)
NetworkParameter.Zero = NetworkParameter(0.0, 0.0)


def compare_magnitude_phase(left: NetworkParameter, right: NetworkParameter) -> int:
    """
    Order two parameters by magnitude first and phase second.

    Args:
        left (NetworkParameter): First parameter.
        right (NetworkParameter): Second parameter.

    Returns:
        int: -1 if ``left`` sorts before ``right``, 1 if after, 0 if equivalent.
    """
    left_key = (left.magnitude, left.phase_rad)
    right_key = (right.magnitude, right.phase_rad)
    if left_key < right_key:
        return -1
    if left_key > right_key:
        return 1
    return 0
