"""
Port matrices module.

This module provides square matrices of network parameters indexed by 1-based
``(destination port, source port)`` pairs, in the scattering (S) and transfer (T)
representations, and the cascade of two-port networks.

Examples
--------
Build a two-port S-parameters matrix and cascade it with itself:

.. code-block:: python

    s = ScatteringParametersMatrix(2)
    s[2, 1] = NetworkParameter.from_polar_decibel_degree(-3, 0)
    s[1, 2] = s[2, 1]
    s[1, 1] = s[2, 2] = NetworkParameter.Zero
    total = cascade(s, s)
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from math import isqrt
from typing import Iterator, Sequence

import numpy as np
from typing_extensions import Self

from mwnetworks.exceptions import InvalidArgument
from mwnetworks.mathutils import s2t, t2s
from mwnetworks.parameter import NetworkParameter
from mwnetworks.typing import PortIndex, validate_port, validate_port_count


class ListFormat(enum.Enum):
    """Ordering of the parameters of a matrix flattened to a list."""

    SOURCE_PORT_MAJOR = "source_port_major"
    DESTINATION_PORT_MAJOR = "destination_port_major"


def port_indices(
    num_ports: int, list_format: ListFormat = ListFormat.SOURCE_PORT_MAJOR
) -> Iterator[PortIndex]:
    """
    Iterate over the ``(destination, source)`` indices of a square matrix.

    Args:
        num_ports (int): Number of ports.
        list_format (ListFormat): Which port varies slowest.

    Yields:
        PortIndex: 1-based ``(destination, source)`` indices.
    """
    for outer in range(1, num_ports + 1):
        for inner in range(1, num_ports + 1):
            if list_format is ListFormat.SOURCE_PORT_MAJOR:
                yield inner, outer
            else:
                yield outer, inner


def check_two_port(num_ports: int) -> None:
    """
    Check that S/T parameter conversions are defined for the number of ports.

    Args:
        num_ports (int): Number of ports of the network.
    """
    if num_ports == 1:
        raise InvalidArgument("T parameter conversion invalid for single port network.")
    if num_ports != 2:
        raise NotImplementedError(
            "S/T parameter conversion is only implemented for two-port networks."
        )


class NetworkParametersMatrix(ABC):
    """A square matrix of network parameters with 1-based port indexing."""

    prefix = "X"

    def __init__(self, num_ports: int):
        """
        Initialize a matrix with every entry set to ``NetworkParameter.One``.

        Args:
            num_ports (int): Number of ports of the network.
        """
        num_ports = validate_port_count(num_ports)
        self._matarray = np.ones((num_ports, num_ports), dtype=np.complex128)

    @classmethod
    def from_array(cls, mat: np.ndarray) -> Self:
        """
        Instantiate from a square array of complex values.

        Args:
            mat (numpy.ndarray): Array of shape (num_ports, num_ports).

        Returns:
            NetworkParametersMatrix: New matrix holding a copy of the data.
        """
        mat = np.asarray(mat)
        if mat.ndim != 2 or mat.shape[0] != mat.shape[1] or mat.shape[0] < 1:
            raise InvalidArgument(
                f"Input must be a non-empty square array, got shape {mat.shape}."
            )
        instance = cls(mat.shape[0])
        instance._matarray[:] = mat
        return instance

    @classmethod
    def from_flattened(
        cls,
        values: Sequence[NetworkParameter | complex],
        list_format: ListFormat = ListFormat.SOURCE_PORT_MAJOR,
    ) -> Self:
        """
        Instantiate from a flat list of parameters.

        Args:
            values (Sequence[NetworkParameter | complex]): (num_ports)^2 parameters.
            list_format (ListFormat): Ordering of the parameters in the list.

        Returns:
            NetworkParametersMatrix: New matrix.
        """
        num_ports = isqrt(len(values))
        if num_ports == 0 or num_ports**2 != len(values):
            raise InvalidArgument("List must contain (num-ports) squared elements.")
        instance = cls(num_ports)
        for (row, column), value in zip(port_indices(num_ports, list_format), values):
            instance._matarray[row - 1, column - 1] = complex(value)
        return instance

    @property
    def num_ports(self) -> int:
        """Number of ports of the matrix."""
        return self._matarray.shape[0]

    @property
    def shape(self) -> tuple[int, int]:
        """Shape of the internal array."""
        return self._matarray.shape

    def __array__(self, dtype=None, copy=None):
        """Convert the matrix to a numpy array."""
        if dtype is None:
            return self._matarray.copy() if copy else self._matarray
        return self._matarray.astype(dtype)

    def _validate_index(self, index: PortIndex) -> PortIndex:
        if not isinstance(index, tuple) or len(index) != 2:
            raise InvalidArgument(
                f"Matrices are indexed by (destination port, source port), got {index!r}."
            )
        destination, source = index
        return (
            validate_port(destination, self.num_ports, "destination port"),
            validate_port(source, self.num_ports, "source port"),
        )

    def __getitem__(self, index: PortIndex) -> NetworkParameter:
        """
        Get the parameter between two ports.

        Args:
            index (PortIndex): 1-based ``(destination port, source port)``.

        Returns:
            NetworkParameter: Stored parameter.
        """
        row, column = self._validate_index(index)
        return NetworkParameter.from_complex(self._matarray[row - 1, column - 1])

    def __setitem__(self, index: PortIndex, value: NetworkParameter | complex) -> None:
        """
        Set the parameter between two ports.

        Args:
            index (PortIndex): 1-based ``(destination port, source port)``.
            value (NetworkParameter | complex): Value to store.
        """
        row, column = self._validate_index(index)
        self._matarray[row - 1, column - 1] = complex(value)

    def enumerate_parameters(
        self, list_format: ListFormat = ListFormat.DESTINATION_PORT_MAJOR
    ) -> Iterator[tuple[PortIndex, NetworkParameter]]:
        """
        Iterate over indices and parameters.

        Args:
            list_format (ListFormat): Order of the iteration.

        Yields:
            tuple[PortIndex, NetworkParameter]: Port indices and parameter.
        """
        for index in port_indices(self.num_ports, list_format):
            yield index, self[index]

    def __iter__(self) -> Iterator[tuple[PortIndex, NetworkParameter]]:
        return self.enumerate_parameters(ListFormat.SOURCE_PORT_MAJOR)

    def flatten(
        self, list_format: ListFormat = ListFormat.SOURCE_PORT_MAJOR
    ) -> list[NetworkParameter]:
        """Return the parameters as a flat list in the given order."""
        return [parameter for _, parameter in self.enumerate_parameters(list_format)]

    def determinant(self) -> NetworkParameter:
        """Determinant of the matrix."""
        return NetworkParameter.from_complex(np.linalg.det(self._matarray))

    def copy(self) -> Self:
        """Return an independent copy of the matrix."""
        return self.__class__.from_array(self._matarray.copy())

    def convert(self, matrix_type: type[NetworkParametersMatrix]) -> NetworkParametersMatrix:
        """
        Convert to another parameter representation.

        Args:
            matrix_type (type[NetworkParametersMatrix]): Target representation.

        Returns:
            NetworkParametersMatrix: Converted matrix.
        """
        if matrix_type is ScatteringParametersMatrix:
            return self.to_s()
        if matrix_type is TransferParametersMatrix:
            return self.to_t()
        raise InvalidArgument(
            f"Conversion type must be a concrete child class of {NetworkParametersMatrix.__name__}."
        )

    @abstractmethod
    def to_s(self) -> ScatteringParametersMatrix:
        """Return the equivalent S-parameters matrix."""

    @abstractmethod
    def to_t(self) -> TransferParametersMatrix:
        """Return the equivalent T-parameters matrix."""

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NetworkParametersMatrix):
            return NotImplemented
        return type(self) is type(other) and np.array_equal(
            self._matarray, other._matarray
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._matarray})"

    def __str__(self) -> str:
        rows = []
        for row in range(1, self.num_ports + 1):
            cells = [
                f"{self.prefix}{row}{column}: {self[row, column]}"
                for column in range(1, self.num_ports + 1)
            ]
            rows.append("[" + "\t".join(cells) + "]")
        return "\n".join(rows)


class ScatteringParametersMatrix(NetworkParametersMatrix):
    """A matrix of scattering (S) parameters."""

    prefix = "S"

    def to_s(self) -> ScatteringParametersMatrix:
        """Return the matrix itself."""
        return self

    def to_t(self) -> TransferParametersMatrix:
        """
        Convert to T-parameters.

        Returns:
            TransferParametersMatrix: Equivalent transfer parameters of a two-port network.
        """
        check_two_port(self.num_ports)
        return TransferParametersMatrix.from_array(s2t(self._matarray[np.newaxis])[0])


class TransferParametersMatrix(NetworkParametersMatrix):
    """A matrix of transfer (T) parameters."""

    prefix = "T"

    def to_s(self) -> ScatteringParametersMatrix:
        """
        Convert to S-parameters.

        Returns:
            ScatteringParametersMatrix: Equivalent scattering parameters of a two-port network.
        """
        check_two_port(self.num_ports)
        return ScatteringParametersMatrix.from_array(t2s(self._matarray[np.newaxis])[0])

    def to_t(self) -> TransferParametersMatrix:
        """Return the matrix itself."""
        return self

    def __matmul__(self, other: TransferParametersMatrix) -> TransferParametersMatrix:
        """
        Matrix multiplication with another TransferParametersMatrix.

        Args:
            other (TransferParametersMatrix): Right-hand side of the product.

        Returns:
            TransferParametersMatrix: Result of the matrix multiplication.
        """
        if not isinstance(other, TransferParametersMatrix):
            return NotImplemented
        if other.num_ports != self.num_ports:
            raise InvalidArgument("Matrices must have the same number of ports.")
        return self.__class__.from_array(self._matarray @ other._matarray)


def cascade(*matrices: NetworkParametersMatrix) -> NetworkParametersMatrix:
    """
    Cascade networks connected in series.

    Args:
        *matrices (NetworkParametersMatrix): Matrices in connection order.

    Returns:
        NetworkParametersMatrix: Total network, in the representation of the first matrix.
    """
    if not matrices:
        raise InvalidArgument("At least one matrix is required for a cascade.")
    total = matrices[0].to_t()
    for matrix in matrices[1:]:
        total = total @ matrix.to_t()
    return total.convert(type(matrices[0]))
