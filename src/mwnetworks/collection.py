"""
Frequency-indexed collections of network parameters.

This module provides :class:`NetworkParametersCollection`, a swept-frequency dataset mapping
each frequency (in Hz) to a square port matrix of network parameters. Frequencies are unique
and always kept in ascending order, so that exact lookups, ranged access and nearest-frequency
lookups run with a binary search.

Examples
--------
Fill a two-port collection and query it:

.. code-block:: python

    collection = NetworkParametersCollection(2)
    for i in range(1, 21):
        collection[i * 1e9, 2, 1] = NetworkParameter.from_polar_decibel_degree(i, 0)

    collection[5e9, 2, 1]  # exact lookup
    collection.nearest(5.4e9)[2, 1]  # nearest frequency lookup

Convert to a scikit-rf Network:

.. code-block:: python

    network = collection.to_network(z0=50)
"""

from __future__ import annotations

import copy
import math
import numbers
from bisect import bisect_left, bisect_right
from typing import Any, Generic, Iterable, Iterator, NamedTuple, TypeVar

import numpy as np
import skrf as rf

from mwnetworks.exceptions import EmptyCollection, InvalidArgument, NotFound
from mwnetworks.frequency import Frequencies
from mwnetworks.logger import log
from mwnetworks.mathutils import matmul_2x2, s2t, t2s
from mwnetworks.matrices import (
    NetworkParametersMatrix,
    ScatteringParametersMatrix,
    TransferParametersMatrix,
    check_two_port,
    port_indices,
)
from mwnetworks.parameter import NetworkParameter
from mwnetworks.typing import (
    Impedance,
    PortMatrix,
    validate_frequency,
    validate_impedance,
    validate_port,
    validate_port_count,
)

TMatrix = TypeVar("TMatrix", bound=PortMatrix)


class FrequencyParametersPair(NamedTuple):
    """A frequency in Hz together with the matrix stored at it."""

    frequency: float
    parameters: Any


class NetworkParametersCollection(Generic[TMatrix]):
    """Ordered collection of port matrices indexed by frequency."""

    def __init__(
        self,
        num_ports: int,
        matrix_type: type[TMatrix] = ScatteringParametersMatrix,
    ):
        """
        Initialize an empty collection.

        Args:
            num_ports (int): Number of ports of every matrix in the collection.
            matrix_type (type[TMatrix]): Class of the stored matrices, instantiated with
                the number of ports when a parameter is written at a new frequency.
        """
        if not isinstance(matrix_type, type):
            raise InvalidArgument(f"matrix_type must be a class, got {matrix_type!r}.")
        self._num_ports = validate_port_count(num_ports)
        self._matrix_type = matrix_type
        self._frequencies: list[float] = []
        self._matrices: list[TMatrix] = []

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[FrequencyParametersPair | tuple[float, TMatrix]],
        matrix_type: type[TMatrix] | None = None,
    ) -> NetworkParametersCollection[TMatrix]:
        """
        Instantiate from ``(frequency, matrix)`` pairs in any order.

        Args:
            pairs (Iterable): Pairs of frequency and matrix.
            matrix_type (type[TMatrix] | None): Class of the stored matrices,
                defaults to the class of the first matrix.

        Returns:
            NetworkParametersCollection: New collection.
        """
        pairs = [FrequencyParametersPair(*pair) for pair in pairs]
        if not pairs:
            raise InvalidArgument("At least one pair is required to infer the number of ports.")
        frequencies = [validate_frequency(pair.frequency) for pair in pairs]
        if len(set(frequencies)) != len(frequencies):
            raise InvalidArgument("Frequencies must be unique.")
        first = pairs[0].parameters
        collection = cls(first.num_ports, matrix_type or type(first))
        for frequency, pair in zip(frequencies, pairs):
            collection.add(frequency, pair.parameters)
        return collection

    @classmethod
    def from_arrays(
        cls,
        frequencies: np.ndarray,
        data: np.ndarray,
        matrix_type: type[TMatrix] = ScatteringParametersMatrix,
    ) -> NetworkParametersCollection[TMatrix]:
        """
        Instantiate from an array of frequencies and an array of square matrices.

        Args:
            frequencies (numpy.ndarray): 1-D array of frequencies in Hz, in any order.
            data (numpy.ndarray): Array of shape (len(frequencies), num_ports, num_ports).
            matrix_type (type[TMatrix]): Class of the stored matrices.

        Returns:
            NetworkParametersCollection: New collection.
        """
        freqs = np.asarray(frequencies, dtype=float)
        data = np.asarray(data, dtype=np.complex128)
        if freqs.ndim != 1:
            raise InvalidArgument("Frequencies must be 1-D array")
        if data.ndim != 3 or data.shape[1] != data.shape[2]:
            raise InvalidArgument(
                f"Data must be an array of square matrices, got shape {data.shape}."
            )
        if freqs.shape[0] != data.shape[0]:
            raise InvalidArgument("Frequencies and matrices must have same length.")
        validated = [validate_frequency(frequency) for frequency in freqs]
        if len(set(validated)) != len(validated):
            raise InvalidArgument("Frequencies must be unique.")

        collection = cls(data.shape[1], matrix_type)
        for k in np.argsort(freqs, kind="stable"):
            collection._frequencies.append(validated[k])
            collection._matrices.append(collection._matrix_from_array(data[k]))
        return collection

    @classmethod
    def from_network(
        cls,
        network: rf.Network,
        matrix_type: type[TMatrix] = ScatteringParametersMatrix,
    ) -> NetworkParametersCollection[TMatrix]:
        """
        Instantiate from a scikit-rf Network.

        Args:
            network (rf.Network): scikit-rf Network.
            matrix_type (type[TMatrix]): Representation of the stored matrices.

        Returns:
            NetworkParametersCollection: New collection.
        """
        collection = cls.from_arrays(network.f, network.s, ScatteringParametersMatrix)
        if matrix_type is ScatteringParametersMatrix:
            return collection
        return collection.convert(matrix_type)

    @property
    def num_ports(self) -> int:
        """Number of ports of the stored matrices."""
        return self._num_ports

    @property
    def matrix_type(self) -> type[TMatrix]:
        """Class of the stored matrices."""
        return self._matrix_type

    @property
    def frequencies(self) -> np.ndarray:
        """
        Get the stored frequencies.

        Returns:
            numpy.ndarray: Frequencies in Hz, in ascending order.
        """
        return np.array(self._frequencies, dtype=float)

    @property
    def network_parameters(self) -> list[TMatrix]:
        """Stored matrices, ordered by ascending frequency."""
        return list(self._matrices)

    def __len__(self) -> int:
        return len(self._frequencies)

    def __iter__(self) -> Iterator[FrequencyParametersPair]:
        for frequency, matrix in zip(self._frequencies, self._matrices):
            yield FrequencyParametersPair(frequency, matrix)

    def __contains__(self, frequency: object) -> bool:
        return self.contains_frequency(frequency)

    def __repr__(self) -> str:
        """
        Return a string representation of the collection.

        Returns:
            str: String representation of the collection.
        """
        band = f"[{self._frequencies[0]}, {self._frequencies[-1]}]" if self else "[]"
        return (
            f"{self.__class__.__name__}(num_ports={self._num_ports}, "
            f"matrix_type={self._matrix_type.__name__}, points={len(self)}, band={band})"
        )

    def _index_of(self, frequency: float) -> int | None:
        """Position of the exact frequency in the storage, None if absent."""
        idx = bisect_left(self._frequencies, frequency)
        if idx < len(self._frequencies) and self._frequencies[idx] == frequency:
            return idx
        return None

    def _require_index(self, frequency: float) -> int:
        try:
            frequency = float(frequency)
        except (TypeError, ValueError) as exc:
            raise InvalidArgument(f"Cannot convert {frequency!r} to a frequency.") from exc
        idx = self._index_of(frequency)
        if idx is None:
            raise NotFound(f"No value exists for frequency {frequency}.")
        return idx

    def _insert(self, frequency: float, matrix: TMatrix) -> None:
        """Insert or replace the matrix, keeping frequencies sorted."""
        idx = bisect_left(self._frequencies, frequency)
        if idx < len(self._frequencies) and self._frequencies[idx] == frequency:
            self._matrices[idx] = matrix
            return
        self._frequencies.insert(idx, frequency)
        self._matrices.insert(idx, matrix)

    def _matrix_from_array(self, mat: np.ndarray) -> TMatrix:
        if issubclass(self._matrix_type, NetworkParametersMatrix):
            return self._matrix_type.from_array(mat)
        matrix = self._matrix_type(self._num_ports)
        for row, column in port_indices(self._num_ports):
            matrix[row, column] = NetworkParameter.from_complex(mat[row - 1, column - 1])
        return matrix

    def _matrix_to_array(self, matrix: TMatrix) -> np.ndarray:
        if isinstance(matrix, NetworkParametersMatrix):
            return np.asarray(matrix)
        mat = np.empty((self._num_ports, self._num_ports), dtype=np.complex128)
        for row, column in port_indices(self._num_ports):
            mat[row - 1, column - 1] = complex(matrix[row, column])
        return mat

    def _validate_matrix(self, matrix: Any) -> TMatrix:
        """Check a matrix before storing it, converting its representation if needed."""
        if (
            isinstance(matrix, NetworkParametersMatrix)
            and issubclass(self._matrix_type, NetworkParametersMatrix)
            and not isinstance(matrix, self._matrix_type)
        ):
            matrix = matrix.convert(self._matrix_type)
        if not isinstance(matrix, PortMatrix):
            raise InvalidArgument(
                f"Cannot store {type(matrix).__name__} in a collection of "
                f"{self._matrix_type.__name__}."
            )
        if matrix.num_ports != self._num_ports:
            raise InvalidArgument(
                "All network parameter matrices must have the same number of ports."
            )
        return matrix

    @staticmethod
    def _owned_copy(matrix: TMatrix) -> TMatrix:
        """Copy a matrix so that it is never shared with the caller or another collection."""
        if isinstance(matrix, NetworkParametersMatrix):
            return matrix.copy()
        return copy.deepcopy(matrix)

    @staticmethod
    def _as_parameter(value: Any) -> NetworkParameter:
        if isinstance(value, NetworkParameter):
            return value
        if isinstance(value, numbers.Number):
            return NetworkParameter.from_complex(value)
        raise InvalidArgument(
            f"Value must be a NetworkParameter or a complex number, got {type(value).__name__}."
        )

    def set(
        self, frequency: float, row: int, column: int, value: NetworkParameter | complex
    ) -> None:
        """
        Set a single parameter, creating the matrix at the frequency if needed.

        Args:
            frequency (float): Frequency in Hz.
            row (int): Destination port, from 1 to num_ports.
            column (int): Source port, from 1 to num_ports.
            value (NetworkParameter | complex): Value to store.
        """
        frequency = validate_frequency(frequency)
        row = validate_port(row, self._num_ports, "destination port")
        column = validate_port(column, self._num_ports, "source port")
        value = self._as_parameter(value)

        idx = self._index_of(frequency)
        if idx is not None:
            self._matrices[idx][row, column] = value
            return
        matrix = self._matrix_type(self._num_ports)
        matrix[row, column] = value
        self._insert(frequency, matrix)
        log.debug("Created %s at %s Hz.", self._matrix_type.__name__, frequency)

    def get(self, frequency: float, row: int, column: int) -> NetworkParameter:
        """
        Get a single parameter at an exact frequency.

        Args:
            frequency (float): Frequency in Hz.
            row (int): Destination port, from 1 to num_ports.
            column (int): Source port, from 1 to num_ports.

        Returns:
            NetworkParameter: Stored parameter.
        """
        row = validate_port(row, self._num_ports, "destination port")
        column = validate_port(column, self._num_ports, "source port")
        return self._matrices[self._require_index(frequency)][row, column]

    def add(self, frequency: float, matrix: TMatrix) -> None:
        """
        Store a copy of a whole matrix at a frequency, replacing any existing one.

        Later changes to ``matrix`` do not affect the collection.

        Args:
            frequency (float): Frequency in Hz.
            matrix (TMatrix): Matrix with num_ports ports.
        """
        frequency = validate_frequency(frequency)
        self._insert(frequency, self._owned_copy(self._validate_matrix(matrix)))

    def get_matrix(self, frequency: float, default: Any = None) -> TMatrix | Any:
        """
        Get the matrix at an exact frequency, or a default value if absent.

        Args:
            frequency (float): Frequency in Hz.
            default (Any): Value returned when no matrix is stored at the frequency.

        Returns:
            TMatrix | Any: Stored matrix or default.
        """
        try:
            return self._matrices[self._require_index(frequency)]
        except NotFound:
            return default

    def contains_frequency(self, frequency: object) -> bool:
        """Check if a matrix is stored at exactly the given frequency."""
        try:
            return self._index_of(float(frequency)) is not None
        except (TypeError, ValueError):
            return False

    def remove(self, frequency: float) -> bool:
        """
        Remove the matrix stored at a frequency.

        Args:
            frequency (float): Frequency in Hz.

        Returns:
            bool: True if a matrix was removed.
        """
        try:
            idx = self._require_index(frequency)
        except NotFound:
            return False
        del self._frequencies[idx]
        del self._matrices[idx]
        return True

    def clear(self) -> None:
        """Remove all the stored matrices."""
        self._frequencies.clear()
        self._matrices.clear()

    def __getitem__(self, key):
        """
        Get data by frequency.

        Args:
            key: A frequency for the whole matrix, a ``(frequency, row, column)`` tuple for a
                single parameter, or a frequency slice ``[start:stop]`` (both ends included)
                for a new collection with copies of the matrices in the band.

        Returns:
            TMatrix | NetworkParameter | NetworkParametersCollection: Requested data.
        """
        if isinstance(key, slice):
            return self._slice(key)
        if isinstance(key, tuple):
            if len(key) != 3:
                raise InvalidArgument("Index must be (frequency, row, column).")
            return self.get(*key)
        return self._matrices[self._require_index(key)]

    def __setitem__(self, key, value) -> None:
        """
        Set data by frequency.

        Args:
            key: A frequency to store a whole matrix or a ``(frequency, row, column)`` tuple
                to store a single parameter.
            value: Matrix or parameter to store.
        """
        if isinstance(key, tuple):
            if len(key) != 3:
                raise InvalidArgument("Index must be (frequency, row, column).")
            self.set(*key, value)
        else:
            self.add(key, value)

    def in_range(
        self,
        min_frequency: float | None = None,
        max_frequency: float | None = None,
    ) -> Iterator[FrequencyParametersPair]:
        """
        Iterate over the frequencies within a band, in ascending order.

        Args:
            min_frequency (float | None): Lower edge of the band (included), unbounded if None.
            max_frequency (float | None): Upper edge of the band (included), unbounded if None.

        Yields:
            FrequencyParametersPair: Frequency and matrix.
        """
        start = 0 if min_frequency is None else bisect_left(self._frequencies, min_frequency)
        stop = (
            len(self._frequencies)
            if max_frequency is None
            else bisect_right(self._frequencies, max_frequency)
        )
        for idx in range(start, stop):
            yield FrequencyParametersPair(self._frequencies[idx], self._matrices[idx])

    def _slice(self, key: slice) -> NetworkParametersCollection[TMatrix]:
        if key.step is not None:
            raise InvalidArgument("Frequency slices do not support a step.")
        new = self.__class__(self._num_ports, self._matrix_type)
        for frequency, matrix in self.in_range(key.start, key.stop):
            new._frequencies.append(frequency)
            new._matrices.append(copy.deepcopy(matrix))
        return new

    def _nearest_index(self, target: float) -> int:
        if not self._frequencies:
            raise EmptyCollection(
                "Cannot search the nearest frequency in an empty collection."
            )
        try:
            target = float(target)
        except (TypeError, ValueError) as exc:
            raise InvalidArgument(f"Cannot convert {target!r} to a frequency.") from exc
        if math.isnan(target):
            raise InvalidArgument("Target frequency must not be NaN.")

        idx = bisect_left(self._frequencies, target)
        if idx == 0:
            if target < self._frequencies[0]:
                log.debug("Frequency %s Hz below stored band, clamped.", target)
            return 0
        if idx == len(self._frequencies):
            log.debug("Frequency %s Hz above stored band, clamped.", target)
            return idx - 1
        lower = self._frequencies[idx - 1]
        upper = self._frequencies[idx]
        # Ties go to the lower frequency.
        if upper - target < target - lower:
            return idx
        return idx - 1

    def nearest(self, target: float) -> TMatrix:
        """
        Get the matrix stored at the frequency closest to the target.

        Targets outside the stored band return the matrix at the closest band edge; a target
        exactly halfway between two stored frequencies returns the matrix at the lower one.

        Args:
            target (float): Frequency in Hz.

        Returns:
            TMatrix: Matrix at the nearest frequency.
        """
        return self._matrices[self._nearest_index(target)]

    def nearest_frequency(self, target: float) -> float:
        """
        Get the stored frequency closest to the target, with the rules of ``nearest``.

        Args:
            target (float): Frequency in Hz.

        Returns:
            float: Nearest stored frequency.
        """
        return self._frequencies[self._nearest_index(target)]

    def _nearest_indices(self, targets: np.ndarray | Frequencies) -> np.ndarray:
        if not self._frequencies:
            raise EmptyCollection(
                "Cannot search the nearest frequency in an empty collection."
            )
        if isinstance(targets, Frequencies):
            targets = targets.f
        targets = np.atleast_1d(np.asarray(targets, dtype=float))
        if np.isnan(targets).any():
            raise InvalidArgument("Target frequencies must not be NaN.")
        freqs = np.asarray(self._frequencies)
        idx = np.searchsorted(freqs, targets, side="left")
        upper = np.clip(idx, 0, len(freqs) - 1)
        lower = np.clip(idx - 1, 0, len(freqs) - 1)
        return np.where(freqs[upper] - targets < targets - freqs[lower], upper, lower)

    def nearest_many(self, targets: np.ndarray | Frequencies) -> list[TMatrix]:
        """
        Vectorized version of ``nearest``.

        Args:
            targets (numpy.ndarray | Frequencies): Target frequencies in Hz or a sweep definition.

        Returns:
            list[TMatrix]: Matrices at the nearest frequencies, one per target.
        """
        return [self._matrices[idx] for idx in self._nearest_indices(targets)]

    def resample(
        self, frequencies: np.ndarray | Frequencies
    ) -> NetworkParametersCollection[TMatrix]:
        """
        Return a new collection with the nearest matrix at each requested frequency.

        Args:
            frequencies (numpy.ndarray | Frequencies): New frequencies in Hz or a sweep definition.

        Returns:
            NetworkParametersCollection: Resampled collection holding copies of the matrices.
        """
        if isinstance(frequencies, Frequencies):
            frequencies = frequencies.f
        frequencies = np.array(
            [validate_frequency(f) for f in np.atleast_1d(frequencies)], dtype=float
        )
        indices = self._nearest_indices(frequencies)
        if frequencies.size and (
            frequencies.min() < self._frequencies[0]
            or frequencies.max() > self._frequencies[-1]
        ):
            log.warning(
                "Resampling out of stored frequency range, values are clamped to the band edges."
            )
        new = self.__class__(self._num_ports, self._matrix_type)
        for frequency, idx in zip(frequencies, indices):
            new.add(frequency, self._matrices[idx])
        return new

    def to_array(self) -> tuple[np.ndarray, np.ndarray]:
        """
        Return the collection contents as arrays.

        Returns:
            tuple[numpy.ndarray, numpy.ndarray]: Frequencies in Hz and complex array of shape
            (len(frequencies), num_ports, num_ports).
        """
        data = np.empty((len(self), self._num_ports, self._num_ports), dtype=np.complex128)
        for k, matrix in enumerate(self._matrices):
            data[k] = self._matrix_to_array(matrix)
        return self.frequencies, data

    def _converted_array(self, matrix_type: type) -> tuple[np.ndarray, np.ndarray]:
        freqs, data = self.to_array()
        if matrix_type is self._matrix_type:
            return freqs, data
        conversions = {
            (ScatteringParametersMatrix, TransferParametersMatrix): s2t,
            (TransferParametersMatrix, ScatteringParametersMatrix): t2s,
        }
        kernel = conversions.get((self._matrix_type, matrix_type))
        if kernel is None:
            raise InvalidArgument(
                f"Cannot convert {self._matrix_type.__name__} to {matrix_type.__name__}."
            )
        check_two_port(self._num_ports)
        return freqs, kernel(data)

    def convert(self, matrix_type: type) -> NetworkParametersCollection:
        """
        Return a new collection in another parameter representation.

        Args:
            matrix_type (type): Target matrix class.

        Returns:
            NetworkParametersCollection: Converted collection.
        """
        freqs, data = self._converted_array(matrix_type)
        return self.__class__.from_arrays(freqs, data, matrix_type)

    def to_network(self, z0: Impedance = 50, name: str | None = None) -> rf.Network:
        """
        Convert to scikit-rf Network.

        Args:
            z0 (Impedance): Reference impedance.
            name (str | None): Name of the network.

        Returns:
            rf.Network: scikit-rf Network with the S-parameters of the collection.
        """
        if not self:
            raise EmptyCollection("Cannot convert an empty collection to a network.")
        z0 = validate_impedance(z0)
        freqs, s_par = self._converted_array(ScatteringParametersMatrix)
        f = rf.Frequency.from_f(freqs, unit="Hz")
        return rf.Network(frequency=f, s=s_par, z0=z0, name=name)

    def cascade(self, *others: NetworkParametersCollection) -> NetworkParametersCollection:
        """
        Cascade this collection with the following ones.

        Args:
            *others (NetworkParametersCollection): Collections connected after this one.

        Returns:
            NetworkParametersCollection: Total network at every frequency.
        """
        return cascade(self, *others)


def cascade(*collections: NetworkParametersCollection) -> NetworkParametersCollection:
    """
    Cascade two-port collections connected in series, frequency by frequency.

    Every collection must hold every frequency of the union of their frequencies.

    Args:
        *collections (NetworkParametersCollection): Collections in connection order.

    Returns:
        NetworkParametersCollection: Total network, with the matrix type of the first collection.
    """
    if not collections:
        raise InvalidArgument("At least one collection is required for a cascade.")
    num_ports = collections[0].num_ports
    if any(collection.num_ports != num_ports for collection in collections):
        raise InvalidArgument(
            "All network parameter collections must have the same number of ports."
        )
    check_two_port(num_ports)
    all_freqs = sorted(set().union(*(collection.frequencies for collection in collections)))
    for collection in collections:
        missing = [f for f in all_freqs if f not in collection]
        if missing:
            raise NotFound(f"No value exists for frequency {missing[0]}.")

    log.debug(
        "Cascading %d collections over %d frequencies.", len(collections), len(all_freqs)
    )
    _, total = collections[0]._converted_array(TransferParametersMatrix)
    for collection in collections[1:]:
        _, tpar = collection._converted_array(TransferParametersMatrix)
        total = matmul_2x2(total, tpar)
    result = NetworkParametersCollection.from_arrays(
        all_freqs, total, TransferParametersMatrix
    )
    first_type = collections[0].matrix_type
    if first_type is TransferParametersMatrix:
        return result
    return result.convert(first_type)
