"""Type annotations and argument validators module."""

from __future__ import annotations

import math
import operator
from typing import TYPE_CHECKING, Annotated, Any, Protocol, Tuple, TypeAlias, runtime_checkable

import numpy as np
from pydantic import Field

from mwnetworks.exceptions import InvalidArgument

if TYPE_CHECKING:
    from mwnetworks.parameter import NetworkParameter

SweepFrequency = Annotated[float, Field(ge=0, allow_inf_nan=False)]
SweepStep = Annotated[float, Field(gt=0, allow_inf_nan=False)]
FrequencyList = list[SweepFrequency]
FrequencyArange = Tuple[SweepFrequency, SweepFrequency, SweepStep]
PortIndex = Tuple[int, int]
Impedance: TypeAlias = complex | float

complex_array: TypeAlias = np.ndarray[Any, np.dtype[np.complex128]]
float_array: TypeAlias = np.ndarray[Any, np.dtype[np.float64]]


@runtime_checkable
class PortMatrix(Protocol):
    """
    Capability required from the matrices stored in a collection.

    A port matrix is a square grid of network parameters with a fixed number of ports,
    constructible from the number of ports alone and indexed by 1-based ``(row, column)``.
    """

    def __init__(self, num_ports: int) -> None:
        ...

    @property
    def num_ports(self) -> int:
        """Number of ports of the matrix."""

    def __getitem__(self, index: PortIndex) -> NetworkParameter:
        ...

    def __setitem__(self, index: PortIndex, value: NetworkParameter) -> None:
        ...


def validate_impedance(Z: complex | float | str) -> complex | float:
    """Validate impedance value."""
    try:
        Z = complex(Z)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"Cannot convert {type(Z)} {Z} to complex number.") from exc
    if np.real(Z) < 0:
        raise InvalidArgument(f"Real part of impedance {Z} must be non-negative.")
    return Z


def validate_frequency(frequency: float) -> float:
    """
    Validate a frequency used as a storage key.

    Args:
        frequency (float): Frequency in Hz.

    Returns:
        float: The frequency converted to a Python float.
    """
    try:
        frequency = float(frequency)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"Cannot convert {frequency!r} to a frequency.") from exc
    if not math.isfinite(frequency):
        raise InvalidArgument(f"Frequency must be a finite number, got {frequency}.")
    if frequency < 0:
        raise InvalidArgument(f"Frequency must be non-negative, got {frequency}.")
    return frequency


def validate_port_count(num_ports: int) -> int:
    """
    Validate the number of ports of a network.

    Args:
        num_ports (int): Number of ports.

    Returns:
        int: The validated number of ports.
    """
    if isinstance(num_ports, bool):
        raise InvalidArgument("Number of ports must be an integer, got a boolean.")
    try:
        num_ports = operator.index(num_ports)
    except TypeError as exc:
        raise InvalidArgument(
            f"Number of ports must be an integer, got {type(num_ports).__name__}."
        ) from exc
    if num_ports < 1:
        raise InvalidArgument(f"Number of ports must be at least 1, got {num_ports}.")
    return num_ports


def validate_port(port: int, num_ports: int, name: str = "port") -> int:
    """
    Validate a 1-based port index.

    Args:
        port (int): Port index.
        num_ports (int): Number of ports of the network.
        name (str): Name of the index, used in error messages.

    Returns:
        int: The validated port index.
    """
    if isinstance(port, bool):
        raise InvalidArgument(f"Invalid index specified for {name}: {port}.")
    try:
        port = operator.index(port)
    except TypeError as exc:
        raise InvalidArgument(
            f"Invalid index specified for {name}: {port!r} is not an integer."
        ) from exc
    if port < 1 or port > num_ports:
        raise InvalidArgument(
            f"Invalid index specified for {name}. Valid values are from 1 to {num_ports}."
        )
    return port
