"""
``mwnetworks`` package.

Mwnetworks: Frequency-Indexed Network Parameters
================================================

``mwnetworks`` is a Python library for handling frequency-dependent network parameters
(scattering and transfer parameters) of RF and microwave networks.

Key Features
------------

**Network Parameters:**
    - Immutable complex values with linear/dB magnitude and radian/degree phase views
    - Construction from rectangular or polar coordinates, in linear units or dB
    - Complex arithmetic returning new immutable values

**Port Matrices:**
    - Square S and T parameter matrices with 1-based port indexing
    - S/T conversions and cascade of two-port networks
    - Flattening in source-port-major or destination-port-major order

**Frequency Collections:**
    - Sparse datasets of port matrices always sorted by frequency
    - Exact, ranged and nearest-frequency lookup with binary search
    - Vectorized resampling, collection cascade and scikit-rf interoperability

Core Classes
------------
* :class:`~mwnetworks.parameter.NetworkParameter`: Immutable complex network parameter
* :class:`~mwnetworks.matrices.ScatteringParametersMatrix`: S-parameters port matrix
* :class:`~mwnetworks.matrices.TransferParametersMatrix`: T-parameters port matrix
* :class:`~mwnetworks.collection.NetworkParametersCollection`: Frequency-indexed collection
* :class:`~mwnetworks.frequency.Frequencies`: Frequency sweep definition
"""

import importlib.metadata as im

__version__ = im.version(__package__)

from mwnetworks.collection import (
    FrequencyParametersPair,
    NetworkParametersCollection,
    cascade,
)
from mwnetworks.exceptions import (
    EmptyCollection,
    InvalidArgument,
    NetworkParameterError,
    NotFound,
)
from mwnetworks.frequency import Frequencies
from mwnetworks.matrices import (
    ListFormat,
    NetworkParametersMatrix,
    ScatteringParametersMatrix,
    TransferParametersMatrix,
)
from mwnetworks.parameter import NetworkParameter, compare_magnitude_phase
