"""
Definition of class for frequency sweeps.

This module defines the `Frequencies` class for describing a sweep of frequencies with a variable unit
of measure. The sweep can be provided either as a list or as a tuple that will be passed to
`numpy.arange`, and is always returned in Hz, the unit used by network parameter collections.
"""

from typing import Literal, Optional

import numpy as np
from pydantic import Field, PrivateAttr

from mwnetworks.basemodel import BaseModel
from mwnetworks.typing import FrequencyArange, FrequencyList


class Frequencies(BaseModel):
    """Frequency sweep with variable unit."""

    f_list: Optional[FrequencyList] = Field(
        default=None, description="List of frequencies"
    )
    f_arange: Optional[FrequencyArange] = Field(
        default=None,
        description="Tuple passed to numpy.arange to construct the frequency sweep.",
    )
    unit: Literal["Hz", "kHz", "MHz", "GHz", "THz"] = Field(default="GHz", repr=False)
    _unit_multipliers: dict[str, float] = PrivateAttr(
        {"Hz": 1, "kHz": 1e3, "MHz": 1e6, "GHz": 1e9, "THz": 1e12}
    )

    @property
    def f(self) -> np.ndarray:
        """
        Computed frequencies array in Hz.

        Returns:
            numpy.ndarray: Array of computed frequencies.
        """
        if self.f_arange:
            freqs = np.arange(*list(self.f_arange))
        elif self.f_list:
            freqs = np.array(self.f_list)
        else:
            return np.array([])
        return self._unit_multipliers[self.unit] * freqs

    @property
    def unit_multiplier(self) -> float:
        """
        Get multiplier of chosen unit of measure.

        Returns:
            float: Multiplier corresponding to the unit of measure.
        """
        return self._unit_multipliers[self.unit]
