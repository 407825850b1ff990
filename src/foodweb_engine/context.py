# src/foodweb_engine/context.py
"""Read-only parameter context passed to every flux evaluation."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from numbers import Integral
from typing import TYPE_CHECKING, Final

from .errors import ContextError

if TYPE_CHECKING:
    from .compartments import Ecosystem


_TEMPERATURE_ERROR: Final[str] = "Temperature T must be finite and > 0 (K), got {T}"
_INDEX_OOB_ERROR: Final[str] = "{name}={idx} out of bounds for ecosystem of size {n_sp}"
_INDEX_TYPE_ERROR: Final[str] = "{name} must be an int, got {kind}"
_INDEX_COLLISION_ERROR: Final[str] = "s_i and c_i must differ, both are {idx}"


@dataclass(slots=True, frozen=True)
class ModelContext:
    """Temperature, resource indices and ecosystem for one simulation.

    Attributes:
        T: Absolute temperature (K).
        s_i: Index of the shared resource (nutrient) compartment.
        c_i: Index of the second resource compartment limiting heterotrophs.
        eco: Ecosystem the indices refer to.
    """

    T: float
    s_i: int
    c_i: int
    eco: Ecosystem

    def __post_init__(self) -> None:
        """
        Validate temperature and indices once, at construction.

        Raises:
            ContextError: if T is not a positive finite number, an index is out
                of bounds, or s_i == c_i.
        """
        if not (math.isfinite(self.T) and self.T > 0.0):
            raise ContextError(_TEMPERATURE_ERROR.format(T=self.T))

        n_sp = self.eco.n_sp
        for name, idx in (("s_i", self.s_i), ("c_i", self.c_i)):
            if isinstance(idx, bool) or not isinstance(idx, Integral):
                raise ContextError(
                    _INDEX_TYPE_ERROR.format(name=name, kind=type(idx).__name__)
                )
            if not (0 <= idx < n_sp):
                raise ContextError(
                    _INDEX_OOB_ERROR.format(name=name, idx=idx, n_sp=n_sp)
                )

        if self.s_i == self.c_i:
            raise ContextError(_INDEX_COLLISION_ERROR.format(idx=self.s_i))

    @property
    def n_sp(self) -> int:
        """Number of compartments in the attached ecosystem."""
        return self.eco.n_sp

    def with_temperature(self, T: float) -> ModelContext:
        """
        Return a copy of this context at a different temperature.

        Args:
            T: New absolute temperature (K).

        Returns:
            New validated ModelContext sharing the same ecosystem and indices.
        """
        return replace(self, T=float(T))
