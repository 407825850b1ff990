# src/foodweb_engine/rates.py
"""Temperature and resource scalings for metabolic rates.

Two leaf functions feed every flux rule:

- ``boltzmann``: Boltzmann-Arrhenius scaling of a reference rate B0 measured at
  the reference temperature Tr.
- ``limit``: Michaelis-Menten saturation of a resource concentration.

Neither function guards its domain. Arithmetic runs on NumPy float64 with
floating-point warnings silenced, so a zero or negative temperature, or a
resource and half-saturation that are both zero, come back as non-finite
floats instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

import numpy as np

from .constants import BOLTZMANN_EV
from .errors import EcosystemError

_TR_POSITIVE_ERROR: Final[str] = "TPC reference temperature Tr must be > 0, got {Tr}"
_B0_NEGATIVE_ERROR: Final[str] = "TPC reference rate B0 must be >= 0, got {B0}"


@dataclass(slots=True, frozen=True)
class TPC:
    """Thermal-performance parameters for one metabolic rate.

    Attributes:
        B0: Rate at the reference temperature.
        E: Activation energy (eV).
        Tr: Reference temperature (K).
    """

    B0: float
    E: float
    Tr: float

    def __post_init__(self) -> None:
        """Validate rate and reference temperature.

        Raises:
            EcosystemError: if B0 is negative or Tr is not positive.
        """
        if not self.B0 >= 0.0:
            raise EcosystemError(_B0_NEGATIVE_ERROR.format(B0=self.B0))
        if not self.Tr > 0.0:
            raise EcosystemError(_TR_POSITIVE_ERROR.format(Tr=self.Tr))


def boltzmann(p: TPC, T: float) -> float:
    """
    Metabolic rate of ``p`` at absolute temperature ``T``.

    Args:
        p: Thermal-performance parameters.
        T: Absolute temperature (K). Callers guarantee T > 0.

    Returns:
        B0 * exp((-E / k) * (1/T - 1/Tr)) as a float.
    """
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        inv_t = np.float64(1.0) / np.float64(T)
        return float(p.B0 * np.exp((-p.E / BOLTZMANN_EV) * (inv_t - 1.0 / p.Tr)))


def limit(N: float, kN: float) -> float:
    """
    Michaelis-Menten limitation term, N / (N + kN), ranging over [0, 1).

    Args:
        N: Resource concentration.
        kN: Half-saturation constant.

    Returns:
        Saturating multiplier as a float (nan when N == kN == 0).
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(N) / (np.float64(N) + np.float64(kN)))
