# src/foodweb_engine/constants.py
"""Physical constants shared by the rate functions."""

from __future__ import annotations

from typing import Final

from scipy.constants import physical_constants

# Boltzmann constant in eV/K; activation energies E are expressed in eV.
BOLTZMANN_EV: Final[float] = float(physical_constants["Boltzmann constant in eV/K"][0])
