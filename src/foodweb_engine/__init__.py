"""foodweb_engine temperature-dependent food web metabolism package."""

from __future__ import annotations

from .compartments import Autotroph, Compartment, Cpool, Ecosystem, Heterotroph, Spool
from .config import (
    AutotrophConfig,
    CpoolConfig,
    EcosystemConfig,
    HeterotrophConfig,
    SolverConfig,
    SpoolConfig,
    TPCConfig,
    load_ecosystem_config,
)
from .constants import BOLTZMANN_EV
from .context import ModelContext
from .errors import (
    ContextError,
    EcosystemError,
    FoodWebError,
    IntegrationError,
    IterationBudgetError,
    NonFiniteDerivativeError,
    SimulationConfigError,
    StateShapeError,
)
from .flux import (
    RHSFunction,
    carbon_out,
    derivative,
    individual_flux,
    make_rhs,
    nutrient_out,
)
from .rates import TPC, boltzmann, limit
from .driver import Trajectory, output_times, simulate, simulate_temperatures

__all__ = [
    "BOLTZMANN_EV",
    "TPC",
    "Autotroph",
    "AutotrophConfig",
    "Compartment",
    "ContextError",
    "Cpool",
    "CpoolConfig",
    "Ecosystem",
    "EcosystemConfig",
    "EcosystemError",
    "FoodWebError",
    "Heterotroph",
    "HeterotrophConfig",
    "IntegrationError",
    "IterationBudgetError",
    "ModelContext",
    "NonFiniteDerivativeError",
    "RHSFunction",
    "SimulationConfigError",
    "SolverConfig",
    "Spool",
    "SpoolConfig",
    "StateShapeError",
    "TPCConfig",
    "Trajectory",
    "boltzmann",
    "carbon_out",
    "derivative",
    "individual_flux",
    "limit",
    "load_ecosystem_config",
    "make_rhs",
    "nutrient_out",
    "output_times",
    "simulate",
    "simulate_temperatures",
]

__version__ = "0.1.0"
