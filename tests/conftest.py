"""Global pytest configuration and shared fixtures for foodweb_engine."""

from __future__ import annotations

from typing import Final

import pytest

from foodweb_engine.compartments import Autotroph, Cpool, Ecosystem, Heterotroph, Spool
from foodweb_engine.context import ModelContext
from foodweb_engine.rates import TPC

# -----------------------------------------------------------------------------
# Shared constants
# -----------------------------------------------------------------------------

T_REF: Final[float] = 293.0


# -----------------------------------------------------------------------------
# Global markers registration safety (for local pytest runs)
# -----------------------------------------------------------------------------


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers used by the test suite."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as running the external ODE integrator",
    )


# -----------------------------------------------------------------------------
# Ecosystem fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def unit_tpc() -> TPC:
    """TPC that evaluates to 1.0 at every temperature (E = 0)."""
    return TPC(B0=1.0, E=0.0, Tr=T_REF)


@pytest.fixture
def single_species_ctx(unit_tpc: TPC) -> ModelContext:
    """
    One autotroph, an unlinked carbon pool and a nutrient pool.

    Layout: [Autotroph, Cpool, Spool]; s_i -> Spool, c_i -> Cpool.
    """
    eco = Ecosystem(
        sp=(
            Autotroph(epsilon=0.5, ks=1.0, P=unit_tpc, R=unit_tpc, D=0.01, a=0.001),
            Cpool(linked=False),
            Spool(R=1.0),
        )
    )
    return ModelContext(T=T_REF, s_i=2, c_i=1, eco=eco)


@pytest.fixture
def multi_species_ctx() -> ModelContext:
    """
    Two autotrophs, two heterotrophs and both pools, with pools mid-vector.

    Layout: [A1, H1, Spool, A2, Cpool(linked), H2]; s_i=2, c_i=4.
    """
    eco = Ecosystem(
        sp=(
            Autotroph(
                epsilon=0.6,
                ks=1.5,
                P=TPC(B0=1.2, E=0.32, Tr=T_REF),
                R=TPC(B0=0.2, E=0.65, Tr=T_REF),
                D=0.02,
                a=0.003,
            ),
            Heterotroph(
                epsilon=0.3,
                ks=0.8,
                kc=2.0,
                mu=TPC(B0=0.9, E=0.65, Tr=T_REF),
                R=TPC(B0=0.15, E=0.65, Tr=T_REF),
                D=0.01,
                a=0.002,
            ),
            Spool(R=2.5),
            Autotroph(
                epsilon=0.45,
                ks=0.5,
                P=TPC(B0=0.7, E=0.2, Tr=288.0),
                R=TPC(B0=0.1, E=0.5, Tr=288.0),
                D=0.03,
                a=0.001,
            ),
            Cpool(linked=True),
            Heterotroph(
                epsilon=0.25,
                ks=1.0,
                kc=1.0,
                mu=TPC(B0=1.1, E=0.4, Tr=298.0),
                R=TPC(B0=0.05, E=0.6, Tr=298.0),
                D=0.02,
                a=0.004,
            ),
        )
    )
    return ModelContext(T=296.0, s_i=2, c_i=4, eco=eco)
