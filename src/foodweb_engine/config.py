# src/foodweb_engine/config.py
"""Configuration models for foodweb_engine.

This module defines pydantic-facing configuration objects (suitable for JSON
files or plain dicts) and translates them into the native frozen dataclasses
used by the model: :class:`~foodweb_engine.rates.TPC`, the compartment kinds,
:class:`~foodweb_engine.compartments.Ecosystem` and
:class:`~foodweb_engine.context.ModelContext`.

Notes:
    - Schema problems (wrong types, negative rates, unknown ``kind``) surface as
      ``pydantic.ValidationError``.
    - Cross-field invariants (index bounds, s_i != c_i) are enforced by the
      native dataclasses and surface as ``ContextError``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .compartments import Autotroph, Compartment, Cpool, Ecosystem, Heterotroph, Spool
from .context import ModelContext
from .rates import TPC

SolverMethod = Literal["RK45", "RK23", "DOP853", "Radau", "BDF", "LSODA"]


class SolverConfig(BaseModel):
    """Options forwarded to the external integrator (scipy.integrate.solve_ivp).

    Defaults follow the reference driver: internal steps are capped at one
    time unit and the evaluation budget is effectively unbounded.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    method: SolverMethod = Field(
        default="RK45",
        description="solve_ivp integration method",
    )

    max_step: float = Field(default=1.0, gt=0.0)
    max_iters: int = Field(
        default=10**10,
        gt=0,
        description=(
            "Maximum number of derivative evaluations per run. This counts rhs "
            "calls, not solver steps; an RK45 step costs about six evaluations"
        ),
    )

    rtol: float = Field(default=1e-6, ge=0.0)
    atol: float = Field(default=1e-9, ge=0.0)

    dense_output: bool = Field(
        default=False,
        description="Keep the solver interpolant on the returned trajectory",
    )
    check_finite: bool = Field(
        default=True,
        description="Fail fast when the derivative contains NaN or inf",
    )

    def to_solve_ivp_kwargs(self) -> dict[str, Any]:
        """Convert this config to keyword arguments for solve_ivp.

        Returns:
            Mapping of solve_ivp keyword arguments (excluding fun, t_span, y0,
            t_eval).
        """
        return {
            "method": self.method,
            "max_step": self.max_step,
            "rtol": self.rtol,
            "atol": self.atol,
            "dense_output": self.dense_output,
        }


class TPCConfig(BaseModel):
    """Thermal-performance parameters."""

    model_config = ConfigDict(extra="forbid")

    B0: float = Field(ge=0.0)
    E: float
    Tr: float = Field(gt=0.0)

    def to_tpc(self) -> TPC:
        """Build the native TPC record."""
        return TPC(B0=self.B0, E=self.E, Tr=self.Tr)


class AutotrophConfig(BaseModel):
    """Autotroph compartment."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["autotroph"] = "autotroph"
    epsilon: float = Field(ge=0.0, le=1.0)
    ks: float = Field(ge=0.0)
    P: TPCConfig
    R: TPCConfig
    D: float = Field(ge=0.0)
    a: float = Field(ge=0.0)

    def to_compartment(self) -> Autotroph:
        """Build the native Autotroph."""
        return Autotroph(
            epsilon=self.epsilon,
            ks=self.ks,
            P=self.P.to_tpc(),
            R=self.R.to_tpc(),
            D=self.D,
            a=self.a,
        )


class HeterotrophConfig(BaseModel):
    """Heterotroph compartment."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["heterotroph"] = "heterotroph"
    epsilon: float = Field(ge=0.0, le=1.0)
    ks: float = Field(ge=0.0)
    kc: float = Field(ge=0.0)
    mu: TPCConfig
    R: TPCConfig
    D: float = Field(ge=0.0)
    a: float = Field(ge=0.0)

    def to_compartment(self) -> Heterotroph:
        """Build the native Heterotroph."""
        return Heterotroph(
            epsilon=self.epsilon,
            ks=self.ks,
            kc=self.kc,
            mu=self.mu.to_tpc(),
            R=self.R.to_tpc(),
            D=self.D,
            a=self.a,
        )


class CpoolConfig(BaseModel):
    """Carbon pool compartment."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["cpool"] = "cpool"
    linked: bool = True

    def to_compartment(self) -> Cpool:
        """Build the native Cpool."""
        return Cpool(linked=self.linked)


class SpoolConfig(BaseModel):
    """Nutrient pool compartment."""

    model_config = ConfigDict(extra="forbid")

    kind: Literal["spool"] = "spool"
    R: float = Field(ge=0.0)

    def to_compartment(self) -> Spool:
        """Build the native Spool."""
        return Spool(R=self.R)


CompartmentConfig = Annotated[
    AutotrophConfig | HeterotrophConfig | CpoolConfig | SpoolConfig,
    Field(discriminator="kind"),
]


class EcosystemConfig(BaseModel):
    """Complete model setup: ordered compartments, temperature and indices.

    Example (JSON)::

        {
          "T": 293.0, "s_i": 2, "c_i": 1,
          "compartments": [
            {"kind": "autotroph", "epsilon": 0.5, "ks": 1.0, "D": 0.01,
             "a": 0.001, "P": {"B0": 1, "E": 0, "Tr": 293},
             "R": {"B0": 1, "E": 0, "Tr": 293}},
            {"kind": "cpool", "linked": false},
            {"kind": "spool", "R": 1.0}
          ]
        }
    """

    model_config = ConfigDict(extra="forbid")

    compartments: list[CompartmentConfig] = Field(min_length=1)
    T: float = Field(gt=0.0)
    s_i: int = Field(ge=0)
    c_i: int = Field(ge=0)

    def to_ecosystem(self) -> Ecosystem:
        """Build the native Ecosystem, preserving compartment order."""
        sp: tuple[Compartment, ...] = tuple(
            comp.to_compartment() for comp in self.compartments
        )
        return Ecosystem(sp=sp)

    def to_context(self) -> ModelContext:
        """Build a validated ModelContext.

        Raises:
            ContextError: if s_i/c_i are out of bounds or equal.

        Returns:
            ModelContext bound to a freshly built Ecosystem.
        """
        return ModelContext(
            T=self.T, s_i=self.s_i, c_i=self.c_i, eco=self.to_ecosystem()
        )


def load_ecosystem_config(path: str | Path) -> EcosystemConfig:
    """Read and validate an EcosystemConfig from a JSON file.

    Args:
        path: Path to the JSON document.

    Returns:
        Validated EcosystemConfig.
    """
    text = Path(path).read_text(encoding="utf-8")
    return EcosystemConfig.model_validate_json(text)
