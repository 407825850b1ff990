# src/foodweb_engine/flux.py
"""Per-compartment flux rules and derivative assembly.

Every compartment contributes one entry to dC/dt, computed as gain - loss:

- Autotroph:    C_i * eps * U_i - (C_i * R(T) + C_i * D + C_i^2 * a)
- Heterotroph:  same form, with U_i also limited by the second resource C[c_i]
- Cpool:        sum of carbon exported by living compartments minus the carbon
                drawn by heterotrophs (zero when the pool is not linked)
- Spool:        constant replenishment R minus nutrient taken up by living
                compartments

where U_i is the per-capita uptake rate shared by the flux rule and the two
export helpers (``carbon_out``, ``nutrient_out``). Routing all three through
``_uptake`` keeps gains and pool exchanges consistent with each other.

Pool aggregation visits living compartments only and skips the positions
``ctx.s_i`` and ``ctx.c_i``. Both indices always come from the context passed
to the call.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Final, assert_never

import numpy as np
from numpy.typing import NDArray

from .compartments import Autotroph, Compartment, Cpool, Heterotroph, Living, Spool
from .errors import raise_state_shape_error
from .rates import boltzmann, limit

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .context import ModelContext

    StateLike = NDArray[np.floating] | Sequence[float]


RHSFunction = Callable[[float, NDArray[np.floating]], NDArray[np.floating]]

_NOT_LIVING_MSG: Final[str] = "{kind} does not export carbon or nutrient"


# =============================================================================
# Shared uptake term
# =============================================================================


def _uptake(comp: Living, ctx: ModelContext, C: StateLike) -> float:
    """Per-capita gross uptake rate of a living compartment."""
    if isinstance(comp, Autotroph):
        return limit(C[ctx.s_i], comp.ks) * boltzmann(comp.P, ctx.T)
    if isinstance(comp, Heterotroph):
        return (
            limit(C[ctx.s_i], comp.ks)
            * boltzmann(comp.mu, ctx.T)
            * limit(C[ctx.c_i], comp.kc)
        )
    assert_never(comp)


def _require_living(comp: Compartment) -> Living:
    if isinstance(comp, (Autotroph, Heterotroph)):
        return comp
    raise TypeError(_NOT_LIVING_MSG.format(kind=type(comp).__name__))


def _loss(comp: Living, ctx: ModelContext, c: float) -> float:
    """Respiration, constant mortality and density-dependent loss."""
    return (c * boltzmann(comp.R, ctx.T)) + (c * comp.D) + (c * c * comp.a)


# =============================================================================
# Export helpers (pool point of view)
# =============================================================================


def carbon_out(comp: Compartment, ctx: ModelContext, C: StateLike, j: int) -> float:
    """
    Carbon returned to the carbon pool by living compartment ``j``.

    The unretained fraction of uptake, (1 - eps) * C_j * U_j, plus constant
    mortality C_j * D.

    Args:
        comp: Autotroph or Heterotroph at index ``j``.
        ctx: Model context.
        C: State vector.
        j: Index of ``comp`` in the ecosystem.

    Raises:
        TypeError: if ``comp`` is a pool.

    Returns:
        Carbon flux into the pool.
    """
    living = _require_living(comp)
    c = C[j]
    return (c * (1 - living.epsilon) * _uptake(living, ctx, C)) + (c * living.D)


def nutrient_out(comp: Compartment, ctx: ModelContext, C: StateLike, j: int) -> float:
    """
    Nutrient removed from the nutrient pool by living compartment ``j``.

    Gross uptake C_j * U_j, independent of retention efficiency.

    Args:
        comp: Autotroph or Heterotroph at index ``j``.
        ctx: Model context.
        C: State vector.
        j: Index of ``comp`` in the ecosystem.

    Raises:
        TypeError: if ``comp`` is a pool.

    Returns:
        Nutrient flux out of the pool.
    """
    living = _require_living(comp)
    return C[j] * _uptake(living, ctx, C)


def _pool_contributors(ctx: ModelContext) -> list[int]:
    """Living compartment indices that exchange with the pools."""
    return [
        j for j in ctx.eco.living_indices() if j != ctx.s_i and j != ctx.c_i
    ]


# =============================================================================
# Flux rules
# =============================================================================


def individual_flux(
    comp: Compartment, ctx: ModelContext, C: StateLike, i: int
) -> float:
    """
    Net rate of change (gain - loss) of the compartment at index ``i``.

    Args:
        comp: Compartment stored at ``ctx.eco.sp[i]``.
        ctx: Model context (temperature, resource indices, ecosystem).
        C: Current state vector.
        i: Index of ``comp``.

    Returns:
        dC_i/dt as a float.
    """
    if isinstance(comp, (Autotroph, Heterotroph)):
        gain = C[i] * comp.epsilon * _uptake(comp, ctx, C)
        return gain - _loss(comp, ctx, C[i])

    if isinstance(comp, Cpool):
        if not comp.linked:
            return 0.0
        gain = 0.0
        draw = 0.0
        for j in _pool_contributors(ctx):
            sp = ctx.eco.sp[j]
            gain += carbon_out(sp, ctx, C, j)
            # heterotroph uptake
            if isinstance(sp, Heterotroph):
                draw += C[j] * _uptake(sp, ctx, C)
        return gain - draw

    if isinstance(comp, Spool):
        out = 0.0
        for j in _pool_contributors(ctx):
            out += nutrient_out(ctx.eco.sp[j], ctx, C, j)
        return comp.R - out

    assert_never(comp)


# =============================================================================
# Derivative assembly
# =============================================================================


def derivative(C: StateLike, ctx: ModelContext) -> NDArray[np.float64]:
    """
    Assemble dC/dt for every compartment of ``ctx.eco``.

    Args:
        C: State vector of length ``ctx.n_sp``. Not modified.
        ctx: Model context.

    Raises:
        StateShapeError: if ``C`` is not 1D with ``ctx.n_sp`` entries.

    Returns:
        Float64 array with entry i equal to individual_flux(sp[i], ctx, C, i).
    """
    state = np.asarray(C, dtype=np.float64)
    n_sp = ctx.n_sp
    if state.shape != (n_sp,):
        raise_state_shape_error(name="state", expected=f"({n_sp},)", got=state.shape)

    du = np.empty(n_sp, dtype=np.float64)
    for i, comp in enumerate(ctx.eco.sp):
        du[i] = individual_flux(comp, ctx, state, i)
    return du


def make_rhs(ctx: ModelContext) -> RHSFunction:
    """
    Bind ``ctx`` into a solver-facing right-hand side rhs(t, y).

    The model is autonomous; ``t`` is accepted for the solver signature only.

    Args:
        ctx: Model context.

    Returns:
        Callable rhs(t, y) -> dy with dy of shape (n_sp,).
    """

    def rhs(t: float, y: NDArray[np.floating]) -> NDArray[np.floating]:
        del t
        return derivative(y, ctx)

    return rhs
