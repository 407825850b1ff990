# src/foodweb_engine/driver.py
"""Simulation driver backed by scipy.integrate.solve_ivp.

Contract:
- Validates the time span, the initial state length and the pool composition
  before any integration starts
- Samples the solution at start, start + step, ... up to stop
- Returns a Trajectory of shape (T, n_sp); a failed run raises instead of
  returning a partial trajectory
"""

from __future__ import annotations

import math
import warnings
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

import numpy as np
from numpy.typing import NDArray
from scipy.integrate import solve_ivp

from .config import SolverConfig
from .errors import (
    SimulationConfigError,
    raise_integration_error,
    raise_iteration_budget,
    raise_non_finite,
    raise_state_shape_error,
)
from .flux import RHSFunction, make_rhs

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from .context import ModelContext


_SPAN_ERROR: Final[str] = "stop ({stop}) must be greater than start ({start})"
_STEP_ERROR: Final[str] = "step must be finite and > 0, got {step}"
_DUPLICATE_TEMPERATURE_ERROR: Final[str] = (
    "temperatures must be unique; {T} K appears more than once"
)
_GRID_SHORT_WARNING: Final[str] = (
    "step={step} does not divide [{start}, {stop}]; the last output time is {last}"
)

# Relative tolerance used to decide whether the sampling grid lands on stop.
_GRID_RTOL: Final[float] = 1e-9


@dataclass(slots=True, frozen=True, eq=False)
class Trajectory:
    """Solved trajectory sampled at the requested output times.

    Attributes:
        t: Output times, shape (T,).
        y: States, shape (T, n_sp); row k is the state at t[k].
        nfev: Number of derivative evaluations performed by the solver.
        message: Solver termination message.
        dense: Solver interpolant when dense output was requested, else None.
    """

    t: NDArray[np.float64]
    y: NDArray[np.float64]
    nfev: int
    message: str
    dense: Any = None

    def __len__(self) -> int:
        return int(self.t.size)

    def __iter__(self) -> Iterator[tuple[float, NDArray[np.float64]]]:
        for k in range(self.t.size):
            yield float(self.t[k]), self.y[k]

    @property
    def n_sp(self) -> int:
        """Number of compartments per state."""
        return int(self.y.shape[1])

    @property
    def final_state(self) -> NDArray[np.float64]:
        """State at the last output time."""
        return self.y[-1]

    def compartment(self, idx: int) -> NDArray[np.float64]:
        """Time series of compartment ``idx``, shape (T,)."""
        return self.y[:, idx]

    def as_array(self) -> NDArray[np.float64]:
        """Return a (T, 1 + n_sp) float64 array with time in the first column."""
        return np.column_stack((self.t, self.y)).astype(np.float64)


def output_times(start: float, stop: float, step: float) -> NDArray[np.float64]:
    """
    Build the output time grid start, start + step, ... not exceeding stop.

    ``stop`` itself is included when it lies on the grid (within a relative
    tolerance), in which case the last entry is set to exactly ``stop``.

    Args:
        start: First output time.
        stop: Upper bound of the grid.
        step: Sampling interval.

    Raises:
        SimulationConfigError: if stop <= start or step is not positive.

    Returns:
        1D strictly increasing float64 array.
    """
    if not stop > start:
        raise SimulationConfigError(_SPAN_ERROR.format(start=start, stop=stop))
    if not (math.isfinite(step) and step > 0.0):
        raise SimulationConfigError(_STEP_ERROR.format(step=step))

    ratio = (stop - start) / step
    n_intervals = int(math.floor(ratio * (1.0 + _GRID_RTOL)))
    times = start + step * np.arange(n_intervals + 1, dtype=np.float64)

    if math.isclose(times[-1], stop, rel_tol=_GRID_RTOL, abs_tol=_GRID_RTOL):
        times[-1] = stop
    return np.minimum(times, stop)


def _guard_rhs(rhs: RHSFunction, cfg: SolverConfig) -> RHSFunction:
    """Wrap ``rhs`` with the evaluation budget and the finiteness check."""
    n_calls = 0

    def guarded(t: float, y: NDArray[np.floating]) -> NDArray[np.floating]:
        nonlocal n_calls
        n_calls += 1
        if n_calls > cfg.max_iters:
            raise_iteration_budget(t=t, max_iters=cfg.max_iters)

        du = rhs(t, y)
        if cfg.check_finite:
            bad = ~np.isfinite(du)
            if bad.any():
                raise_non_finite(t=t, indices=np.flatnonzero(bad).tolist())
        return du

    return guarded


def simulate(
    ctx: ModelContext,
    u0: Sequence[float] | NDArray[np.floating],
    start: float = 0.0,
    stop: float = 500.0,
    step: float = 1.0,
    *,
    config: SolverConfig | None = None,
) -> Trajectory:
    """
    Integrate the food web from ``start`` to ``stop``.

    Args:
        ctx: Model context (temperature, resource indices, ecosystem).
        u0: Initial state, one entry per compartment.
        start: Start time.
        stop: Stop time; must exceed ``start``.
        step: Output sampling interval.
        config: Integrator options; defaults to SolverConfig().

    Raises:
        SimulationConfigError: if the time span or step is invalid.
        StateShapeError: if u0 does not have one entry per compartment.
        EcosystemError: if the ecosystem lacks exactly one Cpool and one Spool.
        IntegrationError: if the integrator fails, the derivative becomes
            non-finite, or the evaluation budget runs out.

    Returns:
        Trajectory sampled at output_times(start, stop, step).
    """
    cfg = config or SolverConfig()

    times = output_times(start, stop, step)

    y0 = np.asarray(u0, dtype=np.float64)
    n_sp = ctx.n_sp
    if y0.shape != (n_sp,):
        raise_state_shape_error(name="u0", expected=f"({n_sp},)", got=y0.shape)

    ctx.eco.validate_pools()

    if times[-1] < stop:
        warnings.warn(
            _GRID_SHORT_WARNING.format(
                step=step, start=start, stop=stop, last=float(times[-1])
            ),
            RuntimeWarning,
            stacklevel=2,
        )

    rhs = _guard_rhs(make_rhs(ctx), cfg)
    sol = solve_ivp(
        rhs,
        (float(start), float(stop)),
        y0,
        t_eval=times,
        **cfg.to_solve_ivp_kwargs(),
    )

    if not sol.success:
        raise_integration_error(str(sol.message))

    return Trajectory(
        t=np.asarray(sol.t, dtype=np.float64),
        y=np.ascontiguousarray(np.asarray(sol.y, dtype=np.float64).T),
        nfev=int(sol.nfev),
        message=str(sol.message),
        dense=sol.sol if cfg.dense_output else None,
    )


def simulate_temperatures(
    ctx: ModelContext,
    u0: Sequence[float] | NDArray[np.floating],
    temperatures: Iterable[float],
    start: float = 0.0,
    stop: float = 500.0,
    step: float = 1.0,
    *,
    config: SolverConfig | None = None,
) -> dict[float, Trajectory]:
    """
    Run one independent simulation per temperature.

    Each run uses ``ctx.with_temperature(T)``; ecosystem, indices and initial
    state are shared. Temperatures are checked for duplicates before the
    first run; any failing run aborts the sweep.

    Args:
        ctx: Base model context.
        u0: Initial state shared by all runs.
        temperatures: Absolute temperatures (K).
        start: Start time.
        stop: Stop time.
        step: Output sampling interval.
        config: Integrator options shared by all runs.

    Raises:
        SimulationConfigError: if a temperature is given more than once.

    Returns:
        Mapping from temperature to its Trajectory, in input order.
    """
    y0 = np.asarray(u0, dtype=np.float64)
    temps = [float(T) for T in temperatures]
    seen: set[float] = set()
    for T in temps:
        if T in seen:
            raise SimulationConfigError(_DUPLICATE_TEMPERATURE_ERROR.format(T=T))
        seen.add(T)

    return {
        T: simulate(ctx.with_temperature(T), y0, start, stop, step, config=config)
        for T in temps
    }
