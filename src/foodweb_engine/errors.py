# src/foodweb_engine/errors.py
"""Error types and standardized raise helpers for foodweb_engine.

This module centralizes:
- explicit error classes with actionable messages, and
- small helpers that build those messages consistently.

Design intent:
- precondition violations (shapes, pool counts, time spans) fail fast before
  any integration begins
- solver failures are surfaced as IntegrationError and never replaced by a
  truncated or zero-filled trajectory
"""

from __future__ import annotations

from typing import Final

_POOL_COUNT_MSG: Final[str] = (
    "Ecosystem must contain exactly one {kind} compartment; found {count}."
)
_STATE_SHAPE_MSG: Final[str] = (
    "{name} has an invalid shape/value. Expected {expected}. Got: {got!r}."
)
_INTEGRATION_MSG: Final[str] = "Integration failed: {message}"
_NON_FINITE_MSG: Final[str] = (
    "Derivative evaluation produced non-finite values at t={t!r} "
    "(compartment indices {indices})."
)
_BUDGET_MSG: Final[str] = (
    "Exceeded max_iters={max_iters} derivative evaluations at t={t!r}."
)


class FoodWebError(Exception):
    """Base exception for foodweb_engine errors."""


class EcosystemError(FoodWebError, ValueError):
    """Raised when compartments or their composition are invalid."""


class ContextError(FoodWebError, ValueError):
    """Raised when a model context violates its index or temperature invariants."""


class SimulationConfigError(FoodWebError, ValueError):
    """Raised when simulate() receives an invalid time span or sampling interval."""


class StateShapeError(FoodWebError, ValueError):
    """Raised when a state vector does not match the ecosystem size."""


class IntegrationError(FoodWebError, RuntimeError):
    """Raised when the external integrator does not complete a run."""


class NonFiniteDerivativeError(IntegrationError):
    """Raised when the derivative contains NaN or infinite entries."""


class IterationBudgetError(IntegrationError):
    """Raised when a run exceeds its derivative evaluation budget."""


def raise_pool_count_error(*, kind: str, count: int) -> None:
    """Raise a standardized EcosystemError for a wrong number of pools.

    Args:
        kind: Pool class name (for example, "Cpool").
        count: Number of compartments of that kind that were found.

    Raises:
        EcosystemError: Always.
    """
    raise EcosystemError(_POOL_COUNT_MSG.format(kind=kind, count=count))


def raise_state_shape_error(*, name: str, expected: str, got: object) -> None:
    """Raise a standardized StateShapeError.

    Args:
        name: Name of the object with the shape issue.
        expected: Human-readable expected shape description.
        got: Actual observed shape/value.

    Raises:
        StateShapeError: Always.
    """
    raise StateShapeError(_STATE_SHAPE_MSG.format(name=name, expected=expected, got=got))


def raise_integration_error(message: str) -> None:
    """Raise a standardized IntegrationError carrying the solver message.

    Args:
        message: Status message reported by the integrator.

    Raises:
        IntegrationError: Always.
    """
    raise IntegrationError(_INTEGRATION_MSG.format(message=message))


def raise_non_finite(*, t: float, indices: list[int]) -> None:
    """Raise a standardized NonFiniteDerivativeError.

    Args:
        t: Solver time at which the derivative was evaluated.
        indices: Compartment indices holding non-finite values.

    Raises:
        NonFiniteDerivativeError: Always.
    """
    raise NonFiniteDerivativeError(_NON_FINITE_MSG.format(t=t, indices=indices))


def raise_iteration_budget(*, t: float, max_iters: int) -> None:
    """Raise a standardized IterationBudgetError.

    Args:
        t: Solver time at which the budget ran out.
        max_iters: Configured evaluation budget.

    Raises:
        IterationBudgetError: Always.
    """
    raise IterationBudgetError(_BUDGET_MSG.format(t=t, max_iters=max_iters))
