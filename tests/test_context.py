"""Unit tests for foodweb_engine.context.ModelContext."""

from __future__ import annotations

import numpy as np
import pytest

from foodweb_engine.context import ModelContext
from foodweb_engine.errors import ContextError


def test_context_exposes_fields(single_species_ctx: ModelContext) -> None:
    """Fields and n_sp reflect construction arguments."""
    ctx = single_species_ctx
    assert ctx.T == 293.0
    assert ctx.s_i == 2
    assert ctx.c_i == 1
    assert ctx.n_sp == 3


@pytest.mark.parametrize("T", [0.0, -10.0, float("nan"), float("inf")])
def test_context_rejects_invalid_temperature(
    single_species_ctx: ModelContext, T: float
) -> None:
    """Temperature must be a positive finite absolute value."""
    with pytest.raises(ContextError, match="Temperature"):
        ModelContext(T=T, s_i=2, c_i=1, eco=single_species_ctx.eco)


@pytest.mark.parametrize(("s_i", "c_i"), [(3, 1), (2, -1), (-1, 0), (2, 99)])
def test_context_rejects_out_of_bounds_indices(
    single_species_ctx: ModelContext, s_i: int, c_i: int
) -> None:
    """Indices are bounds-checked once, at construction."""
    with pytest.raises(ContextError, match="out of bounds"):
        ModelContext(T=293.0, s_i=s_i, c_i=c_i, eco=single_species_ctx.eco)


def test_context_rejects_equal_indices(single_species_ctx: ModelContext) -> None:
    """The shared resource and the second resource must be distinct."""
    with pytest.raises(ContextError, match="must differ"):
        ModelContext(T=293.0, s_i=2, c_i=2, eco=single_species_ctx.eco)


def test_context_rejects_non_integer_indices(single_species_ctx: ModelContext) -> None:
    """Floats and bools are not valid indices."""
    eco = single_species_ctx.eco
    with pytest.raises(ContextError, match="must be an int"):
        ModelContext(T=293.0, s_i=2.0, c_i=1, eco=eco)  # type: ignore[arg-type]
    with pytest.raises(ContextError, match="must be an int"):
        ModelContext(T=293.0, s_i=2, c_i=True, eco=eco)


def test_context_accepts_numpy_integer_indices(
    single_species_ctx: ModelContext,
) -> None:
    """NumPy integer indices are accepted."""
    ctx = ModelContext(
        T=293.0, s_i=np.int64(2), c_i=np.int64(1), eco=single_species_ctx.eco
    )  # type: ignore[arg-type]
    assert ctx.s_i == 2


def test_with_temperature_returns_new_context(single_species_ctx: ModelContext) -> None:
    """with_temperature copies the context and leaves the original untouched."""
    warmer = single_species_ctx.with_temperature(303.0)

    assert warmer is not single_species_ctx
    assert warmer.T == 303.0
    assert warmer.eco is single_species_ctx.eco
    assert (warmer.s_i, warmer.c_i) == (2, 1)
    assert single_species_ctx.T == 293.0


def test_with_temperature_revalidates(single_species_ctx: ModelContext) -> None:
    """The copy goes through the same validation."""
    with pytest.raises(ContextError):
        single_species_ctx.with_temperature(0.0)


def test_context_is_frozen(single_species_ctx: ModelContext) -> None:
    """Contexts are read-only."""
    with pytest.raises(AttributeError):
        single_species_ctx.T = 300.0  # type: ignore[misc]
