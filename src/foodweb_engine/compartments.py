# src/foodweb_engine/compartments.py
"""Compartment kinds and the Ecosystem that orders them.

The set of compartment kinds is closed: two living kinds (Autotroph,
Heterotroph) and two shared pools (Cpool for carbon, Spool for nutrient).
``Compartment`` is their union; code dispatching over it ends each
``isinstance`` chain with ``assert_never`` so a missing branch is a type error.

Physiological parameters are checked once at construction. Pool counts are
not: an Ecosystem may hold any mix of compartments, and the simulation driver
calls :meth:`Ecosystem.validate_pools` before integrating.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, TypeAlias

from .errors import EcosystemError, raise_pool_count_error

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .rates import TPC


_NEGATIVE_PARAM_ERROR: Final[str] = "{kind}.{name} must be >= 0, got {value}"
_EPSILON_RANGE_ERROR: Final[str] = "{kind}.epsilon must lie in [0, 1], got {value}"
_KIND_NOT_FOUND_ERROR: Final[str] = "Ecosystem has no {kind} compartment"


def _check_non_negative(kind: str, **params: float) -> None:
    for name, value in params.items():
        if not value >= 0.0:
            raise EcosystemError(
                _NEGATIVE_PARAM_ERROR.format(kind=kind, name=name, value=value)
            )


def _check_epsilon(kind: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise EcosystemError(_EPSILON_RANGE_ERROR.format(kind=kind, value=value))


@dataclass(slots=True, frozen=True)
class Autotroph:
    """Primary producer limited by a single shared resource.

    Attributes:
        epsilon: Fraction of uptake retained as biomass.
        ks: Half-saturation constant for the shared resource.
        P: Thermal-performance parameters of photosynthesis.
        R: Thermal-performance parameters of respiration.
        D: Density-independent loss rate.
        a: Density-dependent (self-limitation) loss coefficient.
    """

    epsilon: float
    ks: float
    P: TPC
    R: TPC
    D: float
    a: float

    def __post_init__(self) -> None:
        """Validate parameter ranges.

        Raises:
            EcosystemError: if any rate is negative or epsilon is outside [0, 1].
        """
        _check_epsilon("Autotroph", self.epsilon)
        _check_non_negative("Autotroph", ks=self.ks, D=self.D, a=self.a)


@dataclass(slots=True, frozen=True)
class Heterotroph:
    """Consumer limited by the shared resource and a second resource.

    Attributes:
        epsilon: Fraction of uptake retained as biomass.
        ks: Half-saturation constant for the shared resource.
        kc: Half-saturation constant for the second (consumed) resource.
        mu: Thermal-performance parameters of consumption/growth.
        R: Thermal-performance parameters of respiration.
        D: Density-independent loss rate.
        a: Density-dependent (self-limitation) loss coefficient.
    """

    epsilon: float
    ks: float
    kc: float
    mu: TPC
    R: TPC
    D: float
    a: float

    def __post_init__(self) -> None:
        """Validate parameter ranges.

        Raises:
            EcosystemError: if any rate is negative or epsilon is outside [0, 1].
        """
        _check_epsilon("Heterotroph", self.epsilon)
        _check_non_negative("Heterotroph", ks=self.ks, kc=self.kc, D=self.D, a=self.a)


@dataclass(slots=True, frozen=True)
class Cpool:
    """Shared carbon pool. An unlinked pool is inert (zero flux)."""

    linked: bool = True


@dataclass(slots=True, frozen=True)
class Spool:
    """Shared nutrient pool with constant external replenishment ``R``."""

    R: float

    def __post_init__(self) -> None:
        """Validate the replenishment rate.

        Raises:
            EcosystemError: if R is negative.
        """
        _check_non_negative("Spool", R=self.R)


Compartment: TypeAlias = Autotroph | Heterotroph | Cpool | Spool
Living: TypeAlias = Autotroph | Heterotroph


@dataclass(slots=True, frozen=True)
class Ecosystem:
    """Ordered, immutable collection of compartments.

    The position of a compartment in ``sp`` is its index in every state and
    derivative vector.
    """

    sp: tuple[Compartment, ...]

    def __post_init__(self) -> None:
        """Freeze ``sp`` into a tuple so list input cannot be mutated later."""
        object.__setattr__(self, "sp", tuple(self.sp))

    @property
    def n_sp(self) -> int:
        """Number of compartments."""
        return len(self.sp)

    def __len__(self) -> int:
        return len(self.sp)

    def __iter__(self) -> Iterator[Compartment]:
        return iter(self.sp)

    def count(self, kind: type[Compartment]) -> int:
        """
        Count compartments of a given kind.

        Args:
            kind: Compartment class (for example, Cpool).

        Returns:
            Number of compartments that are instances of ``kind``.
        """
        return sum(1 for comp in self.sp if isinstance(comp, kind))

    def index_of(self, kind: type[Compartment]) -> int:
        """
        Return the index of the first compartment of a given kind.

        Args:
            kind: Compartment class.

        Raises:
            EcosystemError: if no compartment of that kind exists.

        Returns:
            Index into ``sp``.
        """
        for idx, comp in enumerate(self.sp):
            if isinstance(comp, kind):
                return idx
        raise EcosystemError(_KIND_NOT_FOUND_ERROR.format(kind=kind.__name__))

    def living_indices(self) -> tuple[int, ...]:
        """Indices of all Autotroph and Heterotroph compartments."""
        return tuple(
            idx
            for idx, comp in enumerate(self.sp)
            if isinstance(comp, (Autotroph, Heterotroph))
        )

    def validate_pools(self) -> None:
        """
        Require exactly one Cpool and exactly one Spool.

        Raises:
            EcosystemError: if either pool is missing or duplicated.
        """
        for kind in (Cpool, Spool):
            n = self.count(kind)
            if n != 1:
                raise_pool_count_error(kind=kind.__name__, count=n)
