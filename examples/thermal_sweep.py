# foodweb_engine/examples/thermal_sweep.py
"""Warming sweep over a small plankton food web using simulate_temperatures().

The web holds two autotrophs, one heterotroph feeding on the carbon pool, a
linked carbon pool and a replenished nutrient pool:

    [A_small, A_large, Spool, H, Cpool]

Every metabolic rate follows a Boltzmann response around its own reference
temperature, so warming speeds up photosynthesis, uptake and respiration at
different rates. We integrate the same web at several temperatures and
compare:

- full trajectories at the coldest and warmest temperature
- end-of-run biomass of every compartment against temperature

This script saves plots to disk (no interactive windows).
"""

from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import numpy as np

from foodweb_engine import (
    TPC,
    Autotroph,
    Cpool,
    Ecosystem,
    Heterotroph,
    ModelContext,
    SolverConfig,
    Spool,
    Trajectory,
    simulate_temperatures,
)

_OUTPUT_DIR = Path(__file__).resolve().parent / "output" / "thermal_sweep"

_LABELS: tuple[str, ...] = ("A_small", "A_large", "Spool", "H", "Cpool")

T_REF: float = 293.15
TEMPERATURES: tuple[float, ...] = (283.15, 288.15, 293.15, 298.15, 303.15)


def build_context(T: float = T_REF) -> ModelContext:
    """Assemble the example web at temperature T.

    Args:
        T: Absolute temperature (K).

    Returns:
        ModelContext with s_i -> Spool and c_i -> Cpool.
    """
    eco = Ecosystem(
        sp=(
            Autotroph(
                epsilon=0.6,
                ks=0.5,
                P=TPC(B0=1.4, E=0.32, Tr=T_REF),
                R=TPC(B0=0.15, E=0.65, Tr=T_REF),
                D=0.02,
                a=0.004,
            ),
            Autotroph(
                epsilon=0.5,
                ks=2.0,
                P=TPC(B0=1.0, E=0.32, Tr=T_REF),
                R=TPC(B0=0.08, E=0.65, Tr=T_REF),
                D=0.01,
                a=0.002,
            ),
            Spool(R=2.0),
            Heterotroph(
                epsilon=0.35,
                ks=1.0,
                kc=1.5,
                mu=TPC(B0=0.8, E=0.65, Tr=T_REF),
                R=TPC(B0=0.1, E=0.65, Tr=T_REF),
                D=0.02,
                a=0.003,
            ),
            Cpool(linked=True),
        )
    )
    return ModelContext(T=T, s_i=2, c_i=4, eco=eco)


def save_trajectory_plot(traj: Trajectory, *, title: str, out_path: Path) -> None:
    """Save every compartment of a trajectory to an image file.

    Args:
        traj: Simulation result.
        title: Plot title.
        out_path: Output path for the saved figure.
    """
    plt.figure(figsize=(8, 5))
    for idx, label in enumerate(_LABELS):
        plt.plot(traj.t, traj.compartment(idx), label=label)
    plt.grid(visible=True)
    plt.legend()
    plt.title(title)
    plt.xlabel("Time")
    plt.ylabel("Biomass / concentration")
    plt.tight_layout()

    out_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(out_path, dpi=150)
    plt.close()


def save_sweep_plot(results: dict[float, Trajectory], *, out_path: Path) -> None:
    """Save end-of-run state against temperature.

    Args:
        results: Mapping of temperature (K) to trajectory.
        out_path: Output path for the saved figure.
    """
    temps = np.array(sorted(results), dtype=float)
    finals = np.vstack([results[T].final_state for T in temps])

    plt.figure(figsize=(8, 5))
    for idx, label in enumerate(_LABELS):
        plt.plot(temps - 273.15, finals[:, idx], marker="o", label=label)
    plt.grid(visible=True)
    plt.legend()
    plt.title("End-of-run state vs temperature")
    plt.xlabel("Temperature (°C)")
    plt.ylabel("Biomass / concentration")
    plt.tight_layout()

    out_path.parent.mkdir(parents=True, exist_ok=True)
    plt.savefig(out_path, dpi=150)
    plt.close()


def main() -> None:
    """Run the warming sweep and write plots."""
    ctx = build_context()
    u0 = np.array([0.5, 0.5, 3.0, 0.2, 1.0], dtype=float)

    # ---------------------------------------------------------------------
    # Sweep
    # ---------------------------------------------------------------------
    cfg = SolverConfig(method="LSODA", max_step=1.0, rtol=1e-7, atol=1e-10)
    results = simulate_temperatures(
        ctx, u0, TEMPERATURES, start=0.0, stop=400.0, step=1.0, config=cfg
    )

    for T in (TEMPERATURES[0], TEMPERATURES[-1]):
        traj = results[T]
        save_trajectory_plot(
            traj,
            title=f"Food web at T = {T - 273.15:.0f} °C ({traj.nfev} evaluations)",
            out_path=_OUTPUT_DIR / f"trajectory_{T:.0f}K.png",
        )

    save_sweep_plot(results, out_path=_OUTPUT_DIR / "final_state_vs_temperature.png")

    for T, traj in results.items():
        cells = ", ".join(
            f"{label}={value:.4g}"
            for label, value in zip(_LABELS, traj.final_state, strict=True)
        )
        print(f"T={T:.2f} K: {cells}")  # noqa: T201


if __name__ == "__main__":
    main()
