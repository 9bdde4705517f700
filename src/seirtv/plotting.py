"""
===========================================================
plotting.py
Last Updated: 2026-10-19
===========================================================

Description:
    Epi-curve plots for scenario results: incidence over time,
    one line per scenario, optionally split by group.

API:
    plot_epi_curve(result, output_type, labels=None, by_group=False, ax=None)
    plot_incidence_panels(result, labels=None, save_path=None)

Notes:
    - Solver samples are not evenly spaced, so incidence is
      plotted as a rate (incidence / interval length, per day).
-----------------------------------------------------------
License: MIT
===========================================================
"""
from __future__ import annotations
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from typing import Optional, Sequence

from .output import ModelOutput, OutputType
from .scenarios import MitigationType, ScenarioResult

TITLES = {
    OutputType.INFECTION_INCIDENCE: "Infections",
    OutputType.SYMPTOMATIC_INCIDENCE: "Symptomatic Infections",
    OutputType.HOSPITAL_INCIDENCE: "Hospitalizations",
    OutputType.DEATH_INCIDENCE: "Deaths",
}

COLORS = {
    MitigationType.UNMITIGATED: "darkred",
    MitigationType.MITIGATED: "darkblue",
}


def daily_rate(output: ModelOutput, output_type: OutputType):
    """Incidence per day at each solver sample.

    Returns:
    t: np.ndarray. Sample times
    rate: np.ndarray. Shape (len(t), n_groups)
    """
    t = output.times()
    values = output.values(output_type)
    if t.size == 0:
        return t, values
    dt = np.diff(np.concatenate(([0.0], t)))
    return t, values / dt[:, np.newaxis]


def plot_epi_curve(
        result: ScenarioResult,
        output_type: OutputType = OutputType.INFECTION_INCIDENCE,
        labels: Optional[Sequence[str]] = None,
        by_group: bool = False,
        ax: Optional[Axes] = None
) -> Axes:
    """Plot incidence over time for every scenario in result.

    Parameters:
    result: ScenarioResult
    output_type: OutputType. Which incidence to plot
    labels: list of str, optional. Group labels for the legend
    by_group: bool. If True, one line per group; otherwise the sum over groups
    ax: matplotlib Axes, optional. Axes to draw on; a new figure if None
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(10, 4))

    for m in result.mitigation_types:
        t, rate = daily_rate(result[m], output_type)
        color = COLORS.get(m)
        if by_group and rate.size:
            for g in range(rate.shape[1]):
                name = labels[g] if labels is not None else f"group {g}"
                ax.plot(t, rate[:, g], label=f"{m.value} ({name})", linewidth=2,
                        linestyle=["-", "--", ":", "-."][g % 4], color=color)
        else:
            total = rate.sum(axis=1) if rate.size else rate
            ax.plot(t, total, label=m.value, color=color, linewidth=2)

    ax.set_xlabel("Time (days)", fontsize=12)
    ax.set_ylabel("Incidence (per day)", fontsize=12)
    ax.set_title(TITLES[OutputType(output_type)], fontsize=14, fontweight="bold")
    ax.legend(loc="best", frameon=True, fontsize=10)
    ax.grid(True, alpha=0.3)
    return ax


def plot_incidence_panels(
        result: ScenarioResult,
        labels: Optional[Sequence[str]] = None,
        save_path: Optional[str] = None
) -> Figure:
    """Plot all four incidence types in a 2 x 2 grid.

    Parameters:
    result: ScenarioResult
    labels: list of str, optional. Group labels
    save_path: str, optional. If provided, save figure to this path
    """
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    for ax, output_type in zip(axes.flat, OutputType):
        plot_epi_curve(result, output_type, labels=labels, ax=ax)

    title = ("Mitigated vs. Unmitigated Scenario" if result.has_mitigations
             else "Unmitigated Scenario")
    fig.suptitle(title, fontsize=16, fontweight="bold")
    fig.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=300, bbox_inches="tight")
        print(f"Figure saved to {save_path}")

    return fig
