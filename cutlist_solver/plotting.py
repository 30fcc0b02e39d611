# cutlist_solver/plotting.py
# Minimal matplotlib visualization: one horizontal bar per cut list, one
# subplot per material. Parts are colored by name, kerf gaps are left blank
# and the offcut is hatched.

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import matplotlib.pyplot as plt
from matplotlib.patches import Rectangle

from .metrics import compute_sub_solution_metrics
from .types import Material, Solution, SubSolution
from .units import FractionFormat, LengthUnit, format_length


@dataclass(frozen=True)
class PlotStyle:
    show_labels: bool = True
    show_lengths: bool = True
    show_offcut: bool = True
    font_size: int = 7
    bar_height: float = 0.6
    unit: LengthUnit = LengthUnit.METERS
    fmt: FractionFormat = FractionFormat.decimal(3)


def _hash_color(key: str) -> Tuple[float, float, float]:
    """Deterministic pastel-ish color from a string (FNV-1a)."""
    h = 2166136261
    for ch in key.encode("utf-8"):
        h ^= ch
        h *= 16777619
        h &= 0xFFFFFFFF
    r = 0.3 + ((h >> 0) & 0xFF) / 255 * 0.6
    g = 0.3 + ((h >> 8) & 0xFF) / 255 * 0.6
    b = 0.3 + ((h >> 16) & 0xFF) / 255 * 0.6
    return (r, g, b)


def _material_title(material: Material, sub: SubSolution, style: PlotStyle) -> str:
    m = compute_sub_solution_metrics(sub)
    bits = [
        material.name,
        f"{m.pieces} pcs",
        f"offcut {format_length(m.offcut_length, style.unit, style.fmt)}",
        f"util {m.utilization:.0%}",
    ]
    return " | ".join(bits)


def _draw_material(ax, material: Material, sub: SubSolution, style: PlotStyle) -> None:
    n = len(sub.cut_lists)
    longest = max((float(s.length) for s in sub.supplies), default=1.0)

    for row, cl in enumerate(sub.cut_lists):
        # first cut list at the top
        y = n - 1 - row
        supply = sub.supply_of(cl)
        total = float(supply.length)

        ax.add_patch(Rectangle((0, y), total, style.bar_height, fill=False, linewidth=1.0))

        x = 0.0
        for k, part in enumerate(sub.parts_of(cl)):
            if k > 0:
                x += float(sub.blade_width)
            w = float(part.length)
            ax.add_patch(
                Rectangle(
                    (x, y),
                    w,
                    style.bar_height,
                    facecolor=_hash_color(part.name),
                    edgecolor="black",
                    linewidth=0.6,
                )
            )
            if style.show_labels or style.show_lengths:
                lines: List[str] = []
                if style.show_labels:
                    lines.append(part.name)
                if style.show_lengths:
                    lines.append(format_length(part.length, style.unit, style.fmt))
                ax.text(
                    x + w / 2,
                    y + style.bar_height / 2,
                    "\n".join(lines),
                    ha="center",
                    va="center",
                    fontsize=style.font_size,
                )
            x += w

        if style.show_offcut and x < total:
            ax.add_patch(
                Rectangle((x, y), total - x, style.bar_height, fill=False, hatch="//", linewidth=0.0)
            )

        ax.text(
            -0.01 * longest,
            y + style.bar_height / 2,
            f"{supply.name} ×{cl.quantity}",
            ha="right",
            va="center",
            fontsize=style.font_size + 1,
        )

    ax.set_title(_material_title(material, sub, style), fontsize=10)
    ax.set_xlim(-0.3 * longest, longest * 1.02)
    ax.set_ylim(-0.5, max(n, 1))
    ax.tick_params(labelleft=False, left=False)
    ax.set_xlabel("length (m)")


def plot_solution(
    sol: Solution,
    style: Optional[PlotStyle] = None,
    figsize: Optional[Tuple[float, float]] = None,
) -> plt.Figure:
    """
    Draw every material's cut lists in one matplotlib figure.
    Bars are drawn in base units (meters); labels use style.unit.
    """
    style = style or PlotStyle()

    materials = [m for m in sol if sol[m].cut_lists]
    n = len(materials)
    if n == 0:
        raise ValueError("Solution has no cut lists to plot")

    if figsize is None:
        rows_total = sum(len(sol[m].cut_lists) for m in materials)
        figsize = (10, 1.2 * n + 0.5 * rows_total)

    fig, axes = plt.subplots(n, 1, figsize=figsize, squeeze=False)
    ax_list = list(axes.ravel())

    for ax, material in zip(ax_list, materials):
        _draw_material(ax, material, sol[material], style)

    fig.tight_layout()
    return fig


def show_solution(sol: Solution, style: Optional[PlotStyle] = None) -> None:
    """Convenience wrapper: plot and show."""
    plot_solution(sol, style=style)
    plt.show()


def save_solution_png(
    sol: Solution,
    path: str,
    style: Optional[PlotStyle] = None,
    dpi: int = 150,
) -> None:
    fig = plot_solution(sol, style=style)
    fig.savefig(path, dpi=dpi, bbox_inches="tight")
    plt.close(fig)
