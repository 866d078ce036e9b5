"""Matplotlib rendering of a matrix's one-hot encoding."""

from __future__ import annotations

from typing import List, Sequence, Set, Tuple

import matplotlib.pyplot as plt
import numpy as np

from .itemizer import Itemizer
from .mvtable import OutputMode, onehot_rows

COLOR_PALETTE = [
    "#e53935", "#1e88e5", "#43a047", "#f39c12",
    "#8e24aa", "#009688", "#6d4c41", "#2e86c1",
]


def onehot_cells(fields: Sequence[Sequence[str]]) -> Set[Tuple[int, int, int]]:
    """Return (row, col, variable) for every ``1`` in the encoded fields."""
    cells: Set[Tuple[int, int, int]] = set()
    for r, row in enumerate(fields):
        c = 0
        for var_idx, field in enumerate(row):
            for ch in field:
                if ch == "1":
                    cells.add((r, c, var_idx))
                c += 1
    return cells


def draw_onehot(
    matrix: np.ndarray,
    variables: Sequence[Itemizer],
    mode: OutputMode = OutputMode.BINARY,
    names: Sequence[str] = (),
):
    """Draw the encoded matrix: one block of columns per variable."""
    fields = onehot_rows(matrix, variables, mode)
    widths = [len(var) for var in variables]
    ncols = sum(widths)
    nrows = len(fields)

    fig, ax = plt.subplots(figsize=(max(3.0, 0.45 * ncols + 1), max(2.0, 0.4 * nrows + 1.2)))
    ax.set_xlim(0, max(ncols, 1))
    ax.set_ylim(0, max(nrows, 1))
    ax.set_xticks(np.arange(0, ncols + 1))
    ax.set_yticks(np.arange(0, nrows + 1))
    ax.tick_params(labelbottom=False, labelleft=False, length=0)
    ax.grid(True, color="#ccc", linewidth=0.8)
    ax.invert_yaxis()
    ax.set_facecolor("#fafafa")

    # value labels above each column, heavy separators between variables
    labels: List[str] = [str(v) for var in variables for v in var]
    for c, lab in enumerate(labels):
        ax.text(c + 0.5, -0.2, lab, ha="center", va="bottom", fontsize=8, rotation=45, color="#333")
    edge = 0
    for var_idx, width in enumerate(widths):
        if names and var_idx < len(names):
            ax.text(edge + width / 2, nrows + 0.35, names[var_idx], ha="center", va="top", fontsize=9)
        edge += width
        ax.axvline(edge, color="#333", linewidth=2)

    for r, c, var_idx in onehot_cells(fields):
        color = COLOR_PALETTE[var_idx % len(COLOR_PALETTE)]
        ax.add_patch(plt.Rectangle((c + 0.1, r + 0.1), 0.8, 0.8, color=color, lw=0))
    for r in range(nrows):
        ax.text(-0.15, r + 0.5, str(r), ha="right", va="center", fontsize=8, color="#777")

    return fig


__all__ = ["COLOR_PALETTE", "onehot_cells", "draw_onehot"]
