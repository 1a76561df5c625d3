"""Strategy heat maps for evolved blackjack strategies.

One public data-builder returns the three decision tables of a Strategy as
numeric matrices:

    build_strategy_heatmap_data(strategy) — (hard, soft, pair) matrices

and one plot function renders them side by side with matplotlib:

    plot_strategy_heatmaps(strategy, title, ...) — 1×3 figure

Matrix convention:
    Shapes : hard (16, 10), soft (8, 10), pair (10, 10)
             rows = player totals / pair values, cols = dealer 2..10, A
    Values : 0 = STAND, 1 = HIT, 2 = DOUBLE, 3 = SPLIT
"""

from __future__ import annotations

import matplotlib
import matplotlib.colors
import matplotlib.figure
import matplotlib.pyplot as plt
import numpy as np

from blackjack_trainer.engine.strategy import (
    DEALER_UPCARDS,
    HARD_TOTALS,
    PAIR_VALUES,
    SOFT_TOTALS,
    PlayerAction,
    Strategy,
)

# ─── Constants ────────────────────────────────────────────────────────────────

ACTION_CODES: dict[PlayerAction, int] = {
    PlayerAction.STAND: 0,
    PlayerAction.HIT: 1,
    PlayerAction.DOUBLE: 2,
    PlayerAction.SPLIT: 3,
}
_CODE_LETTERS: dict[int, str] = {code: action.value for action, code in ACTION_CODES.items()}

_COL_LABELS: list[str] = ['A' if v == 11 else str(v) for v in DEALER_UPCARDS]
_HARD_LABELS: list[str] = [str(t) for t in HARD_TOTALS]
_SOFT_LABELS: list[str] = [f"A,{t - 11}" for t in SOFT_TOTALS]
_PAIR_LABELS: list[str] = ['A,A' if v == 11 else f"{v},{v}" for v in PAIR_VALUES]

# Red=STAND, green=HIT, gold=DOUBLE, blue=SPLIT
_ACTION_CMAP = matplotlib.colors.ListedColormap(["#d62728", "#2ca02c", "#ffbf00", "#1f77b4"])


# ─── Data builder ─────────────────────────────────────────────────────────────

def _table_codes(table: np.ndarray) -> np.ndarray:
    codes = np.empty(table.shape, dtype=np.int8)
    for index, symbol in np.ndenumerate(table):
        codes[index] = ACTION_CODES[PlayerAction(str(symbol))]
    return codes


def build_strategy_heatmap_data(strategy: Strategy) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return (hard, soft, pair) action-code matrices for a strategy.

    Args:
        strategy: A decoded Strategy.

    Returns:
        int8 matrices of shape (16, 10), (8, 10) and (10, 10).
    """
    return (
        _table_codes(strategy.hard_table),
        _table_codes(strategy.soft_table),
        _table_codes(strategy.pair_table),
    )


# ─── Rendering ────────────────────────────────────────────────────────────────

def _render_panel(
    ax: matplotlib.axes.Axes,
    data: np.ndarray,
    row_labels: list[str],
) -> matplotlib.image.AxesImage:
    """Render one table onto ax with letter annotations in each cell."""
    im = ax.imshow(data, cmap=_ACTION_CMAP, vmin=-0.5, vmax=3.5, aspect="auto")

    ax.set_xticks(range(len(_COL_LABELS)))
    ax.set_xticklabels(_COL_LABELS, fontsize=9)
    ax.set_yticks(range(len(row_labels)))
    ax.set_yticklabels(row_labels, fontsize=9)

    for r in range(data.shape[0]):
        for c in range(data.shape[1]):
            ax.text(
                c,
                r,
                _CODE_LETTERS[int(data[r, c])],
                ha="center",
                va="center",
                fontsize=8,
                color="white",
                fontweight="bold",
            )

    return im


def plot_strategy_heatmaps(
    strategy: Strategy,
    title: str,
    *,
    show: bool = True,
    save_path: str | None = None,
) -> matplotlib.figure.Figure:
    """Plot the hard, soft and pair tables as a 1×3 figure.

    Args:
        strategy:  Decoded strategy to render.
        title:     Figure suptitle.
        show:      Call plt.show() after drawing.
        save_path: If given, save the figure to this path.

    Returns:
        The matplotlib Figure.
    """
    hard, soft, pair = build_strategy_heatmap_data(strategy)

    fig, axes = plt.subplots(1, 3, figsize=(15, 6))
    panels = (
        (hard, _HARD_LABELS, "Hard totals"),
        (soft, _SOFT_LABELS, "Soft totals"),
        (pair, _PAIR_LABELS, "Pairs"),
    )
    for ax, (data, labels, panel_title) in zip(axes, panels):
        _render_panel(ax, data, labels)
        ax.set_title(panel_title, fontsize=11)
        ax.set_xlabel("Dealer upcard")
    axes[0].set_ylabel("Player hand")

    fig.suptitle(
        f"{title}  (bankroll {strategy.initial_bankroll}, bet {strategy.main_bet})",
        fontsize=13,
    )
    fig.tight_layout()

    if save_path is not None:
        fig.savefig(save_path, dpi=120, bbox_inches="tight")
    if show:
        plt.show()

    return fig
