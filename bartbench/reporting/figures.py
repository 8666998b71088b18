from pathlib import Path

import numpy as np
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt

from bartbench.config import MODEL_LABELS
from bartbench.evaluation.comparison import ModelComparison
from bartbench.models.base import FittedModel


def save_figure(fig, path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=300, bbox_inches="tight")


def plot_predicted_vs_actual(y_true, fitted: FittedModel, title: str):
    y_true = np.asarray(y_true, dtype=float)
    y_pred = fitted.predictions

    lo = float(min(y_true.min(), y_pred.min()))
    hi = float(max(y_true.max(), y_pred.max()))
    fig, ax = plt.subplots(figsize=(6, 5))
    ax.scatter(y_true, y_pred, s=12, alpha=0.6, label=MODEL_LABELS.get(fitted.name, fitted.name))
    ax.plot([lo, hi], [lo, hi], "--", color="gray", linewidth=1, label="y = x")
    ax.set_title(title)
    ax.set_xlabel("Actual y")
    ax.set_ylabel("Predicted y")
    ax.set_xlim(lo, hi)
    ax.set_ylim(lo, hi)
    ax.legend()
    fig.tight_layout()
    return fig


def plot_residual_boxplot(comparison: ModelComparison, y_true, title: str):
    resid = comparison.residuals(y_true)
    names = list(resid.keys())

    fig, ax = plt.subplots(figsize=(7, 5))
    ax.boxplot([resid[n] for n in names])
    ax.set_xticks(np.arange(1, len(names) + 1))
    ax.set_xticklabels([MODEL_LABELS.get(n, n) for n in names])
    ax.axhline(0.0, linestyle="--", color="gray", linewidth=1)
    ax.set_title(title)
    ax.set_ylabel("Residual (actual - predicted)")
    fig.tight_layout()
    return fig


def plot_variable_usage(comparison: ModelComparison, n_active: int, title: str):
    """Mean split count per predictor for each tree ensemble.

    The first `n_active` predictors carry the signal and are drawn in a
    darker shade.
    """

    fitted = [f for _, f in comparison.items() if f.variable_usage is not None]
    if not fitted:
        fig, ax = plt.subplots(figsize=(10, 2.5))
        ax.text(0.5, 0.5, "No model reports variable usage", ha="center", va="center")
        ax.set_axis_off()
        fig.suptitle(title)
        return fig

    fig, axes = plt.subplots(len(fitted), 1, figsize=(10, 2.5 * max(len(fitted), 1)), squeeze=False)
    for ax, f in zip(axes[:, 0], fitted):
        mean_usage = np.asarray(f.variable_usage, dtype=float).mean(axis=0)
        idx = np.arange(1, mean_usage.size + 1)
        colors = ["tab:blue" if j <= n_active else "tab:gray" for j in idx]
        ax.bar(idx, mean_usage, color=colors)
        ax.set_ylabel("Mean splits")
        ax.set_title(f"{MODEL_LABELS.get(f.name, f.name)} (active variables: {f.active_variables})")
    axes[-1, 0].set_xlabel("Predictor index")
    fig.suptitle(title)
    fig.tight_layout()
    return fig


def close_figure(fig) -> None:
    plt.close(fig)
