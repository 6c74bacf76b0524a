"""Figures for the housing report.

Every function draws one figure, saves it as PNG under ``out_dir`` and
returns the saved path so the report can embed it.
"""

import logging
from pathlib import Path
from typing import Union

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pandas as pd  # noqa: E402
import seaborn as sns  # noqa: E402

logger = logging.getLogger(__name__)

sns.set_style("whitegrid")

_DPI = 150


def _save(fig: plt.Figure, out_dir: Union[str, Path], name: str) -> Path:
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / name
    fig.savefig(path, dpi=_DPI, bbox_inches="tight")
    plt.close(fig)
    logger.info("Saved figure to %s", path)
    return path


def plot_price_histogram(
    df: pd.DataFrame,
    out_dir: Union[str, Path],
    column: str = "SalePrice",
) -> Path:
    """Histogram of sale prices with a KDE overlay."""
    fig, ax = plt.subplots(figsize=(10, 6))
    sns.histplot(df[column], kde=True, ax=ax)
    ax.set_title(f"Distribution of {column}")
    ax.set_xlabel(column)
    ax.set_ylabel("Count")
    return _save(fig, out_dir, f"hist_{column.lower()}.png")


def plot_scatter_with_fit(
    df: pd.DataFrame,
    out_dir: Union[str, Path],
    x: str = "GrLivArea",
    y: str = "SalePrice",
) -> Path:
    """Scatter of ``y`` against ``x`` with a least-squares line.

    Args:
        df: Data to plot.
        out_dir: Directory for the PNG.
        x: Column on the horizontal axis.
        y: Column on the vertical axis.

    Returns:
        Path of the saved figure.
    """
    corr = df[x].corr(df[y])
    fig, ax = plt.subplots(figsize=(10, 6))
    sns.regplot(
        x=x,
        y=y,
        data=df,
        scatter_kws={"alpha": 0.4},
        line_kws={"color": "red"},
        ax=ax,
    )
    ax.set_title(f"{y} vs {x} (corr = {corr:.2f})")
    return _save(fig, out_dir, f"scatter_{x.lower()}_{y.lower()}.png")


def plot_boxplot(
    df: pd.DataFrame,
    out_dir: Union[str, Path],
    category: str,
    target: str = "SalePrice",
) -> Path:
    """Boxplot of ``target`` per level of ``category``.

    Levels are ordered by their median target value.
    """
    order = df.groupby(category)[target].median().sort_values().index.tolist()
    fig, ax = plt.subplots(figsize=(12, 6))
    sns.boxplot(x=category, y=target, data=df, order=order, ax=ax)
    ax.set_title(f"{target} by {category}")
    if len(order) > 10:
        ax.tick_params(axis="x", labelrotation=90)
    return _save(fig, out_dir, f"box_{target.lower()}_by_{category.lower()}.png")


def plot_correlation_heatmap(
    df: pd.DataFrame,
    out_dir: Union[str, Path],
    columns: list,
) -> Path:
    """Annotated correlation heatmap for the given numeric columns."""
    fig, ax = plt.subplots(figsize=(8, 6))
    sns.heatmap(df[columns].corr(), cmap="coolwarm", annot=True, fmt=".2f", ax=ax)
    ax.set_title("Correlation Heatmap")
    return _save(fig, out_dir, "correlation_heatmap.png")


def plot_residuals(
    predictions: pd.DataFrame,
    out_dir: Union[str, Path],
    model_name: str,
) -> Path:
    """Residual-vs-predicted scatter for one model.

    Args:
        predictions: Prediction record from
            :meth:`HousingPredictor.predict_dataframe` with residuals.
        out_dir: Directory for the PNG.
        model_name: Used in the title and file name.

    Returns:
        Path of the saved figure.
    """
    fig, ax = plt.subplots(figsize=(10, 6))
    ax.scatter(
        predictions["predicted_sale_price"],
        predictions["residual"],
        alpha=0.5,
    )
    ax.axhline(0.0, color="red", linestyle="--", lw=2)
    ax.set_xlabel("Predicted SalePrice")
    ax.set_ylabel("Residual (actual − predicted)")
    ax.set_title(f"Residuals vs Predicted ({model_name})")
    return _save(fig, out_dir, f"residuals_{model_name}.png")


def plot_predicted_vs_actual(
    predictions: pd.DataFrame,
    out_dir: Union[str, Path],
    model_name: str,
) -> Path:
    """Predicted against actual sale price with the identity line."""
    actual = predictions["actual_sale_price"].to_numpy()
    lo, hi = float(np.min(actual)), float(np.max(actual))
    fig, ax = plt.subplots(figsize=(10, 6))
    ax.scatter(actual, predictions["predicted_sale_price"], alpha=0.5)
    ax.plot([lo, hi], [lo, hi], "r--", lw=2, label="Perfect Prediction")
    ax.set_xlabel("Actual SalePrice")
    ax.set_ylabel("Predicted SalePrice")
    ax.set_title(f"Actual vs Predicted ({model_name})")
    ax.legend()
    return _save(fig, out_dir, f"predicted_vs_actual_{model_name}.png")
