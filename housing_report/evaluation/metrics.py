"""Evaluation metrics for held-out housing price predictions.

All metrics operate on **original-scale** (dollar) predictions so that
reported numbers are directly interpretable.  The caller is responsible
for back-transforming log-space predictions before passing them here
(use :meth:`HousingPredictor.predict_price`).
"""

import logging
from typing import Dict

import numpy as np
import pandas as pd
from sklearn.metrics import mean_absolute_error, mean_squared_error, r2_score

logger = logging.getLogger(__name__)


def compute_metrics(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    label: str = "",
) -> Dict[str, float]:
    """Compute RMSE, MAE and R² on price-scale values.

    Args:
        y_true: Actual sale prices.
        y_pred: Predicted sale prices.
        label: Optional label for log output (e.g. ``"base/test"``).

    Returns:
        Dictionary with the following keys:

        - ``rmse`` – Root Mean Squared Error.
        - ``mae``  – Mean Absolute Error.
        - ``r2``   – Coefficient of Determination, about the mean of
          ``y_true``.

    Raises:
        ValueError: If ``y_true`` and ``y_pred`` have different shapes.
    """
    y_true = np.asarray(y_true, dtype=float)
    y_pred = np.asarray(y_pred, dtype=float)

    if y_true.shape != y_pred.shape:
        raise ValueError(f"Shape mismatch: y_true {y_true.shape} vs y_pred {y_pred.shape}.")

    rmse = float(np.sqrt(mean_squared_error(y_true, y_pred)))
    mae = float(mean_absolute_error(y_true, y_pred))
    r2 = float(r2_score(y_true, y_pred))

    results: Dict[str, float] = {"rmse": rmse, "mae": mae, "r2": r2}

    prefix = f"[{label}] " if label else ""
    logger.info("%sRMSE=$%.0f | MAE=$%.0f | R²=%.4f", prefix, rmse, mae, r2)

    return results


def metrics_to_dataframe(results: Dict[str, Dict[str, float]]) -> pd.DataFrame:
    """Convert a dict of {model_name: metrics_dict} into a tidy DataFrame.

    Args:
        results: Mapping from model label to the dict returned by
            :func:`compute_metrics`.

    Returns:
        DataFrame with models as rows and metric names as columns.
    """
    return pd.DataFrame(results).T.rename_axis("model")
