"""Prediction utilities for the housing price models.

All models produce predictions in log-space (``ln(SalePrice)``).  This
module back-transforms them to dollars with ``np.exp`` and builds the
per-row prediction record used for evaluation and residual plots.
"""

import logging
from typing import Optional, Protocol, runtime_checkable

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Protocol – any fitted trainer is compatible
# ---------------------------------------------------------------------------


@runtime_checkable
class _FittedModel(Protocol):
    """Structural type for any fitted trainer with a ``predict`` method."""

    def predict(self, X: pd.DataFrame) -> np.ndarray: ...


# ---------------------------------------------------------------------------
# Predictor
# ---------------------------------------------------------------------------


class HousingPredictor:
    """Wraps a fitted model to produce sale-price predictions in dollars.

    Args:
        model: Any fitted object that exposes a ``predict(X)`` method
            returning log-space predictions (e.g. :class:`OLSTrainer`).
    """

    def __init__(self, model: _FittedModel) -> None:
        if not isinstance(model, _FittedModel):
            raise TypeError(
                "model must have a predict(X) method. " f"Got {type(model).__name__}."
            )
        self.model = model

    def predict_log(self, X: pd.DataFrame) -> np.ndarray:
        """Return raw model predictions in log-space."""
        log_preds = np.asarray(self.model.predict(X), dtype=float)
        logger.debug("predict_log: min=%.3f, max=%.3f", log_preds.min(), log_preds.max())
        return log_preds

    def predict_price(self, X: pd.DataFrame) -> np.ndarray:
        """Return sale-price predictions in dollars.

        Applies ``np.exp`` to reverse the ``np.log`` target transformation
        applied during training.

        Args:
            X: Frame with the same predictor columns used during training.

        Returns:
            1-D array of predicted sale prices.
        """
        prices = np.exp(self.predict_log(X))
        logger.info(
            "predict_price: median=$%.0f, min=$%.0f, max=$%.0f",
            np.median(prices),
            prices.min(),
            prices.max(),
        )
        return prices

    def predict_dataframe(
        self,
        X: pd.DataFrame,
        y_true: Optional[pd.Series] = None,
    ) -> pd.DataFrame:
        """Return the per-row prediction record.

        Args:
            X: Feature frame.
            y_true: Actual sale prices aligned with ``X``.  When given, a
                ``residual`` column (actual minus predicted) is added.

        Returns:
            DataFrame indexed like ``X`` with columns:
                - ``predicted_log_price``: Raw model output.
                - ``predicted_sale_price``: Back-transformed price.
                - ``actual_sale_price`` and ``residual`` when ``y_true``
                  is provided.
        """
        log_preds = self.predict_log(X)
        out = pd.DataFrame(
            {
                "predicted_log_price": log_preds,
                "predicted_sale_price": np.exp(log_preds),
            },
            index=X.index,
        )
        if y_true is not None:
            out["actual_sale_price"] = np.asarray(y_true, dtype=float)
            out["residual"] = out["actual_sale_price"] - out["predicted_sale_price"]
        return out
