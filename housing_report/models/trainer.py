"""Ordinary-least-squares model training for housing price prediction.

Models are fitted on the log-transformed target (``LogPrice``);
back-transformation to dollars is handled by
:mod:`housing_report.models.predictor`.

Design matrix layout:
    - ``const``: intercept column.
    - Numeric predictors, entered as-is.
    - One indicator column per categorical level, named
      ``<column>[T.<level>]``.  Levels are sorted alphabetically over the
      training rows and the first level is dropped as the reference.

Available model variants (see :data:`DEFAULT_MODEL_SPECS`):
    - ``base``: quality, living area, garage capacity and neighbourhood.
    - ``extended``: ``base`` plus the composite bathroom count.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np
import pandas as pd
import statsmodels.api as sm
from sklearn.base import BaseEstimator, RegressorMixin

logger = logging.getLogger(__name__)

INTERCEPT_COL = "const"

DEFAULT_MODEL_SPECS: Dict[str, Dict[str, List[str]]] = {
    "base": {
        "numeric_features": ["OverallQual", "GrLivArea", "GarageCars"],
        "categorical_features": ["Neighborhood"],
    },
    "extended": {
        "numeric_features": ["OverallQual", "GrLivArea", "GarageCars", "BathComposite"],
        "categorical_features": ["Neighborhood"],
    },
}


def indicator_name(column: str, level: str) -> str:
    """Return the design-matrix column name for a categorical level."""
    return f"{column}[T.{level}]"


class OLSTrainer(BaseEstimator, RegressorMixin):
    """Ordinary least squares on numeric and treatment-coded categorical predictors.

    Args:
        numeric_features: Columns entered directly into the design matrix.
        categorical_features: Columns expanded into indicator variables
            with the alphabetically first training level as reference.
    """

    def __init__(
        self,
        numeric_features: Sequence[str] = ("OverallQual", "GrLivArea", "GarageCars"),
        categorical_features: Sequence[str] = ("Neighborhood",),
    ) -> None:
        self.numeric_features = numeric_features
        self.categorical_features = categorical_features

    def fit(self, X_train: pd.DataFrame, y_train: pd.Series) -> "OLSTrainer":
        """Fit the model by least squares.

        Args:
            X_train: Training frame containing every predictor column.
            y_train: Log-transformed training target.

        Returns:
            Fitted trainer (self).
        """
        self.category_levels_: Dict[str, List[str]] = {
            col: sorted(X_train[col].dropna().astype(str).unique())
            for col in self.categorical_features
        }
        for col, levels in self.category_levels_.items():
            logger.info(
                "%s: %d levels, reference level '%s'.", col, len(levels), levels[0]
            )

        design = self._design_matrix(X_train)
        self.feature_names_: List[str] = list(design.columns)
        y = np.asarray(y_train, dtype=float)

        self.results_ = sm.OLS(y, design).fit()
        logger.info(
            "OLS fitted on %d rows × %d design columns. R²=%.4f, adj. R²=%.4f",
            int(self.results_.nobs),
            design.shape[1],
            self.results_.rsquared,
            self.results_.rsquared_adj,
        )
        return self

    def predict(self, X: pd.DataFrame) -> np.ndarray:
        """Generate predictions in log-space.

        Args:
            X: Frame containing every predictor column.

        Returns:
            Array of predicted log-prices.
        """
        design = self._design_matrix(X)
        return np.asarray(self.results_.predict(design), dtype=float)

    @property
    def coef_(self) -> pd.Series:
        """Fitted coefficients indexed by design column."""
        return self.results_.params

    def coefficient_table(self) -> pd.DataFrame:
        """Return coefficients with their standard errors and significance.

        Returns:
            DataFrame indexed by design column with columns ``coef``,
            ``std_err``, ``t_value`` and ``p_value``.
        """
        return pd.DataFrame(
            {
                "coef": self.results_.params,
                "std_err": self.results_.bse,
                "t_value": self.results_.tvalues,
                "p_value": self.results_.pvalues,
            }
        )

    def fit_statistics(self) -> Dict[str, float]:
        """Return in-sample goodness-of-fit statistics."""
        return {
            "n_obs": float(self.results_.nobs),
            "r2": float(self.results_.rsquared),
            "adj_r2": float(self.results_.rsquared_adj),
            "aic": float(self.results_.aic),
            "bic": float(self.results_.bic),
        }

    def summary(self) -> str:
        """Return the statsmodels text summary of the fit."""
        return str(self.results_.summary())

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _design_matrix(self, X: pd.DataFrame) -> pd.DataFrame:
        parts = [X[list(self.numeric_features)].astype(float)]

        for col in self.categorical_features:
            levels = self.category_levels_[col]
            values = X[col].astype(str)
            unseen = ~values.isin(levels)
            if unseen.any():
                logger.warning(
                    "%d row(s) with unseen %s levels %s mapped to reference '%s'.",
                    int(unseen.sum()),
                    col,
                    sorted(values[unseen].unique()),
                    levels[0],
                )
                values = values.where(~unseen, levels[0])
            parts.append(
                pd.DataFrame(
                    {
                        indicator_name(col, level): (values == level).astype(float)
                        for level in levels[1:]
                    },
                    index=X.index,
                )
            )

        design = pd.concat(parts, axis=1)
        return sm.add_constant(design, prepend=True, has_constant="add")


# ---------------------------------------------------------------------------
# Registry helper
# ---------------------------------------------------------------------------


def get_trainer(
    name: str,
    model_specs: Optional[Dict[str, Dict[str, Any]]] = None,
) -> OLSTrainer:
    """Instantiate a model variant by name.

    Args:
        name: Variant name, e.g. ``"base"`` or ``"extended"``.
        model_specs: Mapping of variant name to ``OLSTrainer`` keyword
            arguments.  Defaults to :data:`DEFAULT_MODEL_SPECS`.

    Returns:
        Instantiated (unfitted) trainer.

    Raises:
        ValueError: If ``name`` is not in ``model_specs``.
    """
    specs = model_specs if model_specs is not None else DEFAULT_MODEL_SPECS
    if name not in specs:
        raise ValueError(f"Unknown model '{name}'. Choose from: {list(specs)}")
    params = specs[name]
    return OLSTrainer(
        numeric_features=list(params.get("numeric_features", [])),
        categorical_features=list(params.get("categorical_features", [])),
    )
