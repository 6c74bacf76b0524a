"""Unit tests for housing_report/evaluation/metrics.py."""

import numpy as np
import pytest

from housing_report.evaluation.metrics import compute_metrics, metrics_to_dataframe


class TestComputeMetrics:
    def test_perfect_predictions(self) -> None:
        y = np.array([100_000.0, 200_000.0, 300_000.0])
        metrics = compute_metrics(y, y)
        assert metrics["rmse"] == pytest.approx(0.0, abs=1e-6)
        assert metrics["mae"] == pytest.approx(0.0, abs=1e-6)
        assert metrics["r2"] == pytest.approx(1.0, abs=1e-6)

    def test_known_values(self) -> None:
        y_true = np.array([100.0, 200.0, 300.0, 400.0])
        y_pred = np.array([110.0, 190.0, 330.0, 400.0])
        metrics = compute_metrics(y_true, y_pred)
        # errors: -10, 10, -30, 0
        assert metrics["rmse"] == pytest.approx(np.sqrt(1100.0 / 4))
        assert metrics["mae"] == pytest.approx(12.5)
        # SST about mean 250 = 50000
        assert metrics["r2"] == pytest.approx(1 - 1100.0 / 50_000.0)

    def test_matches_closed_form(self) -> None:
        rng = np.random.default_rng(0)
        y_true = rng.uniform(50_000, 500_000, 120)
        y_pred = y_true * rng.normal(1.0, 0.1, 120)
        metrics = compute_metrics(y_true, y_pred)

        resid = y_true - y_pred
        assert metrics["rmse"] == pytest.approx(np.sqrt(np.mean(resid**2)))
        assert metrics["mae"] == pytest.approx(np.mean(np.abs(resid)))
        sst = np.sum((y_true - y_true.mean()) ** 2)
        assert metrics["r2"] == pytest.approx(1 - np.sum(resid**2) / sst)

    def test_shape_mismatch_raises(self) -> None:
        with pytest.raises(ValueError, match="Shape mismatch"):
            compute_metrics(np.array([1.0, 2.0]), np.array([1.0]))

    def test_returns_all_keys(self) -> None:
        y = np.array([200_000.0, 350_000.0, 150_000.0])
        metrics = compute_metrics(y, y * 1.05, label="base/test")
        assert set(metrics.keys()) == {"rmse", "mae", "r2"}


class TestMetricsToDataFrame:
    def test_shape(self) -> None:
        results = {
            "base": {"rmse": 30_000.0, "mae": 20_000.0, "r2": 0.80},
            "extended": {"rmse": 29_000.0, "mae": 19_500.0, "r2": 0.82},
        }
        df = metrics_to_dataframe(results)
        assert df.shape == (2, 3)
        assert list(df.index) == ["base", "extended"]
        assert df.index.name == "model"
        assert df.loc["extended", "r2"] == pytest.approx(0.82)
