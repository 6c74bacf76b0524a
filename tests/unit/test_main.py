"""End-to-end tests for the pipeline in main.py."""

import logging
from pathlib import Path

import pandas as pd
import pytest
import yaml

import main
from housing_report.data.splitter import split_train_test


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def data_csv(housing_factory, tmp_path: Path) -> Path:
    path = tmp_path / "train.csv"
    housing_factory(n=300, seed=5).to_csv(path, index=False)
    return path


@pytest.fixture()
def config_path(tmp_path: Path, data_csv: Path) -> Path:
    cfg = {
        "data": {"raw_path": str(data_csv)},
        "split": {"train_fraction": 0.7, "random_state": 42},
        "cleaning": {
            "impute_column": "LotFrontage",
            "area_column": "GrLivArea",
            "area_threshold": 4000,
        },
        "models": {
            "base": {
                "numeric_features": ["OverallQual", "GrLivArea", "GarageCars"],
                "categorical_features": ["Neighborhood"],
            },
            "extended": {
                "numeric_features": ["OverallQual", "GrLivArea", "GarageCars", "BathComposite"],
                "categorical_features": ["Neighborhood"],
            },
        },
        "report": {"output_dir": str(tmp_path / "out"), "make_plots": False},
        "logging": {"level": "WARNING"},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(cfg))
    return path


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestLoadConfig:
    def test_missing_config_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="Config not found"):
            main.load_config(str(tmp_path / "missing.yaml"))

    def test_repo_config_parses(self) -> None:
        cfg = main.load_config(str(Path(__file__).resolve().parents[2] / "configs" / "config.yaml"))
        assert cfg["split"]["train_fraction"] == pytest.approx(0.7)
        assert set(cfg["models"]) == {"base", "extended"}


class TestRunPipeline:
    def test_returns_metrics_for_both_models(self, config_path: Path, tmp_path: Path) -> None:
        results = main.run_pipeline(config_path=str(config_path))
        assert set(results) == {"base", "extended"}
        for metrics in results.values():
            assert set(metrics) == {"rmse", "mae", "r2"}
            assert metrics["rmse"] >= metrics["mae"] > 0
            assert metrics["r2"] > 0.8

    def test_writes_report_and_predictions(self, config_path: Path, tmp_path: Path) -> None:
        main.run_pipeline(config_path=str(config_path))
        out = tmp_path / "out"
        report = (out / "report.md").read_text(encoding="utf-8")
        assert "Data overview" in report
        assert "Model `extended`" in report
        assert "Test-set evaluation" in report

        preds = pd.read_csv(out / "predictions_base.csv", index_col="row")
        assert len(preds) == 90
        assert {"predicted_sale_price", "actual_sale_price", "residual"} <= set(preds.columns)

    def test_is_reproducible(self, config_path: Path) -> None:
        first = main.run_pipeline(config_path=str(config_path), model_names=["base"])
        second = main.run_pipeline(config_path=str(config_path), model_names=["base"])
        assert first == second

    def test_with_plots(self, config_path: Path, tmp_path: Path) -> None:
        out = tmp_path / "plotted"
        main.run_pipeline(
            config_path=str(config_path),
            model_names=["extended"],
            output_dir=str(out),
            make_plots=True,
        )
        assert (out / "figures" / "residuals_extended.png").exists()
        assert (out / "figures" / "hist_saleprice.png").exists()
        assert "](figures/residuals_extended.png)" in (out / "report.md").read_text(encoding="utf-8")

    def test_missing_data_file_raises(self, config_path: Path, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="File not found"):
            main.run_pipeline(config_path=str(config_path), data_path=str(tmp_path / "nope.csv"))

    def test_unknown_model_raises(self, config_path: Path) -> None:
        with pytest.raises(ValueError, match="Unknown model"):
            main.run_pipeline(config_path=str(config_path), model_names=["lasso"])


class TestCli:
    def test_missing_data_exits_nonzero(self, config_path: Path, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main.main(["--config", str(config_path), "--data", str(tmp_path / "nope.csv")])
        assert exc_info.value.code == 1

    def test_cli_overrides(self, config_path: Path, tmp_path: Path) -> None:
        out = tmp_path / "cli_out"
        main.main(
            [
                "--config",
                str(config_path),
                "--output-dir",
                str(out),
                "--models",
                "base",
                "--no-plots",
            ]
        )
        assert (out / "report.md").exists()
        assert (out / "predictions_base.csv").exists()
        assert not (out / "predictions_extended.csv").exists()


class TestSetupLogging:
    def test_keeps_existing_handlers_and_applies_level(self) -> None:
        root = logging.getLogger()
        handler = logging.StreamHandler()
        old_level = root.level
        root.addHandler(handler)
        try:
            main._setup_logging("WARNING")
            assert handler in root.handlers
            assert root.level == logging.WARNING
        finally:
            root.removeHandler(handler)
            root.setLevel(old_level)


class TestPipelineScope:
    def test_test_rows_above_area_threshold_are_scored(
        self, housing_factory, config_path: Path, tmp_path: Path
    ) -> None:
        df = housing_factory(n=300, seed=5)
        _, test = split_train_test(df, train_fraction=0.7, random_state=42)
        big_house = test.index[0]
        df.loc[big_house, "GrLivArea"] = 4800.0
        data = tmp_path / "with_outlier.csv"
        df.to_csv(data, index=False)

        main.run_pipeline(config_path=str(config_path), data_path=str(data), model_names=["base"])

        preds = pd.read_csv(tmp_path / "out" / "predictions_base.csv", index_col="row")
        assert big_house in preds.index
        assert len(preds) == len(test)
        outliers = df.index[(df["GrLivArea"] >= 4000) & df.index.isin(test.index)]
        assert set(outliers) <= set(preds.index)

    def test_numeric_only_model_has_no_reference_clause(
        self, config_path: Path, tmp_path: Path
    ) -> None:
        cfg = yaml.safe_load(config_path.read_text())
        cfg["models"]["numeric_only"] = {"numeric_features": ["OverallQual", "GrLivArea"]}
        config_path.write_text(yaml.safe_dump(cfg))

        main.run_pipeline(config_path=str(config_path), model_names=["numeric_only"])

        report = (tmp_path / "out" / "report.md").read_text(encoding="utf-8")
        assert "Predictors: OverallQual, GrLivArea." in report
        assert "Reference neighbourhood" not in report
