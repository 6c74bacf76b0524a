"""Entry point for the Ames housing regression report.

Usage
-----
    python main.py                          # uses configs/config.yaml
    python main.py --config path/to.yaml
    python main.py --models base            # fit a subset of models
    python main.py --data path/to.csv       # override data path
    python main.py --no-plots               # skip figure rendering

Pipeline steps
--------------
1. Load the raw CSV.
2. Run data quality checks.
3. Seeded random split: 70 % train | 30 % test.
4. Clean the train partition (living-area trim, median imputation).
5. Derive LogPrice and BathComposite on both partitions.
6. Fit the OLS variants on the train partition.
7. Evaluate on the test partition in dollars; print a comparison table.
8. Render figures and the narrative Markdown report.
"""

import argparse
import logging
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
import yaml

# ---------------------------------------------------------------------------
# Bootstrap logging before any local imports so module-level loggers work.
# ---------------------------------------------------------------------------


def _setup_logging(level: str = "INFO", fmt: Optional[str] = None) -> None:
    fmt = fmt or "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=log_level, format=fmt)
    # basicConfig is a no-op once the root logger has handlers.
    logging.getLogger().setLevel(log_level)


_setup_logging()  # default until config is loaded
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Local imports
# ---------------------------------------------------------------------------

from housing_report.data.loader import DataIngestor  # noqa: E402
from housing_report.data.preprocessor import HousingCleaner  # noqa: E402
from housing_report.data.quality import DataQualityChecker  # noqa: E402
from housing_report.data.splitter import split_train_test  # noqa: E402
from housing_report.evaluation.metrics import compute_metrics, metrics_to_dataframe  # noqa: E402
from housing_report.features.engineer import (  # noqa: E402
    LOG_PRICE_COL,
    PRICE_COL,
    FeatureEngineer,
)
from housing_report.models.predictor import HousingPredictor  # noqa: E402
from housing_report.models.trainer import DEFAULT_MODEL_SPECS, get_trainer  # noqa: E402
from housing_report.reporting import plots  # noqa: E402
from housing_report.reporting.report import (  # noqa: E402
    ReportBuilder,
    correlations_with_target,
    summary_statistics,
)

_EDA_COLUMNS = [
    "SalePrice",
    "OverallQual",
    "GrLivArea",
    "GarageCars",
    "FullBath",
    "HalfBath",
]


# ---------------------------------------------------------------------------
# Config helpers
# ---------------------------------------------------------------------------


def load_config(path: str = "configs/config.yaml") -> dict:
    """Load YAML configuration file.

    Args:
        path: Path to the YAML config file.

    Returns:
        Parsed configuration dictionary.

    Raises:
        FileNotFoundError: If the config file does not exist.
    """
    cfg_path = Path(path)
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config not found: {cfg_path}")
    with open(cfg_path) as f:
        return yaml.safe_load(f)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------


def run_pipeline(
    config_path: str = "configs/config.yaml",
    data_path: Optional[str] = None,
    model_names: Optional[List[str]] = None,
    output_dir: Optional[str] = None,
    make_plots: Optional[bool] = None,
) -> Dict[str, Dict[str, float]]:
    """Execute the full analysis and write the report.

    Args:
        config_path: Path to the YAML configuration file.
        data_path: Override for the raw data path in the config.
        model_names: Model variants to fit.  Defaults to all variants
            defined in the config (``["base", "extended"]``).
        output_dir: Override for the report output directory.
        make_plots: Override for figure rendering.

    Returns:
        Test-set metrics per model: ``{model_name: {"rmse", "mae", "r2"}}``.
    """
    # ------------------------------------------------------------------ #
    # 0. Config                                                           #
    # ------------------------------------------------------------------ #
    cfg = load_config(config_path)
    log_cfg = cfg.get("logging", {})
    _setup_logging(level=log_cfg.get("level", "INFO"), fmt=log_cfg.get("format"))

    raw_path = data_path or cfg["data"]["raw_path"]
    split_cfg = cfg.get("split", {})
    train_fraction = split_cfg.get("train_fraction", 0.7)
    random_state = split_cfg.get("random_state", 42)
    clean_cfg = cfg.get("cleaning", {})
    model_specs: dict = cfg.get("models") or DEFAULT_MODEL_SPECS
    report_cfg = cfg.get("report", {})
    out_dir = Path(output_dir or report_cfg.get("output_dir", "outputs"))
    fig_dir = out_dir / "figures"
    if make_plots is None:
        make_plots = report_cfg.get("make_plots", True)

    if model_names is None:
        model_names = list(model_specs.keys())

    logger.info(
        "Pipeline config: data=%s | train=%.0f%% | seed=%d | models=%s | out=%s",
        raw_path,
        train_fraction * 100,
        random_state,
        model_names,
        out_dir,
    )

    # ------------------------------------------------------------------ #
    # 1. Load                                                             #
    # ------------------------------------------------------------------ #
    df_raw = DataIngestor(raw_path).load_csv_data()

    # ------------------------------------------------------------------ #
    # 2. Quality checks                                                   #
    # ------------------------------------------------------------------ #
    cleaner = HousingCleaner(**clean_cfg)
    required = sorted(
        set(DataQualityChecker.REQUIRED_COLUMNS)
        | {cleaner.impute_column, cleaner.area_column}
    )
    checker = DataQualityChecker(required_columns=required)
    checker.run_all(df_raw)

    report = ReportBuilder()
    _add_overview_section(report, df_raw, fig_dir if make_plots else None)

    # ------------------------------------------------------------------ #
    # 3. Random split                                                     #
    # ------------------------------------------------------------------ #
    df_train, df_test = split_train_test(
        df_raw, train_fraction=train_fraction, random_state=random_state
    )

    # ------------------------------------------------------------------ #
    # 4. Cleaning – train partition only                                  #
    # ------------------------------------------------------------------ #
    df_train_clean = cleaner.fit(df_train).transform(df_train, filter_outliers=True)

    # ------------------------------------------------------------------ #
    # 5. Feature engineering – identical on both partitions               #
    # ------------------------------------------------------------------ #
    engineer = FeatureEngineer().fit(df_train_clean)
    df_train_feat = engineer.transform(df_train_clean)
    df_test_feat = engineer.transform(df_test)

    report.add_heading("Preparation")
    report.add_paragraph(
        f"Rows were split at random (seed {random_state}) into "
        f"{len(df_train):,} training and {len(df_test):,} test rows. "
        f"On the training rows only, {cleaner.n_trimmed_} house(s) with "
        f"{cleaner.area_column} of {cleaner.area_threshold:,} or more were "
        f"removed, and missing {cleaner.impute_column} values were filled "
        f"with the training median ({cleaner.impute_median_:,.1f}). "
        f"The target is {LOG_PRICE_COL} = ln({PRICE_COL}); "
        "BathComposite = FullBath + 0.5 × HalfBath."
    )

    # ------------------------------------------------------------------ #
    # 6–7. Fit and evaluate                                               #
    # ------------------------------------------------------------------ #
    all_results: Dict[str, Dict[str, float]] = {}
    report.add_heading("Models")

    for name in model_names:
        logger.info("=" * 60)
        logger.info("Fitting model: %s", name)
        trainer = get_trainer(name, model_specs)
        trainer.fit(df_train_feat, df_train_feat[LOG_PRICE_COL])

        predictor = HousingPredictor(trainer)
        predictions = predictor.predict_dataframe(
            df_test_feat, y_true=df_test_feat[PRICE_COL]
        )
        metrics = compute_metrics(
            predictions["actual_sale_price"],
            predictions["predicted_sale_price"],
            label=f"{name}/test",
        )
        all_results[name] = metrics

        out_dir.mkdir(parents=True, exist_ok=True)
        predictions.to_csv(out_dir / f"predictions_{name}.csv", index_label="row")

        report.add_heading(f"Model `{name}`", level=3)
        report.add_paragraph(_describe_predictors(trainer))
        report.add_table(trainer.coefficient_table())
        report.add_key_values(trainer.fit_statistics())
        if make_plots:
            report.add_figure(
                plots.plot_residuals(predictions, fig_dir, name),
                caption=f"Residuals against predicted price for `{name}`.",
            )
            report.add_figure(plots.plot_predicted_vs_actual(predictions, fig_dir, name))

    # ------------------------------------------------------------------ #
    # 8. Summary table and report                                         #
    # ------------------------------------------------------------------ #
    summary = _print_summary(all_results)
    if summary is not None:
        report.add_heading("Test-set evaluation")
        report.add_paragraph(
            "Predictions were exponentiated back to dollars before scoring "
            f"against the {len(df_test):,} held-out sale prices."
        )
        report.add_table(summary)

    report.write(out_dir / "report.md")
    return all_results


def _add_overview_section(
    report: ReportBuilder,
    df: pd.DataFrame,
    fig_dir: Optional[Path],
) -> None:
    """Append the exploratory section (statistics, correlations, figures)."""
    report.add_heading("Data overview")
    report.add_paragraph(
        f"The dataset holds {len(df):,} sales across {df['Neighborhood'].nunique()} "
        f"neighbourhoods, with a median sale price of ${df[PRICE_COL].median():,.0f}."
    )
    report.add_table(summary_statistics(df, _EDA_COLUMNS), float_format="{:,.2f}")
    report.add_heading("Correlation with SalePrice", level=3)
    report.add_table(correlations_with_target(df, _EDA_COLUMNS, target=PRICE_COL))

    if fig_dir is None:
        return
    report.add_figure(plots.plot_price_histogram(df, fig_dir))
    report.add_figure(
        plots.plot_scatter_with_fit(df, fig_dir, x="GrLivArea", y=PRICE_COL),
        caption="Houses above 4,000 sq ft sit far off the trend and are trimmed from training.",
    )
    report.add_figure(plots.plot_boxplot(df, fig_dir, category="OverallQual"))
    report.add_figure(plots.plot_boxplot(df, fig_dir, category="Neighborhood"))
    report.add_figure(plots.plot_correlation_heatmap(df, fig_dir, _EDA_COLUMNS))


def _describe_predictors(trainer) -> str:
    """One-sentence predictor list, naming reference levels when there are any."""
    text = "Predictors: " + ", ".join(
        list(trainer.numeric_features) + list(trainer.categorical_features)
    )
    if trainer.category_levels_:
        text += ". Reference neighbourhood: " + ", ".join(
            f"{col} = {levels[0]}" for col, levels in trainer.category_levels_.items()
        )
    return text + "."


def _print_summary(results: Dict[str, Dict[str, float]]) -> Optional[pd.DataFrame]:
    """Print a formatted comparison of all model results.

    Args:
        results: Dict returned by :func:`run_pipeline`.

    Returns:
        The comparison table, or ``None`` when there is nothing to show.
    """
    if not results:
        logger.warning("No metrics to display.")
        return None

    df = metrics_to_dataframe(results)
    logger.info("\n\n=== TEST RESULTS ===\n%s\n", df.to_string())
    print("\n=== TEST RESULTS ===")
    print(df.to_string())
    return df


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ames housing OLS report.")
    parser.add_argument(
        "--config",
        default="configs/config.yaml",
        help="Path to YAML config (default: configs/config.yaml).",
    )
    parser.add_argument("--data", default=None, help="Override raw data path from config.")
    parser.add_argument(
        "--output-dir",
        default=None,
        help="Override report output directory from config.",
    )
    parser.add_argument(
        "--models",
        nargs="+",
        default=None,
        help="Model variants to fit (default: all in config).",
    )
    parser.add_argument(
        "--no-plots",
        action="store_true",
        help="Skip figure rendering.",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)
    try:
        run_pipeline(
            config_path=args.config,
            data_path=args.data,
            model_names=args.models,
            output_dir=args.output_dir,
            make_plots=False if args.no_plots else None,
        )
    except FileNotFoundError as exc:
        logger.error("%s", exc)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
