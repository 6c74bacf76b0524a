"""Narrative Markdown report for the housing analysis.

:class:`ReportBuilder` accumulates prose, tables and figure references
in order and renders them as a single Markdown document.  Tables are
rendered with :meth:`pandas.DataFrame.to_string` inside fenced blocks.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

import pandas as pd

logger = logging.getLogger(__name__)


def summary_statistics(df: pd.DataFrame, columns: Sequence[str]) -> pd.DataFrame:
    """Return ``describe()`` output for the given columns, one row per column."""
    return df[list(columns)].describe().T


def correlations_with_target(
    df: pd.DataFrame,
    columns: Sequence[str],
    target: str = "SalePrice",
) -> pd.Series:
    """Pearson correlation of each column with ``target``, strongest first."""
    corr = df[list(columns)].corrwith(df[target]).drop(labels=[target], errors="ignore")
    return corr.reindex(corr.abs().sort_values(ascending=False).index).rename("corr")


class ReportBuilder:
    """Accumulate report sections and write them as Markdown.

    Args:
        title: Document title rendered as the top-level heading.
    """

    def __init__(self, title: str = "Ames Housing Price Report") -> None:
        self.title = title
        self._blocks: List[Union[str, Path]] = []

    def add_heading(self, text: str, level: int = 2) -> "ReportBuilder":
        self._blocks.append(f"{'#' * level} {text}")
        return self

    def add_paragraph(self, text: str) -> "ReportBuilder":
        self._blocks.append(text.strip())
        return self

    def add_table(
        self,
        table: Union[pd.DataFrame, pd.Series],
        float_format: str = "{:,.4f}",
    ) -> "ReportBuilder":
        """Append a DataFrame or Series as a fixed-width text table."""
        if isinstance(table, pd.Series):
            table = table.to_frame()
        text = table.to_string(float_format=float_format.format)
        self._blocks.append(f"```\n{text}\n```")
        return self

    def add_key_values(self, values: Dict[str, float], fmt: str = "{:,.4f}") -> "ReportBuilder":
        lines = [f"- **{key}**: {fmt.format(value)}" for key, value in values.items()]
        self._blocks.append("\n".join(lines))
        return self

    def add_figure(self, path: Union[str, Path], caption: str = "") -> "ReportBuilder":
        # Kept as a Path so it can be made relative to the report location.
        self._blocks.append(Path(path))
        if caption:
            self._blocks.append(f"*{caption}*")
        return self

    def render(self, base_dir: Optional[Union[str, Path]] = None) -> str:
        """Render the document.

        Args:
            base_dir: Directory the Markdown file will live in.  Figure
                links are written relative to it when given.

        Returns:
            The Markdown text.
        """
        parts = [f"# {self.title}"]
        for block in self._blocks:
            if isinstance(block, Path):
                target = block
                if base_dir is not None:
                    target = Path(os.path.relpath(block, start=base_dir))
                parts.append(f"![{block.stem}]({target.as_posix()})")
            else:
                parts.append(block)
        return "\n\n".join(parts) + "\n"

    def write(self, path: Union[str, Path]) -> Path:
        """Render and write the document to ``path``."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.render(base_dir=path.parent), encoding="utf-8")
        logger.info("Report written to %s", path)
        return path
