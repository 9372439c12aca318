"""
Descriptive outcome charts.

Each chart is a count of incidents per group value, split by Outcome. The frame is only read.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Sequence

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns
from matplotlib.figure import Figure

from .constants import CHART_GROUPS, ENGLISH_LABELS, OUTCOME_COLUMN, OUTCOME_LEVELS

logger = logging.getLogger(__name__)

OUTCOME_PALETTE = {"NonFatal": "#4c72b0", "Fatal": "#c44e52"}


@dataclass
class Chart:
    name: str
    group_column: str
    counts: pd.DataFrame
    figure: Figure


def configure_matplotlib() -> None:
    sns.set_theme(style="whitegrid")
    plt.rcParams.update({"axes.spines.right": False, "axes.spines.top": False})


def outcome_counts(frame: pd.DataFrame, by: str) -> pd.DataFrame:
    """Incident counts per observed value of ``by`` (rows) and Outcome (columns).

    Rows follow category order for categoricals and sorted order otherwise.
    """
    counts = (
        frame.groupby([by, OUTCOME_COLUMN], observed=True)
        .size()
        .unstack(fill_value=0)
    )
    counts.columns = counts.columns.astype(str)
    counts = counts.reindex(columns=OUTCOME_LEVELS, fill_value=0).astype(int)
    counts.columns.name = OUTCOME_COLUMN
    return counts


def plot_outcome_counts(counts: pd.DataFrame, by: str) -> Figure:
    """Grouped bar chart of an ``outcome_counts`` table."""
    label = ENGLISH_LABELS.get(by, by)
    long_df = counts.reset_index().melt(id_vars=by, var_name=OUTCOME_COLUMN, value_name="count")
    long_df[by] = long_df[by].astype(str)
    order = [str(v) for v in counts.index]

    width = max(6.0, 0.6 * len(order) + 2.0)
    fig, ax = plt.subplots(figsize=(width, 5))
    sns.barplot(
        data=long_df,
        x=by,
        y="count",
        hue=OUTCOME_COLUMN,
        order=order,
        hue_order=OUTCOME_LEVELS,
        palette=OUTCOME_PALETTE,
        ax=ax,
    )
    ax.set_title(f"Shooting incidents by {label} and outcome")
    ax.set_xlabel(label)
    ax.set_ylabel("Incidents")
    if len(order) > 6:
        ax.tick_params(axis="x", labelrotation=45)
    fig.tight_layout()
    return fig


def render_charts(
    frame: pd.DataFrame,
    groups: Sequence[str] = CHART_GROUPS,
    out_dir: Optional[Path] = None,
) -> Dict[str, Chart]:
    """Build one outcome chart per group column; save PNGs when ``out_dir`` is given."""
    configure_matplotlib()
    if out_dir is not None:
        out_dir = Path(out_dir)
        out_dir.mkdir(parents=True, exist_ok=True)

    charts: Dict[str, Chart] = {}
    for by in groups:
        counts = outcome_counts(frame, by)
        name = f"outcome_by_{by}"
        fig = plot_outcome_counts(counts, by)
        if out_dir is not None:
            path = out_dir / f"{name}.png"
            fig.savefig(path, dpi=150, bbox_inches="tight")
            logger.info("Saved chart %s", path)
        charts[name] = Chart(name=name, group_column=by, counts=counts, figure=fig)
    return charts


def close_charts(charts: Dict[str, Chart]) -> None:
    for chart in charts.values():
        plt.close(chart.figure)
