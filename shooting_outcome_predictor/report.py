from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict

import pandas as pd

from .evaluation import EvalResult
from .pipeline import PipelineResult

logger = logging.getLogger(__name__)


def _finite_or_none(value: float):
    return None if value is None or math.isnan(value) else float(value)


def summarize_eval(ev: EvalResult) -> Dict[str, Any]:
    """JSON-safe metric summary; undefined metrics become null."""
    tn, fp, fn, tp = ev.tn, ev.fp, ev.fn, ev.tp
    specificity = tn / (tn + fp) if (tn + fp) > 0 else float("nan")
    return {
        "n": ev.n,
        "threshold": ev.threshold,
        "reliable": ev.reliable,
        "accuracy": _finite_or_none(ev.accuracy),
        "precision": _finite_or_none(ev.precision),
        "recall": _finite_or_none(ev.recall),
        "f1": _finite_or_none(ev.f1),
        "auc": _finite_or_none(ev.auc),
        "specificity": _finite_or_none(specificity),
        # [[tn, fp], [fn, tp]]: rows actual, columns predicted
        "confusion_matrix": [[tn, fp], [fn, tp]],
    }


def confusion_frame(ev: EvalResult) -> pd.DataFrame:
    return pd.DataFrame(
        ev.cm,
        index=["actual NonFatal", "actual Fatal"],
        columns=["predicted NonFatal", "predicted Fatal"],
    )


def _fmt(value: float) -> str:
    return "undefined" if math.isnan(value) else f"{value:.4f}"


def format_report(result: PipelineResult) -> str:
    """Human-readable summary of cleaning, model and test metrics."""
    cleaning = result.cleaning
    ev = result.evaluation
    model = result.model

    lines = [
        "Shooting incident outcome model",
        "=" * 40,
        f"Raw rows:       {cleaning.n_raw}",
        f"Cleaned rows:   {len(cleaning.frame)}",
        f"Dropped rows:   {len(cleaning.dropped)}",
    ]
    for reason, count in cleaning.drop_counts.items():
        lines.append(f"  {reason}: {count}")

    lines += [
        "",
        f"Train / test:   {len(model.train)} / {len(model.test)} (seed={model.seed})",
        f"Features:       {len(model.feature_names)}",
        f"Converged:      {'yes' if model.converged else 'no'} ({model.n_iter} iterations)",
        "",
        f"Accuracy:       {_fmt(ev.accuracy)}",
        f"Precision:      {_fmt(ev.precision)}",
        f"Recall:         {_fmt(ev.recall)}",
        f"F1:             {_fmt(ev.f1)}",
        f"ROC AUC:        {_fmt(ev.auc)}",
        "",
        "Confusion matrix:",
        confusion_frame(ev).to_string(),
    ]
    if not ev.reliable:
        lines += ["", "WARNING: the model did not converge; these metrics are unreliable."]
    return "\n".join(lines)


def write_outputs(result: PipelineResult, out_dir: Path) -> None:
    """Write the summary JSON, coefficient tables, association table and dropped rows."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    results = {
        "rows": {
            "raw": result.cleaning.n_raw,
            "cleaned": len(result.cleaning.frame),
            "dropped": len(result.cleaning.dropped),
            "drop_reasons": result.cleaning.drop_counts,
        },
        "split": {
            "seed": result.model.seed,
            "train": len(result.model.train),
            "test": len(result.model.test),
        },
        "model": {
            "converged": result.model.converged,
            "n_iter": result.model.n_iter,
            "coefficients": {k: float(v) for k, v in result.model.coefficients.items()},
        },
        "evaluation": summarize_eval(result.evaluation),
    }
    with open(out_dir / "results_summary.json", "w", encoding="utf-8") as f:
        json.dump(results, f, ensure_ascii=False, indent=2)

    if result.logit is not None:
        result.logit.coefficient_table().to_csv(out_dir / "logit_coefficients.csv", index=False, encoding="utf-8")
        with open(out_dir / "logit_summary.txt", "w", encoding="utf-8") as f:
            f.write(result.logit.summary_text)

    result.association.to_csv(out_dir / "outcome_association.csv", index=False, encoding="utf-8")
    result.cleaning.dropped.to_csv(out_dir / "dropped_rows.csv", index=False, encoding="utf-8")
    logger.info("Wrote outputs to %s", out_dir)
