from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

import pandas as pd

from .constants import DATA_URL, DEFAULT_SEED, MAX_ITER, MODEL_FEATURES, TEST_SIZE, THRESHOLD
from .evaluation import EvalResult, evaluate_model
from .loader import load_incidents
from .logit_model import LogitResult, fit_logit
from .modeling import ModelResult, train_outcome_model
from .preprocessing import CleaningResult, clean_incidents
from .stats_analysis import outcome_association
from .visualization import Chart, render_charts

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    cleaning: CleaningResult
    charts: Dict[str, Chart]
    association: pd.DataFrame
    model: ModelResult
    logit: Optional[LogitResult]
    evaluation: EvalResult


def run_pipeline(
    source: Union[str, Path, pd.DataFrame] = DATA_URL,
    seed: int = DEFAULT_SEED,
    test_size: float = TEST_SIZE,
    max_iter: int = MAX_ITER,
    threshold: float = THRESHOLD,
    render: bool = True,
    chart_dir: Optional[Path] = None,
) -> PipelineResult:
    """Load, clean, chart, model and evaluate in one pass.

    ``source`` may be a URL, a path, or an already loaded raw frame.
    """
    raw = source if isinstance(source, pd.DataFrame) else load_incidents(source)
    cleaning = clean_incidents(raw)
    frame = cleaning.frame

    charts = render_charts(frame, out_dir=chart_dir) if render else {}

    association = outcome_association(frame, MODEL_FEATURES["categorical"])

    model = train_outcome_model(frame, seed=seed, test_size=test_size, max_iter=max_iter)
    logit = fit_logit(model.X_train, model.y_train)
    evaluation = evaluate_model(model, threshold=threshold)

    return PipelineResult(
        cleaning=cleaning,
        charts=charts,
        association=association,
        model=model,
        logit=logit,
        evaluation=evaluation,
    )
