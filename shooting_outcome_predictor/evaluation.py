from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from sklearn.metrics import (
    accuracy_score,
    confusion_matrix,
    precision_score,
    recall_score,
    roc_auc_score,
)

from .constants import THRESHOLD
from .modeling import ModelResult

logger = logging.getLogger(__name__)


@dataclass
class EvalResult:
    accuracy: float
    precision: float
    recall: float
    f1: float
    auc: float
    cm: np.ndarray
    n: int
    threshold: float = THRESHOLD
    reliable: bool = True

    @property
    def tn(self) -> int:
        return int(self.cm[0, 0])

    @property
    def fp(self) -> int:
        return int(self.cm[0, 1])

    @property
    def fn(self) -> int:
        return int(self.cm[1, 0])

    @property
    def tp(self) -> int:
        return int(self.cm[1, 1])


def f1_from_precision_recall(precision: float, recall: float) -> float:
    """Harmonic mean of precision and recall; NaN when undefined."""
    if np.isnan(precision) or np.isnan(recall) or precision + recall == 0:
        return float("nan")
    return 2 * precision * recall / (precision + recall)


def evaluate_predictions(
    y_true: np.ndarray,
    y_prob: np.ndarray,
    threshold: float = THRESHOLD,
    reliable: bool = True,
) -> EvalResult:
    """Compute classification metrics at a fixed threshold (default 0.5).

    Precision and recall are NaN when their denominator is zero, never an error.
    The confusion matrix is indexed [actual, predicted] over labels 0 and 1.
    """
    y_true = np.asarray(y_true).astype(int)
    y_prob = np.asarray(y_prob, dtype=float)
    y_pred = (y_prob >= threshold).astype(int)

    if len(y_true) == 0:
        nan = float("nan")
        return EvalResult(nan, nan, nan, nan, nan, np.zeros((2, 2), dtype=int), 0, threshold, reliable)

    precision = float(precision_score(y_true, y_pred, pos_label=1, zero_division=np.nan))
    recall = float(recall_score(y_true, y_pred, pos_label=1, zero_division=np.nan))
    try:
        model_auc = float(roc_auc_score(y_true, y_prob))
    except ValueError:
        # only one class present in y_true
        model_auc = float("nan")

    return EvalResult(
        accuracy=float(accuracy_score(y_true, y_pred)),
        precision=precision,
        recall=recall,
        f1=f1_from_precision_recall(precision, recall),
        auc=model_auc,
        cm=confusion_matrix(y_true, y_pred, labels=[0, 1]),
        n=int(len(y_true)),
        threshold=threshold,
        reliable=reliable,
    )


def evaluate_model(result: ModelResult, threshold: float = THRESHOLD) -> EvalResult:
    """Score the held-out partition of a fitted outcome model."""
    ev = evaluate_predictions(
        result.y_test.to_numpy(),
        result.predict_proba_test(),
        threshold=threshold,
        reliable=result.converged,
    )
    if not ev.reliable:
        logger.warning("Metrics come from a model that did not converge")
    logger.info(
        "Test metrics: accuracy=%.3f precision=%.3f recall=%.3f f1=%.3f auc=%.3f",
        ev.accuracy, ev.precision, ev.recall, ev.f1, ev.auc,
    )
    return ev
