from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass
from typing import Dict, List, Tuple

import numpy as np
import pandas as pd
from sklearn.exceptions import ConvergenceWarning
from sklearn.linear_model import LogisticRegression
from sklearn.model_selection import train_test_split

from .constants import DEFAULT_SEED, MAX_ITER, MODEL_FEATURES, TEST_SIZE
from .preprocessing import outcome_labels, select_feature_frames, zscore_normalize_continuous

logger = logging.getLogger(__name__)


@dataclass
class ModelResult:
    model: LogisticRegression
    feature_names: List[str]
    scaled_columns: List[str]
    train: pd.DataFrame
    test: pd.DataFrame
    X_train: pd.DataFrame
    X_test: pd.DataFrame
    y_train: pd.Series
    y_test: pd.Series
    converged: bool
    n_iter: int
    seed: int

    @property
    def coefficients(self) -> pd.Series:
        """Fitted coefficients by feature name, intercept first."""
        coef = pd.Series(self.model.coef_[0], index=self.feature_names)
        return pd.concat([pd.Series({"intercept": float(self.model.intercept_[0])}), coef])

    def predict_proba_test(self) -> np.ndarray:
        """P(Fatal) for every test row."""
        return self.model.predict_proba(self.X_test)[:, 1]


def split_train_test(
    frame: pd.DataFrame,
    seed: int = DEFAULT_SEED,
    test_size: float = TEST_SIZE,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Stratified train/test partition on Outcome.

    The seed is the only source of randomness; the same seed and frame give the same rows.
    """
    positions = np.arange(len(frame))
    train_pos, test_pos = train_test_split(
        positions,
        test_size=test_size,
        random_state=seed,
        stratify=outcome_labels(frame).to_numpy(),
    )
    return frame.iloc[np.sort(train_pos)], frame.iloc[np.sort(test_pos)]


def fit_logistic_regression(
    X_train: pd.DataFrame,
    y_train: pd.Series,
    max_iter: int = MAX_ITER,
    random_state: int = DEFAULT_SEED,
) -> Tuple[LogisticRegression, bool]:
    """Fit a binary logistic regression; return the estimator and whether it converged."""
    clf = LogisticRegression(max_iter=max_iter, random_state=random_state)
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", ConvergenceWarning)
        clf.fit(X_train, y_train)
    converged = not any(issubclass(w.category, ConvergenceWarning) for w in caught)
    return clf, converged


def train_outcome_model(
    frame: pd.DataFrame,
    seed: int = DEFAULT_SEED,
    test_size: float = TEST_SIZE,
    max_iter: int = MAX_ITER,
    features: Dict[str, List[str]] = MODEL_FEATURES,
) -> ModelResult:
    """Split the cleaned frame, encode the predictors and fit the outcome model.

    Continuous predictors are standardized with train statistics. A model that hits
    ``max_iter`` is still returned, flagged as not converged.
    """
    labels = outcome_labels(frame)
    if labels.nunique() < 2:
        raise ValueError("Outcome has a single class; a classifier cannot be fitted")

    train, test = split_train_test(frame, seed=seed, test_size=test_size)
    X_train, y_train = select_feature_frames(train, features)
    X_test, y_test = select_feature_frames(test, features)
    X_train, X_test, scaled = zscore_normalize_continuous(
        X_train, X_test, features.get("continuous", [])
    )
    logger.info(
        "Split %d rows into %d train / %d test (seed=%d, fatal rate train=%.3f test=%.3f)",
        len(frame), len(train), len(test), seed, y_train.mean(), y_test.mean(),
    )

    clf, converged = fit_logistic_regression(X_train, y_train, max_iter=max_iter, random_state=seed)
    n_iter = int(np.max(clf.n_iter_))
    if converged:
        logger.info("Logistic regression converged in %d iterations (%d features)", n_iter, X_train.shape[1])
    else:
        logger.warning(
            "Logistic regression did not converge within %d iterations; evaluation is unreliable",
            max_iter,
        )

    return ModelResult(
        model=clf,
        feature_names=list(X_train.columns),
        scaled_columns=scaled,
        train=train,
        test=test,
        X_train=X_train,
        X_test=X_test,
        y_train=y_train,
        y_test=y_test,
        converged=converged,
        n_iter=n_iter,
        seed=seed,
    )
