from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd
import statsmodels.api as sm
from statsmodels.tools.sm_exceptions import PerfectSeparationError

logger = logging.getLogger(__name__)


@dataclass
class LogitResult:
    params: Dict[str, float]
    pvalues: Dict[str, float]
    bse: Dict[str, float]
    conf_int: Dict[str, Tuple[float, float]]
    summary_text: str
    feature_names: List[str]
    converged: bool

    def coefficient_table(self) -> pd.DataFrame:
        """Coefficients with standard errors, p-values, 95% CI and odds ratios."""
        keys = list(self.params.keys())
        coef_vals = [self.params[k] for k in keys]
        ci_low = [self.conf_int.get(k, (float("nan"), float("nan")))[0] for k in keys]
        ci_high = [self.conf_int.get(k, (float("nan"), float("nan")))[1] for k in keys]
        return pd.DataFrame({
            "term": keys,
            "coef": coef_vals,
            "std_err": [self.bse.get(k, float("nan")) for k in keys],
            "p_value": [self.pvalues.get(k, float("nan")) for k in keys],
            "ci_low": ci_low,
            "ci_high": ci_high,
            "OR": np.exp(coef_vals),
            "OR_CI_low": np.exp(ci_low),
            "OR_CI_high": np.exp(ci_high),
        })


def fit_logit(X_train: pd.DataFrame, y_train: pd.Series, maxiter: int = 100) -> Optional[LogitResult]:
    """Fit an unpenalized logistic regression (statsmodels) for inference on the training design.

    Columns without variation (unobserved dummy levels) are left out. Returns None when the
    design is empty, has no more rows than parameters, or the Hessian is singular.
    """
    X = X_train.loc[:, X_train.nunique() > 1]
    if X.empty:
        logger.warning("No varying predictors; skipping statsmodels Logit")
        return None

    X_sm = sm.add_constant(X, has_constant="add")
    if len(X_sm) <= X_sm.shape[1]:
        logger.warning(
            "Too few training rows (%d) for %d Logit parameters; skipping", len(X_sm), X_sm.shape[1]
        )
        return None
    try:
        logit_result = sm.Logit(y_train.astype(float), X_sm).fit(method="newton", maxiter=maxiter, disp=False)
        # covariance is inverted lazily, so a singular Hessian can surface here too
        ci_df = logit_result.conf_int()
        bse = logit_result.bse
        pvalues = logit_result.pvalues
        summary_text = str(logit_result.summary())
    except (np.linalg.LinAlgError, PerfectSeparationError) as exc:
        logger.warning("statsmodels Logit failed: %s", exc)
        return None

    converged = bool(logit_result.mle_retvals.get("converged", False))
    if not converged:
        logger.warning("statsmodels Logit did not converge within %d iterations", maxiter)

    return LogitResult(
        params={k: float(v) for k, v in logit_result.params.items()},
        pvalues={k: float(v) for k, v in pvalues.items()},
        bse={k: float(v) for k, v in bse.items()},
        conf_int={idx: (float(row.iloc[0]), float(row.iloc[1])) for idx, row in ci_df.iterrows()},
        summary_text=summary_text,
        feature_names=list(X_sm.columns),
        converged=converged,
    )
