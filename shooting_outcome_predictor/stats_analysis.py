from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import List

import numpy as np
import pandas as pd
from scipy.stats import chi2_contingency

from .constants import ENGLISH_LABELS, OUTCOME_COLUMN


@dataclass
class AssociationResult:
    feature: str
    feature_english: str
    n_levels: int
    chi2: float
    dof: int
    p_value: float
    cramers_v: float
    significant: bool


def outcome_association(frame: pd.DataFrame, features: List[str]) -> pd.DataFrame:
    """Chi-square test of independence between each categorical feature and Outcome.

    Levels or outcomes that never occur are left out of the contingency table; a feature
    with fewer than two observed levels reports NaN.
    """
    rows = []
    for feature in features:
        if feature not in frame.columns:
            continue

        ct = pd.crosstab(frame[feature].astype(str), frame[OUTCOME_COLUMN].astype(str))
        ct = ct.loc[ct.sum(axis=1) > 0, ct.sum(axis=0) > 0]

        if ct.shape[0] < 2 or ct.shape[1] < 2:
            chi2, dof, p, v = float("nan"), 0, float("nan"), float("nan")
        else:
            chi2, p, dof, _ = chi2_contingency(ct)
            n = ct.to_numpy().sum()
            v = float(np.sqrt(chi2 / (n * (min(ct.shape) - 1))))

        rows.append(asdict(AssociationResult(
            feature=feature,
            feature_english=ENGLISH_LABELS.get(feature, feature),
            n_levels=int(ct.shape[0]),
            chi2=float(chi2),
            dof=int(dof),
            p_value=float(p),
            cramers_v=v,
            significant=bool(p < 0.05),
        )))

    df_res = pd.DataFrame(rows)
    if not df_res.empty:
        df_res = df_res.sort_values("p_value").reset_index(drop=True)
    return df_res
