import math

import numpy as np
import pandas as pd

from shooting_outcome_predictor.constants import MODEL_FEATURES
from shooting_outcome_predictor.logit_model import fit_logit
from shooting_outcome_predictor.stats_analysis import outcome_association


def test_outcome_association_on_synthetic(synthetic_clean):
    res = outcome_association(synthetic_clean, MODEL_FEATURES["categorical"])
    assert set(res["feature"]) == set(MODEL_FEATURES["categorical"])
    assert res["p_value"].between(0, 1).all()
    assert res["cramers_v"].between(0, 1).all()
    assert res["p_value"].is_monotonic_increasing


def test_single_level_feature_reports_nan(cleaned):
    bronx = cleaned.frame[cleaned.frame["Borough"] == "BRONX"]
    res = outcome_association(bronx, ["Borough", "Missing"])
    assert list(res["feature"]) == ["Borough"]
    row = res.iloc[0]
    assert math.isnan(row["p_value"])
    assert not row["significant"]


def make_logit_design(n=400, seed=0):
    rng = np.random.default_rng(seed)
    X = pd.DataFrame({
        "x1": rng.normal(size=n),
        "x2": rng.normal(size=n),
        "flat": np.ones(n),
    })
    logits = -0.5 + 1.2 * X["x1"] - 0.8 * X["x2"]
    y = pd.Series((rng.random(n) < 1 / (1 + np.exp(-logits))).astype(int))
    return X, y


def test_fit_logit_coefficient_table():
    X, y = make_logit_design()
    res = fit_logit(X, y)
    assert res is not None
    assert res.converged
    # constant column dropped before adding the intercept
    assert res.feature_names == ["const", "x1", "x2"]
    assert res.params["x1"] > 0 > res.params["x2"]

    table = res.coefficient_table()
    assert list(table["term"]) == ["const", "x1", "x2"]
    np.testing.assert_allclose(table["OR"], np.exp(table["coef"]))
    assert (table["ci_low"] <= table["coef"]).all()
    assert (table["coef"] <= table["ci_high"]).all()
    assert "Logit" in res.summary_text


def test_fit_logit_without_varying_predictors():
    X = pd.DataFrame({"flat": np.ones(10)})
    y = pd.Series([0, 1] * 5)
    assert fit_logit(X, y) is None


def test_fit_logit_with_too_few_rows():
    X, y = make_logit_design(n=3)
    assert fit_logit(X, y) is None
