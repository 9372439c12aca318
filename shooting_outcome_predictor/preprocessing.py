from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple

import numpy as np
import pandas as pd

from .constants import (
    CATEGORICAL_DOMAINS,
    CLEAN_COLUMNS,
    DATE_EPOCH,
    DATE_FORMATS,
    DROP_COLUMNS,
    MODEL_FEATURES,
    MONTHS,
    MURDER_FLAG_VALUES,
    OUTCOME_COLUMN,
    OUTCOME_FATAL,
    OUTCOME_LEVELS,
    OUTCOME_NON_FATAL,
    RENAME_COLUMNS,
    REQUIRED_RAW_COLUMNS,
    TIME_FORMATS,
    WEEKDAYS,
)
from .loader import validate_schema

logger = logging.getLogger(__name__)

DROP_REASON_COLUMN = "drop_reason"


@dataclass(frozen=True)
class CleaningResult:
    frame: pd.DataFrame
    dropped: pd.DataFrame
    n_raw: int

    @property
    def drop_counts(self) -> Dict[str, int]:
        """Number of discarded rows per reason."""
        if self.dropped.empty:
            return {}
        counts = self.dropped[DROP_REASON_COLUMN].value_counts()
        return {str(k): int(v) for k, v in counts.items()}


def prune_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Drop coordinate, free-text location, key and classification columns when present."""
    return df.drop(columns=[c for c in DROP_COLUMNS if c in df.columns])


def normalize_text(df: pd.DataFrame) -> pd.DataFrame:
    """Cast every column to trimmed strings; NA becomes an empty string."""
    return df.astype("string").fillna("").apply(lambda s: s.str.strip())


def parse_first_match(values: pd.Series, formats: Sequence[str]) -> pd.Series:
    """Parse datetimes trying each format in order; the first format that matches wins.

    Values no format accepts come back as NaT.
    """
    parsed = pd.to_datetime(values, format=formats[0], errors="coerce")
    for fmt in formats[1:]:
        parsed = parsed.fillna(pd.to_datetime(values, format=fmt, errors="coerce"))
    return parsed


def parse_times(values: pd.Series, formats: Sequence[str] = TIME_FORMATS) -> pd.Series:
    """Parse clock times into offsets since midnight (NaT when unparsable)."""
    parsed = parse_first_match(values, formats)
    return parsed - parsed.dt.normalize()


def parse_murder_flag(values: pd.Series) -> pd.Series:
    """Map 'true'/'false' (any case) to booleans; anything else becomes NaN."""
    return values.astype("string").str.strip().str.lower().map(MURDER_FLAG_VALUES).astype(object)


def derive_outcome(flags: pd.Series) -> pd.Series:
    mapping = {True: OUTCOME_FATAL, False: OUTCOME_NON_FATAL}
    return flags.map(mapping).astype(pd.CategoricalDtype(OUTCOME_LEVELS))


def clean_incidents(raw: pd.DataFrame) -> CleaningResult:
    """Turn the raw incident frame into a complete, validated frame.

    A row is discarded when any retained field is blank, the date or time does not parse,
    the murder flag is not a boolean literal, or a categorical value falls outside its
    enumeration. Discarding whole rows instead of imputing is deliberate: perpetrator
    fields are blank for unsolved cases, and keeping partial rows would bias the
    categorical counts. The cost is sample size.

    Each dropped row keeps its first failing reason. Retained rows keep their raw index
    and input order.
    """
    validate_schema(raw)
    text = normalize_text(prune_columns(raw)[REQUIRED_RAW_COLUMNS].rename(columns=RENAME_COLUMNS))

    dates = parse_first_match(text["OccurDate"], DATE_FORMATS)
    times = parse_times(text["OccurTime"])
    flags = parse_murder_flag(text["StatisticalMurderFlag"])

    checks: List[Tuple[str, pd.Series]] = [
        ("missing_field", text.eq("").any(axis=1)),
        ("unparsable_date", dates.isna()),
        ("unparsable_time", times.isna()),
        ("invalid_murder_flag", flags.isna()),
    ]
    checks += [(f"invalid_{col}", ~text[col].isin(domain)) for col, domain in CATEGORICAL_DOMAINS.items()]

    reasons = np.select(
        [mask.to_numpy(dtype=bool) for _, mask in checks],
        [reason for reason, _ in checks],
        default="",
    )
    keep = reasons == ""

    kept_dates = dates.loc[keep]
    categoricals = {
        col: text.loc[keep, col].astype(object).astype(pd.CategoricalDtype(domain))
        for col, domain in CATEGORICAL_DOMAINS.items()
    }
    cleaned = text.loc[keep, ["Precinct", "JurisdictionCode"]].astype(object).assign(
        OccurDate=kept_dates,
        OccurTime=times.loc[keep],
        Year=kept_dates.dt.year.astype(int),
        Month=kept_dates.dt.month_name().astype(pd.CategoricalDtype(MONTHS, ordered=True)),
        Weekday=kept_dates.dt.day_name().astype(pd.CategoricalDtype(WEEKDAYS, ordered=True)),
        **categoricals,
    )
    cleaned[OUTCOME_COLUMN] = derive_outcome(flags.loc[keep])
    cleaned = cleaned[CLEAN_COLUMNS]

    dropped = raw.loc[~keep].assign(**{DROP_REASON_COLUMN: reasons[~keep]})
    result = CleaningResult(frame=cleaned, dropped=dropped, n_raw=len(raw))

    logger.info(
        "Cleaning kept %d of %d rows (%d dropped)", len(cleaned), len(raw), len(dropped)
    )
    for reason, count in result.drop_counts.items():
        logger.info("  dropped %d rows: %s", count, reason)
    return result


def years_since_epoch(dates: pd.Series) -> pd.Series:
    return (dates - DATE_EPOCH).dt.days / 365.25


def hour_of_day(times: pd.Series) -> pd.Series:
    return times.dt.total_seconds() / 3600.0


CONTINUOUS_ENCODERS: Dict[str, Callable[[pd.Series], pd.Series]] = {
    "OccurDate": years_since_epoch,
    "OccurTime": hour_of_day,
    "Year": lambda s: s.astype(float),
}


def encode_features(frame: pd.DataFrame, features: Dict[str, List[str]] = MODEL_FEATURES) -> pd.DataFrame:
    """Numeric design matrix: continuous columns as floats, categoricals one-hot.

    Dummy columns come from the declared categories, first category dropped as reference,
    so every frame cleaned from the same schema yields the same columns.
    """
    continuous = pd.DataFrame(
        {col: CONTINUOUS_ENCODERS[col](frame[col]) for col in features.get("continuous", [])},
        index=frame.index,
    )
    categorical = features.get("categorical", [])
    if not categorical:
        return continuous
    dummies = pd.get_dummies(frame[categorical], prefix_sep="=", drop_first=True, dtype=float)
    return pd.concat([continuous, dummies], axis=1)


def outcome_labels(frame: pd.DataFrame) -> pd.Series:
    """Outcome as 0/1 with Fatal = 1."""
    return (frame[OUTCOME_COLUMN] == OUTCOME_FATAL).astype(int).rename("fatal")


def select_feature_frames(
    frame: pd.DataFrame, features: Dict[str, List[str]] = MODEL_FEATURES
) -> Tuple[pd.DataFrame, pd.Series]:
    """Encoded predictors and binary target for the cleaned frame."""
    return encode_features(frame, features), outcome_labels(frame)


def zscore_normalize_continuous(
    X_train: pd.DataFrame,
    X_test: pd.DataFrame,
    continuous: Sequence[str] = MODEL_FEATURES["continuous"],
) -> Tuple[pd.DataFrame, pd.DataFrame, List[str]]:
    """Z-score scale continuous features using train stats only.

    One-hot columns are not scaled.
    Returns scaled X_train, X_test and the list of columns that were scaled.
    """
    scale_cols: List[str] = [c for c in continuous if c in X_train.columns]

    X_train_norm = X_train.copy()
    X_test_norm = X_test.copy()

    if len(scale_cols) == 0:
        return X_train_norm, X_test_norm, scale_cols

    mu = X_train_norm[scale_cols].mean(axis=0)
    sd = X_train_norm[scale_cols].std(axis=0)

    # Avoid divide-by-zero
    sd_repaired = sd.replace(0, 1.0)
    sd_repaired = sd_repaired.mask(~np.isfinite(sd_repaired), 1.0)

    X_train_norm[scale_cols] = (X_train_norm[scale_cols] - mu) / sd_repaired
    common_cols = [c for c in scale_cols if c in X_test_norm.columns]
    X_test_norm[common_cols] = (X_test_norm[common_cols] - mu[common_cols]) / sd_repaired[common_cols]

    return X_train_norm, X_test_norm, scale_cols
