from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

import pandas as pd

from .constants import DATA_URL, REQUIRED_RAW_COLUMNS

logger = logging.getLogger(__name__)


class DataLoadError(RuntimeError):
    """Raised when the incident CSV cannot be read."""


class SchemaError(DataLoadError):
    """Raised when the incident CSV lacks required columns."""


def validate_schema(raw: pd.DataFrame) -> None:
    """Raise SchemaError if any retained raw column is absent."""
    missing = [c for c in REQUIRED_RAW_COLUMNS if c not in raw.columns]
    if missing:
        raise SchemaError(f"Incident data is missing required columns: {', '.join(missing)}")


def load_incidents(source: Union[str, Path] = DATA_URL) -> pd.DataFrame:
    """Read the raw incident CSV from a URL or local path, all columns as strings.

    Blank cells are kept as empty strings so the cleaner decides what counts as missing.
    """
    logger.info("Loading incident data from %s", source)
    try:
        raw = pd.read_csv(source, dtype=str, keep_default_na=False)
    except (OSError, ValueError) as exc:
        # URLError/HTTPError are OSErrors; ParserError/EmptyDataError are ValueErrors
        raise DataLoadError(f"Could not load incident data from {source}: {exc}") from exc

    validate_schema(raw)
    logger.info("Loaded %d rows x %d columns", raw.shape[0], raw.shape[1])
    return raw
