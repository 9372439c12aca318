import pytest

from shooting_outcome_predictor.constants import REQUIRED_RAW_COLUMNS
from shooting_outcome_predictor.loader import DataLoadError, SchemaError, load_incidents

from conftest import build_raw_frame


def test_load_keeps_blank_cells_as_strings(raw_frame):
    assert len(raw_frame) == 20
    assert raw_frame.loc[18, "PERP_AGE_GROUP"] == ""
    assert raw_frame.loc[0, "PRECINCT"] == "44"
    assert raw_frame.loc[0, "INCIDENT_KEY"] == "100001"


def test_missing_file_is_a_load_error(tmp_path):
    with pytest.raises(DataLoadError):
        load_incidents(tmp_path / "does_not_exist.csv")


def test_empty_file_is_a_load_error(tmp_path):
    path = tmp_path / "empty.csv"
    path.write_text("")
    with pytest.raises(DataLoadError):
        load_incidents(path)


def test_missing_required_column_is_a_schema_error(tmp_path):
    path = tmp_path / "no_boro.csv"
    build_raw_frame().drop(columns=["BORO"]).to_csv(path, index=False)
    with pytest.raises(SchemaError, match="BORO"):
        load_incidents(path)


def test_pruned_columns_are_optional(tmp_path):
    path = tmp_path / "minimal.csv"
    build_raw_frame()[REQUIRED_RAW_COLUMNS].to_csv(path, index=False)
    raw = load_incidents(path)
    assert list(raw.columns) == REQUIRED_RAW_COLUMNS
