import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402
import pytest  # noqa: E402

from generate_synthetic_dataset import make_synthetic_incidents  # noqa: E402
from shooting_outcome_predictor.loader import load_incidents  # noqa: E402
from shooting_outcome_predictor.preprocessing import clean_incidents  # noqa: E402

HEADER = [
    "INCIDENT_KEY", "OCCUR_DATE", "OCCUR_TIME", "BORO", "LOC_OF_OCCUR_DESC", "PRECINCT",
    "JURISDICTION_CODE", "LOC_CLASSFCTN_DESC", "LOCATION_DESC", "STATISTICAL_MURDER_FLAG",
    "PERP_AGE_GROUP", "PERP_SEX", "PERP_RACE", "VIC_AGE_GROUP", "VIC_SEX", "VIC_RACE",
    "X_COORD_CD", "Y_COORD_CD", "Latitude", "Longitude", "Lon_Lat",
]

COORDS = ("1009000.0", "240000.0", "40.81", "-73.91", "POINT (-73.91 40.81)")

# 20 incidents; the last three fail cleaning (perp sentinel age, unsolved case, victim sentinel age)
ROWS = [
    ("100001", "01/15/2020", "21:30:00", "BRONX", "OUTSIDE", "44", "0", "STREET", "", "true", "18-24", "M", "BLACK", "25-44", "M", "BLACK"),
    ("100002", "02/03/2020", "01:05:00", "BRONX", "OUTSIDE", "46", "0", "STREET", "", "false", "25-44", "M", "BLACK HISPANIC", "18-24", "M", "BLACK"),
    ("100003", "03/22/2020", "14:45:00", "BRONX", "INSIDE", "40", "2", "HOUSING", "MULTI DWELL - PUBLIC HOUS", "false", "UNKNOWN", "U", "UNKNOWN", "<18", "F", "WHITE HISPANIC"),
    ("100004", "04/10/2021", "23:59:59", "BRONX", "", "42", "0", "", "", "TRUE", "25-44", "M", "BLACK", "25-44", "M", "BLACK"),
    ("100005", "2021/03/14", "02:15:00", "BROOKLYN", "OUTSIDE", "75", "0", "STREET", "", "false", "18-24", "M", "BLACK", "18-24", "M", "BLACK"),
    ("100006", "07/2020", "18:20", "BROOKLYN", "OUTSIDE", "73", "0", "STREET", "", "false", "<18", "M", "BLACK", "25-44", "F", "BLACK"),
    ("100007", "05/05/2019", "03:10:00", "BROOKLYN", "INSIDE", "67", "2", "DWELLING", "", "true", "45-64", "M", "WHITE", "45-64", "M", "WHITE"),
    ("100008", "06/18/2019", "22:40:00", "BROOKLYN", "OUTSIDE", "77", "0", "STREET", "", "false", "UNKNOWN", "U", "UNKNOWN", "18-24", "M", "BLACK"),
    ("100009", "08/30/2022", "12:00:00", "BROOKLYN", "OUTSIDE", "79", "0", "STREET", "", "false", "18-24", "M", "BLACK", "25-44", "M", "BLACK HISPANIC"),
    ("100010", "09/09/2022", "20:15:00", "MANHATTAN", "OUTSIDE", "25", "0", "STREET", "", "false", "25-44", "M", "BLACK HISPANIC", "18-24", "M", "WHITE HISPANIC"),
    ("100011", "10/31/2022", "00:30:00", "MANHATTAN", "INSIDE", "32", "0", "", "", "true", "45-64", "M", "BLACK", "65+", "M", "BLACK"),
    ("100012", "11/11/2021", "16:45:00", "MANHATTAN", "OUTSIDE", "28", "0", "STREET", "", "false", "18-24", "F", "WHITE HISPANIC", "25-44", "F", "BLACK"),
    ("100013", "12/24/2021", "19:00:00", "QUEENS", "OUTSIDE", "113", "0", "STREET", "", "false", "25-44", "M", "ASIAN / PACIFIC ISLANDER", "18-24", "M", "ASIAN / PACIFIC ISLANDER"),
    ("100014", "01/01/2023", "02:02:00", "QUEENS", "INSIDE", "103", "2", "HOUSING", "", "true", "UNKNOWN", "U", "UNKNOWN", "25-44", "M", "BLACK"),
    ("100015", "02/14/2023", "15:30:00", "QUEENS", "OUTSIDE", "101", "0", "STREET", "", "false", "18-24", "M", "BLACK", "<18", "M", "BLACK"),
    ("100016", "03/03/2023", "11:11:00", "STATEN ISLAND", "OUTSIDE", "120", "0", "STREET", "", "false", "25-44", "M", "WHITE", "25-44", "M", "WHITE"),
    ("100017", "04/04/2023", "04:44:00", "STATEN ISLAND", "OUTSIDE", "121", "0", "STREET", "", "true", "18-24", "M", "BLACK", "18-24", "M", "BLACK"),
    ("100018", "05/20/2020", "22:22:00", "BRONX", "OUTSIDE", "47", "0", "STREET", "", "false", "1020", "M", "BLACK", "18-24", "M", "BLACK"),
    ("100019", "06/06/2020", "23:00:00", "BROOKLYN", "OUTSIDE", "81", "0", "STREET", "", "true", "", "", "", "25-44", "M", "BLACK"),
    ("100020", "07/07/2020", "13:13:00", "QUEENS", "OUTSIDE", "105", "0", "STREET", "", "false", "25-44", "M", "BLACK", "940", "M", "BLACK"),
]

# Hand-computed from the 17 rows that survive cleaning
EXPECTED_BOROUGH_COUNTS = {
    "BRONX": {"NonFatal": 2, "Fatal": 2},
    "BROOKLYN": {"NonFatal": 4, "Fatal": 1},
    "MANHATTAN": {"NonFatal": 2, "Fatal": 1},
    "QUEENS": {"NonFatal": 2, "Fatal": 1},
    "STATEN ISLAND": {"NonFatal": 1, "Fatal": 1},
}

EXPECTED_DROP_COUNTS = {
    "invalid_PerpAgeGroup": 1,
    "missing_field": 1,
    "invalid_VictimAgeGroup": 1,
}


def build_raw_frame() -> pd.DataFrame:
    return pd.DataFrame([row + COORDS for row in ROWS], columns=HEADER)


@pytest.fixture
def raw_csv(tmp_path):
    path = tmp_path / "incidents.csv"
    build_raw_frame().to_csv(path, index=False)
    return path


@pytest.fixture
def raw_frame(raw_csv):
    return load_incidents(raw_csv)


@pytest.fixture
def cleaned(raw_frame):
    return clean_incidents(raw_frame)


@pytest.fixture(scope="session")
def synthetic_raw():
    return make_synthetic_incidents(n_incidents=1500, seed=7)


@pytest.fixture(scope="session")
def synthetic_clean(synthetic_raw):
    return clean_incidents(synthetic_raw).frame


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")
