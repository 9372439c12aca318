from __future__ import annotations

import pandas as pd

# NYPD Shooting Incident Data (Historic), NYC Open Data
DATA_URL = "https://data.cityofnewyork.us/api/views/833y-fsy8/rows.csv?accessType=DOWNLOAD"


# Raw columns retained by the cleaner, mapped to readable names
RENAME_COLUMNS = {
    "OCCUR_DATE": "OccurDate",
    "OCCUR_TIME": "OccurTime",
    "BORO": "Borough",
    "PRECINCT": "Precinct",
    "JURISDICTION_CODE": "JurisdictionCode",
    "STATISTICAL_MURDER_FLAG": "StatisticalMurderFlag",
    "PERP_AGE_GROUP": "PerpAgeGroup",
    "PERP_SEX": "PerpSex",
    "PERP_RACE": "PerpRace",
    "VIC_AGE_GROUP": "VictimAgeGroup",
    "VIC_SEX": "VictimSex",
    "VIC_RACE": "VictimRace",
}

REQUIRED_RAW_COLUMNS = list(RENAME_COLUMNS.keys())

# Coordinates, free-text location, unique key and classification description
DROP_COLUMNS = [
    "X_COORD_CD",
    "Y_COORD_CD",
    "Latitude",
    "Longitude",
    "Lon_Lat",
    "LOCATION_DESC",
    "LOC_OF_OCCUR_DESC",
    "INCIDENT_KEY",
    "LOC_CLASSFCTN_DESC",
]


# Accepted formats, in priority order
DATE_FORMATS = ["%m/%d/%Y", "%m/%Y", "%Y/%m/%d"]
TIME_FORMATS = ["%H:%M:%S", "%H:%M"]

MURDER_FLAG_VALUES = {"true": True, "false": False}


AGE_GROUPS = ["<18", "18-24", "25-44", "45-64", "65+", "UNKNOWN"]

BOROUGHS = ["BRONX", "BROOKLYN", "MANHATTAN", "QUEENS", "STATEN ISLAND"]

SEXES = ["F", "M", "U"]

RACES = [
    "AMERICAN INDIAN/ALASKAN NATIVE",
    "ASIAN / PACIFIC ISLANDER",
    "BLACK",
    "BLACK HISPANIC",
    "WHITE",
    "WHITE HISPANIC",
    "UNKNOWN",
]

# Enumerated columns of the cleaned frame; validation runs in this order
CATEGORICAL_DOMAINS = {
    "Borough": BOROUGHS,
    "PerpAgeGroup": AGE_GROUPS,
    "PerpSex": SEXES,
    "PerpRace": RACES,
    "VictimAgeGroup": AGE_GROUPS,
    "VictimSex": SEXES,
    "VictimRace": RACES,
}

MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]


OUTCOME_COLUMN = "Outcome"
OUTCOME_FATAL = "Fatal"
OUTCOME_NON_FATAL = "NonFatal"
# NonFatal first so that label 0 / 1 lines up with category codes
OUTCOME_LEVELS = [OUTCOME_NON_FATAL, OUTCOME_FATAL]

CLEAN_COLUMNS = [
    "OccurDate",
    "OccurTime",
    "Borough",
    "Precinct",
    "JurisdictionCode",
    "PerpAgeGroup",
    "PerpSex",
    "PerpRace",
    "VictimAgeGroup",
    "VictimSex",
    "VictimRace",
    OUTCOME_COLUMN,
    "Year",
    "Month",
    "Weekday",
]


# Predictors used by the outcome model
MODEL_FEATURES = {
    "continuous": ["OccurDate", "OccurTime"],
    "categorical": ["Borough", "VictimAgeGroup", "VictimSex", "VictimRace"],
}

DATE_EPOCH = pd.Timestamp("2000-01-01")


# Group-by columns for the descriptive outcome charts
CHART_GROUPS = ["Borough", "Year", "Month", "VictimAgeGroup", "VictimRace", "VictimSex"]


DEFAULT_SEED = 42
TEST_SIZE = 0.2
MAX_ITER = 1000
THRESHOLD = 0.5


# Display labels for charts and reports
ENGLISH_LABELS = {
    "OccurDate": "Occurrence Date",
    "OccurTime": "Occurrence Time",
    "Borough": "Borough",
    "Precinct": "Precinct",
    "JurisdictionCode": "Jurisdiction Code",
    "PerpAgeGroup": "Perpetrator Age Group",
    "PerpSex": "Perpetrator Sex",
    "PerpRace": "Perpetrator Race",
    "VictimAgeGroup": "Victim Age Group",
    "VictimSex": "Victim Sex",
    "VictimRace": "Victim Race",
    "Outcome": "Outcome",
    "Year": "Year",
    "Month": "Month",
    "Weekday": "Weekday",
}
