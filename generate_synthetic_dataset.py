from __future__ import annotations

import numpy as np
import pandas as pd

from shooting_outcome_predictor.constants import AGE_GROUPS, BOROUGHS, RACES


def make_synthetic_incidents(n_incidents: int = 2000, seed: int = 42, dirty_fraction: float = 0.1) -> pd.DataFrame:
    """Raw-schema incident frame (all strings) with noisy fatal labels and some dirty rows."""
    rng = np.random.default_rng(seed)

    incident_key = 10_000_000 + rng.choice(89_999_999, size=n_incidents, replace=False)

    start = pd.Timestamp("2006-01-01")
    n_days = (pd.Timestamp("2023-12-31") - start).days
    dates = start + pd.to_timedelta(rng.integers(0, n_days + 1, size=n_incidents), unit="D")
    seconds = rng.integers(0, 24 * 3600, size=n_incidents)
    times = [f"{s // 3600:02d}:{(s % 3600) // 60:02d}:{s % 60:02d}" for s in seconds]

    boro = rng.choice(BOROUGHS, size=n_incidents, p=[0.28, 0.40, 0.12, 0.15, 0.05])
    precinct = rng.integers(1, 124, size=n_incidents)
    jurisdiction = rng.choice(["0", "1", "2"], size=n_incidents, p=[0.85, 0.03, 0.12])

    vic_age = rng.choice(AGE_GROUPS, size=n_incidents, p=[0.10, 0.36, 0.44, 0.08, 0.01, 0.01])
    vic_sex = rng.choice(["M", "F", "U"], size=n_incidents, p=[0.90, 0.09, 0.01])
    vic_race = rng.choice(RACES, size=n_incidents, p=[0.01, 0.02, 0.70, 0.10, 0.03, 0.12, 0.02])
    perp_age = rng.choice(AGE_GROUPS, size=n_incidents, p=[0.10, 0.35, 0.30, 0.05, 0.01, 0.19])
    perp_sex = rng.choice(["M", "F", "U"], size=n_incidents, p=[0.88, 0.02, 0.10])
    perp_race = rng.choice(RACES, size=n_incidents, p=[0.01, 0.01, 0.60, 0.08, 0.02, 0.10, 0.18])

    # Latent risk: older victims and late-night incidents are more often fatal
    age_effect = {"<18": -0.3, "18-24": 0.0, "25-44": 0.3, "45-64": 0.5, "65+": 0.8, "UNKNOWN": 0.0}
    hour = seconds / 3600.0
    risk = -1.6 + np.vectorize(age_effect.get)(vic_age) + 0.3 * ((hour < 5) | (hour >= 22))
    risk += 0.2 * (boro == "STATEN ISLAND")
    prob = 1 / (1 + np.exp(-risk))
    fatal = rng.random(n_incidents) < prob

    lat = np.round(rng.uniform(40.50, 40.91, size=n_incidents), 6)
    lon = np.round(rng.uniform(-74.25, -73.70, size=n_incidents), 6)

    df = pd.DataFrame({
        "INCIDENT_KEY": incident_key.astype(str),
        "OCCUR_DATE": dates.strftime("%m/%d/%Y"),
        "OCCUR_TIME": times,
        "BORO": boro,
        "LOC_OF_OCCUR_DESC": rng.choice(["INSIDE", "OUTSIDE", ""], size=n_incidents),
        "PRECINCT": precinct.astype(str),
        "JURISDICTION_CODE": jurisdiction,
        "LOC_CLASSFCTN_DESC": rng.choice(["STREET", "HOUSING", "DWELLING", ""], size=n_incidents),
        "LOCATION_DESC": rng.choice(["MULTI DWELL - PUBLIC HOUS", "GROCERY/BODEGA", "(null)", ""], size=n_incidents),
        "STATISTICAL_MURDER_FLAG": np.where(fatal, "true", "false"),
        "PERP_AGE_GROUP": perp_age,
        "PERP_SEX": perp_sex,
        "PERP_RACE": perp_race,
        "VIC_AGE_GROUP": vic_age,
        "VIC_SEX": vic_sex,
        "VIC_RACE": vic_race,
        "X_COORD_CD": np.round(rng.uniform(913000, 1067000, size=n_incidents), 1).astype(str),
        "Y_COORD_CD": np.round(rng.uniform(121000, 271000, size=n_incidents), 1).astype(str),
        "Latitude": lat.astype(str),
        "Longitude": lon.astype(str),
        "Lon_Lat": [f"POINT ({x} {y})" for x, y in zip(lon, lat)],
    })

    # Dirty rows: unsolved cases (blank perpetrator), sentinel age groups, bad dates
    n_dirty = int(n_incidents * dirty_fraction)
    dirty_idx = rng.choice(n_incidents, size=n_dirty, replace=False)
    kinds = rng.choice(["unsolved", "perp_sentinel", "victim_sentinel", "bad_date"], size=n_dirty, p=[0.6, 0.15, 0.1, 0.15])
    for idx, kind in zip(dirty_idx, kinds):
        if kind == "unsolved":
            df.loc[idx, ["PERP_AGE_GROUP", "PERP_SEX", "PERP_RACE"]] = ""
        elif kind == "perp_sentinel":
            df.loc[idx, "PERP_AGE_GROUP"] = rng.choice(["1020", "224", "940"])
        elif kind == "victim_sentinel":
            df.loc[idx, "VIC_AGE_GROUP"] = "1022"
        else:
            df.loc[idx, "OCCUR_DATE"] = "13/45/2020"

    return df


if __name__ == "__main__":
    df = make_synthetic_incidents()
    df.to_csv("synthetic_shooting_incidents.csv", index=False)
    print("Synthetic dataset written to synthetic_shooting_incidents.csv with shape:", df.shape)
