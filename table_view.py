from typing import Iterable

import pandas as pd

from normalizers.models import PersonRecord

COLUMNS = [
"name",
"born",
"died",
"age_at_death"
]

YEAR_COLUMNS = ["born", "died", "age_at_death"]


def to_frame(records: Iterable[PersonRecord]) -> pd.DataFrame:

    df = pd.DataFrame([r.model_dump() for r in records], columns=COLUMNS)

    for col in YEAR_COLUMNS:
        df[col] = df[col].astype("Int64")

    return df


def plot_frame(records: Iterable[PersonRecord], current_year: int) -> pd.DataFrame:
    """
    Table for lifespan bars: `alive` flags unknown deaths and
    `died_or_now` puts current_year in their place. Records are untouched.
    """
    df = to_frame(records).copy()

    df["alive"] = df["died"].isna()
    df["died_or_now"] = df["died"].fillna(current_year).astype("Int64")

    return df


def write_csv(records: Iterable[PersonRecord], path: str) -> pd.DataFrame:

    df = to_frame(records)

    df.to_csv(path, index=False)

    return df
