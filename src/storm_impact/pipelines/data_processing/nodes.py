"""Raw → tidy transformation nodes for the NOAA Storm Data.

Each function is a Kedro node: pure input → output, no side effects.
Together they form the data_processing pipeline that takes the raw
37-column StormData table and produces the tidy event table: one row
per harmful event with a parsed date, a canonical event type, and
damage in dollars.
"""

from __future__ import annotations

import logging
from typing import Any

import numpy as np
import pandas as pd

from storm_impact.taxonomy import decode_magnitude, normalize_event_types

logger = logging.getLogger(__name__)

# ── Columns we keep from the 37-column raw data ─────────────────────
REQUIRED_COLUMNS: list[str] = [
    "bgn_date",
    "evtype",
    "fatalities",
    "injuries",
    "propdmg",
    "propdmgexp",
    "cropdmg",
    "cropdmgexp",
]

# A row is "harmful" if any of these is strictly positive
HARM_COLUMNS: list[str] = ["fatalities", "injuries", "propdmg", "cropdmg"]

# ── Columns of the tidy output, in order ────────────────────────────
TIDY_COLUMNS: list[str] = [
    "date",
    "event_type",
    "fatalities",
    "injuries",
    "property_damage",
    "crop_damage",
]


# ── Node 1 ───────────────────────────────────────────────────────────
def select_storm_columns(storm_data_raw: pd.DataFrame) -> pd.DataFrame:
    """Keep only the columns needed for the impact analysis.

    The raw file ships upper-case headers (``BGN_DATE``, ``EVTYPE``, ...);
    they are lower-cased here so every later node uses snake_case.

    Args:
        storm_data_raw: Raw StormData table as loaded from the catalog.

    Returns:
        Copy of the table with only the columns in REQUIRED_COLUMNS.

    Raises:
        ValueError: If the table has no rows.
        KeyError: If any required column is missing.
    """
    if storm_data_raw.empty:
        raise ValueError("Raw storm data table is empty")

    df = storm_data_raw.rename(columns=lambda c: str(c).strip().lower())

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise KeyError(f"Expected columns not found in data: {missing}")

    before_cols = len(df.columns)
    df_selected = df[REQUIRED_COLUMNS].copy()

    logger.info(
        "Column selection: kept %d of %d columns across %s rows",
        len(REQUIRED_COLUMNS),
        before_cols,
        f"{len(df_selected):,}",
    )
    return df_selected


# ── Node 2 ───────────────────────────────────────────────────────────
def parse_begin_dates(
    df: pd.DataFrame,
    parameters: dict[str, Any],
) -> pd.DataFrame:
    """Parse ``bgn_date`` strings like "4/18/1950 0:00:00" into timestamps.

    The whole column shares one format, so a value that does not parse
    means the file is not what we think it is.  We abort rather than
    drop the row.

    Args:
        df: DataFrame after column selection.
        parameters: Dict with ``begin_date_format`` (strptime format).

    Returns:
        DataFrame with ``bgn_date`` converted to datetime64.

    Raises:
        ValueError: If any begin date is missing or malformed.
    """
    date_format: str = parameters["begin_date_format"]

    df = df.copy()
    parsed = pd.to_datetime(df["bgn_date"], format=date_format, errors="coerce")

    bad = parsed.isna()
    if bad.any():
        samples = df.loc[bad, "bgn_date"].head(5).tolist()
        raise ValueError(
            f"bgn_date: {bad.sum():,} values do not match format "
            f"{date_format!r}. Samples: {samples}"
        )

    df["bgn_date"] = parsed
    logger.info(
        "Begin dates parsed: %s rows, range %s to %s",
        f"{len(df):,}",
        parsed.min().date(),
        parsed.max().date(),
    )
    return df


# ── Node 3 ───────────────────────────────────────────────────────────
def _coerce_non_negative(series: pd.Series, name: str) -> pd.Series:
    """Coerce a count/mantissa column to numbers, missing or junk → 0."""
    numeric = pd.to_numeric(series, errors="coerce")
    invalid = numeric.isna() | (numeric < 0)
    if invalid.any():
        samples = series[invalid].unique()[:10]
        logger.warning(
            "%s: %s values were missing, non-numeric or negative and set to 0. "
            "Samples: %s",
            name,
            f"{invalid.sum():,}",
            list(samples),
        )
    return numeric.mask(invalid, 0)


def filter_harmful_events(df: pd.DataFrame) -> pd.DataFrame:
    """Keep only events that killed, injured or caused any damage.

    About 70% of the raw rows report no casualties and no damage at
    all; they cannot affect either ranking, so they go.  The exponent
    codes are not consulted: a zero mantissa is zero damage whatever
    its scale.

    Args:
        df: DataFrame with parsed begin dates.

    Returns:
        DataFrame of harmful events, in input order, with fatalities and
        injuries as int64 and the damage mantissas as float64.
    """
    df = df.copy()
    for col in HARM_COLUMNS:
        df[col] = _coerce_non_negative(df[col], col)
    df[["fatalities", "injuries"]] = df[["fatalities", "injuries"]].astype("int64")
    df[["propdmg", "cropdmg"]] = df[["propdmg", "cropdmg"]].astype("float64")

    harmful = (df[HARM_COLUMNS] > 0).any(axis=1)
    df_harmful = df[harmful].copy()

    total = len(df)
    dropped = total - len(df_harmful)
    pct_dropped = (dropped / total * 100) if total > 0 else 0

    logger.info(
        "Harm filter: kept %s of %s rows (dropped %s = %.1f%%)",
        f"{len(df_harmful):,}",
        f"{total:,}",
        f"{dropped:,}",
        pct_dropped,
    )
    return df_harmful


# ── Node 4 ───────────────────────────────────────────────────────────
def assign_canonical_event_types(df: pd.DataFrame) -> pd.DataFrame:
    """Map every free-text ``evtype`` onto one of the 48 canonical types.

    Adds an ``event_type`` column and keeps ``evtype`` for auditability.

    Args:
        df: DataFrame of harmful events.

    Returns:
        DataFrame with a new ``event_type`` column.
    """
    df = df.copy()
    df["event_type"] = normalize_event_types(df["evtype"])

    n_raw = df["evtype"].nunique(dropna=False)
    n_canonical = df["event_type"].nunique()
    logger.info(
        "Event types normalized: %s distinct raw labels → %d canonical types",
        f"{n_raw:,}",
        n_canonical,
    )

    # The most common remappings are the ones worth eyeballing
    remapped = df.loc[df["evtype"].astype(str) != df["event_type"], ["evtype", "event_type"]]
    if not remapped.empty:
        top = remapped.value_counts().head(10)
        logger.info("Most frequent remappings:\n%s", top.to_string())
    return df


# ── Node 5 ───────────────────────────────────────────────────────────
def compute_damage_dollars(df: pd.DataFrame) -> pd.DataFrame:
    """Scale damage mantissas by their magnitude codes.

    The Storm Data splits each damage figure in two:
    - PROPDMG=2.5, PROPDMGEXP="M" → 2,500,000.0
    - PROPDMG=10,  PROPDMGEXP=""  → 10.0
    Unknown codes ("+", "?", digits) scale by 10**0.

    Creates ``property_damage`` and ``crop_damage`` (float64 dollars) and
    keeps the originals.

    Args:
        df: DataFrame after event-type normalization.

    Returns:
        DataFrame with the two dollar columns added.
    """
    df = df.copy()

    for mantissa_col, code_col, new_col in [
        ("propdmg", "propdmgexp", "property_damage"),
        ("cropdmg", "cropdmgexp", "crop_damage"),
    ]:
        exponents = df[code_col].map(decode_magnitude).astype("int64")
        df[new_col] = df[mantissa_col].astype("float64") * np.power(10.0, exponents)

        unknown = df[code_col].notna() & (exponents == 0)
        logger.info(
            "%s: $%s total, %s rows with an unscaled or unrecognised code %s",
            new_col,
            f"{df[new_col].sum():,.0f}",
            f"{unknown.sum():,}",
            sorted(df.loc[unknown, code_col].astype(str).str.strip().unique().tolist()),
        )

    return df


# ── Node 6 ───────────────────────────────────────────────────────────
def finalize_tidy_events(df: pd.DataFrame) -> pd.DataFrame:
    """Shape the tidy event table consumed by the impact analysis.

    Renames ``bgn_date`` to ``date``, drops the raw helper columns and
    resets the index.  Row order follows the surviving input rows.

    Args:
        df: DataFrame with dollar damage columns.

    Returns:
        Tidy DataFrame with exactly the columns in TIDY_COLUMNS.
    """
    tidy = (
        df.rename(columns={"bgn_date": "date"})[TIDY_COLUMNS]
        .reset_index(drop=True)
    )

    logger.info(
        "Tidy event table ready: %s rows × %d columns, years %d–%d",
        f"{len(tidy):,}",
        len(tidy.columns),
        tidy["date"].dt.year.min() if len(tidy) else 0,
        tidy["date"].dt.year.max() if len(tidy) else 0,
    )
    return tidy
