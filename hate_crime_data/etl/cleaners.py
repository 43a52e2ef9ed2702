"""Data cleaning and type conversion functions.

This module provides pure functions for cleaning column headers and cell
values from the state-level CSV sources. Cell cleaners return None for
anything they cannot parse instead of raising, so a single malformed cell
never aborts a run.
"""

import re
from collections.abc import Hashable, Iterable
from typing import Any

import numpy as np
import pandas as pd

YES_NO_CODES = {"Y": 1, "N": 0}

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def clean_column_name(name: Hashable) -> str:
    """Convert a free-form column header to lowercase snake case.

    Args:
        name: Raw header as read from the CSV file.

    Returns:
        A name made only of lowercase letters, digits and single underscores.
        Percent and number signs are spelled out so that headers such as
        "% of LGBT Individuals Raising Children" keep their meaning.

    Examples:
        >>> clean_column_name("Race/ Ethnicity/ Ancestry")
        'race_ethnicity_ancestry'
        >>> clean_column_name("% of Same-Sex Couples Raising Children")
        'percent_of_same_sex_couples_raising_children'
        >>> clean_column_name("populationCovered")
        'population_covered'
    """
    text = str(name).strip()
    text = text.replace("%", " percent ").replace("#", " number ")
    text = _CAMEL_BOUNDARY.sub("_", text).lower()
    text = _NON_ALPHANUMERIC.sub("_", text).strip("_")
    if not text:
        return "x"
    if text[0].isdigit():
        return f"x{text}"
    return text


def dedupe_names(names: Iterable[str]) -> list[str]:
    """Make names unique by appending _2, _3, ... to repeats."""
    seen: set[str] = set()
    result = []
    for name in names:
        candidate = name
        counter = 2
        while candidate in seen:
            candidate = f"{name}_{counter}"
            counter += 1
        seen.add(candidate)
        result.append(candidate)
    return result


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy of df with canonical snake_case column names.

    Row values are not touched. Normalizing an already normalized table
    leaves its columns unchanged.

    Args:
        df: A table as read from a source file.

    Returns:
        A new DataFrame with cleaned, unique column names.
    """
    normalized = df.copy()
    normalized.columns = dedupe_names(clean_column_name(col) for col in df.columns)
    return normalized


def clean_integer(value: Any) -> int | None:
    """Convert value to integer or None.

    Args:
        value: A value that may represent an integer (int, str, float, etc.).
            Thousands separators such as "1,234" are accepted.

    Returns:
        An integer, or None if the value is missing or cannot be converted.
        Floats are truncated (not rounded).
    """
    if pd.isna(value) or value == "":
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", "")
    try:
        return int(float(value))
    except (ValueError, TypeError, OverflowError):
        return None


def clean_number(value: Any) -> float | None:
    """Convert value to float or None, accepting thousands separators."""
    if pd.isna(value) or value == "":
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", "")
    try:
        return float(value)
    except (ValueError, TypeError):
        return None


def clean_percentage(value: Any) -> float | None:
    """Convert a percentage such as "37.5%" to a fraction.

    A single trailing percent sign is optional; what remains must be a plain
    number once whitespace and thousands separators are removed.

    Args:
        value: A percentage string or a number expressed in percent.

    Returns:
        The value divided by 100, or None if it is missing or unparseable.

    Examples:
        >>> clean_percentage("37.5%")
        0.375
        >>> clean_percentage("0%")
        0.0
        >>> clean_percentage("Unknown") is None
        True
    """
    if pd.isna(value) or value == "":
        return None
    if isinstance(value, str):
        text = value.strip().replace(",", "")
        if text.endswith("%"):
            text = text[:-1].rstrip()
        value = text
    try:
        return float(value) / 100
    except (ValueError, TypeError):
        return None


def clean_yes_no(value: Any) -> int | None:
    """Encode a literal "Y"/"N" flag as 1/0.

    Only the exact strings "Y" and "N" are accepted; anything else,
    including lowercase or blank values, returns None.
    """
    if not isinstance(value, str):
        return None
    return YES_NO_CODES.get(value)


def to_float_series(series: pd.Series) -> pd.Series:
    """Coerce a column to float64 with NaN for unparseable cells."""
    return series.map(clean_number).astype("float64")


def safe_divide(numerator: pd.Series, denominator: pd.Series) -> pd.Series:
    """Divide two columns element-wise.

    Cells whose denominator is zero or missing come out as NaN rather
    than inf.

    Args:
        numerator: Column of counts.
        denominator: Column of totals, aligned on the same index.

    Returns:
        A float64 Series of ratios.
    """
    top = to_float_series(numerator)
    bottom = to_float_series(denominator)
    return top / bottom.where(bottom != 0, np.nan)
