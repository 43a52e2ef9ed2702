"""Dataset-specific loading workflows.

This module contains one loader per source file. Each loader:
1. Reads the CSV file using pandas
2. Normalizes the column names
3. Applies schema-driven cleaning to the columns it computes from
4. Adds the table's derived columns

Each derivation lives in its own add_* / count_* function so that it can be
run on an in-memory table. All functions return new DataFrames and leave
their input untouched.
"""

from pathlib import Path

import pandas as pd

from hate_crime_data.etl.cleaners import clean_yes_no, normalize_columns, safe_divide
from hate_crime_data.etl.config import (
    BIAS_CATEGORY_COLUMNS,
    HATE_CRIME_SCHEMA,
    LEGAL_FLAG_COLUMNS,
    LGBTQ_BIAS_COLUMNS,
    NEWS_COUNT_COLUMN,
    PERCENTAGE_COLUMNS,
    POPULATION_SCHEMA,
    REPORTING_SCHEMA,
    SOCIAL_MENTIONS_WINDOW,
    STATE_KEY,
)
from hate_crime_data.etl.schema_utils import apply_schema, require_columns


def read_source(csv_path: Path, table_name: str) -> pd.DataFrame:
    """Read one source CSV and normalize its column names.

    Args:
        csv_path: Path to the CSV file.
        table_name: Table label used in progress output.

    Returns:
        The table with snake_case column names.

    Raises:
        FileNotFoundError: If csv_path does not exist.
    """
    print(f"Loading {table_name} data from {csv_path}...")
    df = pd.read_csv(csv_path, low_memory=False)
    print(f"  Read {len(df)} rows from CSV")
    return normalize_columns(df)


# ----------------------------------------------------------------------------
# Hate crimes (base table)
# ----------------------------------------------------------------------------


def add_lgbtq_crime_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Derive the LGBTQIA+ hate crime count and its share of all hate crimes.

    Bias-category counts are parsed to integers and missing counts are
    filled with zero, matching how the FBI files non-reporting states.

    Args:
        df: Normalized hate crime table.

    Returns:
        A new table with lgbtq_hate_crimes and percentage_lgbtq_crimes added.
        The percentage is NaN where a state has no hate crimes at all.
    """
    require_columns(df, [STATE_KEY, *BIAS_CATEGORY_COLUMNS], "hate_crimes")
    schema = [entry for entry in HATE_CRIME_SCHEMA if entry[0] in df.columns]
    out = apply_schema(df, schema)
    out[BIAS_CATEGORY_COLUMNS] = out[BIAS_CATEGORY_COLUMNS].fillna(0)

    out["lgbtq_hate_crimes"] = out[LGBTQ_BIAS_COLUMNS].sum(axis=1).astype("Int64")
    total = out[BIAS_CATEGORY_COLUMNS].sum(axis=1)
    out["percentage_lgbtq_crimes"] = safe_divide(out["lgbtq_hate_crimes"], total)
    return out


def load_hate_crimes(csv_path: Path) -> pd.DataFrame:
    """Load FBI hate crime counts by state and bias motivation."""
    df = read_source(csv_path, "hate_crimes")
    require_columns(df, ["population_covered"], "hate_crimes")
    return add_lgbtq_crime_columns(df)


# ----------------------------------------------------------------------------
# Agency reporting participation
# ----------------------------------------------------------------------------


def add_reporting_rate(df: pd.DataFrame) -> pd.DataFrame:
    """Derive the share of participating agencies that submitted reports."""
    reporting_columns = [col for col, _, _ in REPORTING_SCHEMA]
    require_columns(df, [STATE_KEY, *reporting_columns], "reporting")
    out = apply_schema(df, REPORTING_SCHEMA)
    out["agency_reporting_percentage"] = safe_divide(
        out["agencies_submitting_incident_reports"],
        out["number_of_participating_agencies"],
    )
    return out


def load_reporting(csv_path: Path) -> pd.DataFrame:
    """Load per-state agency participation counts."""
    return add_reporting_rate(read_source(csv_path, "reporting"))


# ----------------------------------------------------------------------------
# LGBT population estimates
# ----------------------------------------------------------------------------


def convert_percentages(df: pd.DataFrame) -> pd.DataFrame:
    """Convert the population percentage strings to fractions.

    Cells that do not parse as a number become NaN.
    """
    require_columns(df, [STATE_KEY, *PERCENTAGE_COLUMNS], "population")
    return apply_schema(df, POPULATION_SCHEMA)


def load_population(csv_path: Path) -> pd.DataFrame:
    """Load per-state LGBT population estimates."""
    return convert_percentages(read_source(csv_path, "population"))


# ----------------------------------------------------------------------------
# Legal protections
# ----------------------------------------------------------------------------


def add_legal_indicators(df: pd.DataFrame) -> pd.DataFrame:
    """Encode the Y/N legal protection flags as 1/0 indicator columns.

    Any value other than the exact strings "Y" and "N" is encoded as missing.
    """
    require_columns(df, [STATE_KEY, *LEGAL_FLAG_COLUMNS], "legal_protections")
    out = df.copy()
    for source_col, indicator_col in LEGAL_FLAG_COLUMNS.items():
        out[indicator_col] = out[source_col].map(clean_yes_no).astype("Int64")
    return out


def load_legal_protections(csv_path: Path) -> pd.DataFrame:
    """Load per-state legal protection flags."""
    return add_legal_indicators(read_source(csv_path, "legal_protections"))


# ----------------------------------------------------------------------------
# Social media mentions
# ----------------------------------------------------------------------------


def load_social_mentions(csv_path: Path) -> pd.DataFrame:
    """Load social media mention counts, already aggregated per state.

    The counts cover a fixed collection window and are passed through as-is.
    """
    df = read_source(csv_path, "social_mentions")
    require_columns(df, [STATE_KEY], "social_mentions")
    start, end = SOCIAL_MENTIONS_WINDOW
    print(f"  Mentions collected {start.isoformat()} to {end.isoformat()}")
    return df


# ----------------------------------------------------------------------------
# News mentions
# ----------------------------------------------------------------------------


def count_news_stories(df: pd.DataFrame) -> pd.DataFrame:
    """Count distinct news articles per state.

    Steps, in order:
    1. Sort rows by state
    2. Drop rows that are exact duplicates across every column
    3. Treat state as a categorical field
    4. Count the remaining rows per state

    States with no articles do not appear in the result.

    Args:
        df: Normalized table with one row per article.

    Returns:
        A table with columns state and news_stories_count.

    Examples:
        >>> articles = pd.DataFrame(
        ...     {"state": ["CA", "CA", "CA", "TX"], "url": ["a", "a", "b", "c"]}
        ... )
        >>> count_news_stories(articles)["news_stories_count"].tolist()
        [2, 1]
    """
    require_columns(df, [STATE_KEY], "news_mentions")
    articles = (
        df.sort_values(STATE_KEY, kind="stable")
        .drop_duplicates()
        .assign(**{STATE_KEY: lambda d: d[STATE_KEY].astype("category")})
    )

    counts = (
        articles.groupby(STATE_KEY, observed=True)
        .size()
        .reset_index(name=NEWS_COUNT_COLUMN)
    )
    counts[STATE_KEY] = counts[STATE_KEY].astype(str)
    return counts


def load_news_mentions(csv_path: Path) -> pd.DataFrame:
    """Load raw news article rows and aggregate them to one row per state."""
    counts = count_news_stories(read_source(csv_path, "news_mentions"))
    print(f"  Aggregated to {len(counts)} states")
    return counts
