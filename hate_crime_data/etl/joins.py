"""Join the per-state tables and derive the per-capita features.

The join is a fold over JOIN_ORDER: the hate crime table is the starting
value and each remaining table is left-joined onto the result of the
previous step. Every step returns a new DataFrame.
"""

from collections.abc import Mapping, Sequence
from functools import reduce
from pathlib import Path

import pandas as pd

from hate_crime_data.etl.cleaners import safe_divide
from hate_crime_data.etl.config import JOIN_ORDER, STATE_KEY
from hate_crime_data.etl.key_checks import check_join_keys, report_key_check


def left_join(
    base: pd.DataFrame,
    right: pd.DataFrame,
    table_name: str,
    key: str = STATE_KEY,
    strict: bool = False,
) -> pd.DataFrame:
    """Left-join one table onto the accumulated table.

    Every base row is kept. Right-hand columns are NaN for states the right
    table does not cover. A right table with repeated keys fans out the
    matching base rows unless strict is set.

    Args:
        base: Accumulated table.
        right: Table to attach.
        table_name: Right table label, used as suffix for clashing columns.
        key: Join column.
        strict: Raise instead of warn when the right table repeats a key.

    Returns:
        The joined table.

    Raises:
        ValueError: If strict is set and the right table repeats a key.
    """
    result = check_join_keys(base, right, table_name, key)
    report_key_check(result)
    if strict and result.duplicate_keys:
        raise ValueError(
            f"{table_name} has more than one row for {key} values: "
            f"{', '.join(result.duplicate_keys)}"
        )
    return base.merge(right, how="left", on=key, suffixes=("", f"_{table_name}"))


def join_tables(
    base: pd.DataFrame,
    right_tables: Sequence[tuple[str, pd.DataFrame]],
    key: str = STATE_KEY,
    strict: bool = False,
) -> pd.DataFrame:
    """Left-join a sequence of named tables onto base, in order."""
    return reduce(
        lambda acc, named: left_join(acc, named[1], named[0], key, strict),
        right_tables,
        base,
    )


def add_per_capita_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Derive LGBTQ hate crimes per resident and per LGBT adult.

    Both ratios are NaN where the denominator is zero or missing.

    Args:
        df: Joined table carrying lgbtq_hate_crimes, population_covered
            and lgbt_adult_population.

    Returns:
        A new table with lgbtq_crimes_per_capita and
        lgbtq_crimes_per_lgbtq_capita appended.
    """
    out = df.copy()
    out["lgbtq_crimes_per_capita"] = safe_divide(
        out["lgbtq_hate_crimes"], out["population_covered"]
    )
    out["lgbtq_crimes_per_lgbtq_capita"] = safe_divide(
        out["lgbtq_hate_crimes"], out["lgbt_adult_population"]
    )
    return out


def build_final_table(
    tables: Mapping[str, pd.DataFrame], strict: bool = False
) -> pd.DataFrame:
    """Join all loaded tables in JOIN_ORDER and add the per-capita features.

    Args:
        tables: Loaded tables keyed by name; must contain every JOIN_ORDER name.
        strict: Raise on repeated keys in any right-hand table.

    Returns:
        The final table, one row per state in the hate crime table.

    Raises:
        KeyError: If a table named in JOIN_ORDER was not provided.
    """
    missing = [name for name in JOIN_ORDER if name not in tables]
    if missing:
        raise KeyError(f"Missing tables for join: {', '.join(missing)}")

    base_name, *right_names = JOIN_ORDER
    joined = join_tables(
        tables[base_name],
        [(name, tables[name]) for name in right_names],
        strict=strict,
    )
    return add_per_capita_columns(joined)


def write_final_table(df: pd.DataFrame, output_path: Path) -> Path:
    """Write the final table as CSV, with missing values as empty cells."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False)
    return output_path
