"""Schema-driven column cleaning utilities.

Functions in this module work with the schema definitions from config.py to
apply cleaning functions to whole DataFrame columns and to cast the result
to a declared dtype.
"""

from collections.abc import Iterable

import pandas as pd

from hate_crime_data.etl.config import ColumnSchema


def require_columns(df: pd.DataFrame, columns: Iterable[str], table_name: str) -> None:
    """Check that a normalized table carries the columns a loader needs.

    Args:
        df: Table with normalized column names.
        columns: Column names that must be present.
        table_name: Table label used in the error message.

    Raises:
        KeyError: If any required column is missing.
    """
    missing = [col for col in columns if col not in df.columns]
    if missing:
        raise KeyError(
            f"{table_name} table is missing required columns: {', '.join(missing)}"
        )


def apply_schema(df: pd.DataFrame, schema: ColumnSchema) -> pd.DataFrame:
    """Apply cleaning functions to table columns based on schema.

    Takes a table and a schema definition, runs each listed column through
    its cleaner cell by cell and casts it to the declared dtype. Columns
    that are not in the schema are returned unchanged.

    Args:
        df: Table with normalized column names.
        schema: List of (column_name, cleaner_function, dtype) tuples.

    Returns:
        A new DataFrame with the schema columns cleaned.

    Examples:
        >>> schema = [("religion", clean_integer, "Int64")]
        >>> df = pd.DataFrame({"state": ["Ohio"], "religion": ["1,204"]})
        >>> apply_schema(df, schema)["religion"].tolist()
        [1204]
    """
    cleaned = df.copy()
    for col_name, cleaner, dtype in schema:
        cleaned[col_name] = cleaned[col_name].map(cleaner).astype(dtype)
    return cleaned
