#!/usr/bin/env python3
"""Build the state-level LGBTQ hate crime dataset.

This module loads six state-level sources, derives ratio features and joins
them into one CSV file meant to be opened in a spreadsheet:
- FBI hate crime counts by bias motivation (base table)
- Law enforcement agency reporting participation
- LGBT population estimates
- Sexual orientation / gender identity legal protections
- Social media mention counts
- News articles, counted per state

Source and output locations come from environment variables (see
hate_crime_data.etl.config).

Usage:
    python -m hate_crime_data.build_dataset
"""

import sys

import pandas as pd

from hate_crime_data.etl.config import DERIVED_COLUMNS, STRICT_JOIN_KEYS, SourcePaths
from hate_crime_data.etl.joins import build_final_table, write_final_table
from hate_crime_data.etl.loaders import (
    load_hate_crimes,
    load_legal_protections,
    load_news_mentions,
    load_population,
    load_reporting,
    load_social_mentions,
)

LOADERS = {
    "hate_crimes": load_hate_crimes,
    "reporting": load_reporting,
    "population": load_population,
    "legal_protections": load_legal_protections,
    "social_mentions": load_social_mentions,
    "news_mentions": load_news_mentions,
}


def run_pipeline(paths: SourcePaths, strict: bool = False) -> pd.DataFrame:
    """Load every source, build the final table and write it to paths.output.

    Args:
        paths: Input and output file locations.
        strict: Abort when a joined table repeats a state.

    Returns:
        The final table as written.
    """
    tables = {}
    for name, csv_path in paths.sources().items():
        print("\n" + "=" * 60)
        tables[name] = LOADERS[name](csv_path)

    print("\n" + "=" * 60)
    print("Joining tables on state...")
    final = build_final_table(tables, strict=strict)
    write_final_table(final, paths.output)
    print(f"✓ Wrote {len(final)} rows to {paths.output}")
    return final


def print_summary(final: pd.DataFrame) -> None:
    """Print the final table's shape and missing cells per derived column."""
    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print(f"\nStates:  {len(final)}")
    print(f"Columns: {len(final.columns)}")

    print("\nMissing values in derived columns:")
    for col in DERIVED_COLUMNS:
        if col in final.columns:
            print(f"  {col + ':':<36} {int(final[col].isna().sum())}")


def main() -> None:
    """Main entry point for the dataset build.

    Orchestrates the whole run:
    1. Resolves source and output paths from the environment
    2. Checks every source file exists
    3. Loads and cleans each source
    4. Joins the tables and derives the per-capita features
    5. Writes the final CSV and prints summary statistics

    Exits with code 1 if a source file is missing or a table cannot be built.
    """
    paths = SourcePaths.from_env()

    missing = paths.missing_sources()
    for path in missing:
        print(f"Error: {path} not found")
    if missing:
        sys.exit(1)

    try:
        final = run_pipeline(paths, strict=STRICT_JOIN_KEYS)
    except (KeyError, ValueError) as e:
        print(f"Error building dataset: {e}")
        sys.exit(1)

    print_summary(final)
    print("\n✓ Done! Final table written to", paths.output)


if __name__ == "__main__":
    main()
