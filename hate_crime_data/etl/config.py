"""Source locations and table schemas for the state dataset build.

This module contains:
1. Environment-driven locations of the six source files and the output file
2. Canonical column names used by the derived features
3. Table schemas that map normalized columns to cleaning functions and dtypes
4. The fixed order in which tables are joined onto the base table

Environment variables (optionally read from a .env file):
    HATE_CRIME_DATA_DIR: Directory holding the source CSV files.
    HATE_CRIME_OUTPUT_PATH: Where the final table is written.
    HATE_CRIMES_FILE, REPORTING_FILE, POPULATION_FILE, LEGAL_PROTECTIONS_FILE,
    SOCIAL_MENTIONS_FILE, NEWS_MENTIONS_FILE: Source file names inside the
        data directory.
    STRICT_JOIN_KEYS: "true" to abort on duplicate state keys in a joined table.
"""

import os
from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Any

from dotenv import load_dotenv
from pydantic import BaseModel

from hate_crime_data.etl.cleaners import clean_integer, clean_percentage

load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
DATA_DIR = Path(os.getenv("HATE_CRIME_DATA_DIR", str(PROJECT_ROOT / "data")))

SOURCE_FILES = {
    "hate_crimes": os.getenv("HATE_CRIMES_FILE", "hate_crimes_by_state.csv"),
    "reporting": os.getenv("REPORTING_FILE", "agency_reporting_by_state.csv"),
    "population": os.getenv("POPULATION_FILE", "lgbt_population_by_state.csv"),
    "legal_protections": os.getenv(
        "LEGAL_PROTECTIONS_FILE", "legal_protections_by_state.csv"
    ),
    "social_mentions": os.getenv(
        "SOCIAL_MENTIONS_FILE", "social_mentions_by_state.csv"
    ),
    "news_mentions": os.getenv("NEWS_MENTIONS_FILE", "news_mentions.csv"),
}

OUTPUT_FILE = "lgbtq_hate_crimes_by_state.csv"

STRICT_JOIN_KEYS = os.getenv("STRICT_JOIN_KEYS", "false").lower() in (
    "1",
    "true",
    "yes",
)

# Social mention counts were collected upstream for this window only
SOCIAL_MENTIONS_WINDOW = (date(2018, 7, 5), date(2019, 6, 6))


# ============================================================================
# Column names
# ============================================================================

STATE_KEY = "state"

BIAS_CATEGORY_COLUMNS = [
    "race_ethnicity_ancestry",
    "religion",
    "sexual_orientation",
    "disability",
    "gender",
    "gender_identity",
]

LGBTQ_BIAS_COLUMNS = ["sexual_orientation", "gender_identity"]

PERCENTAGE_COLUMNS = [
    "lgbt_population_density",
    "percent_of_lgbt_individuals_raising_children",
    "percent_of_same_sex_couples_raising_children",
]

# Source flag column -> binary indicator column
LEGAL_FLAG_COLUMNS = {
    "sexual_orientation_protected": "sexual_orientation_protected_num",
    "gender_identity_protected": "gender_identity_protected_num",
}

NEWS_COUNT_COLUMN = "news_stories_count"

DERIVED_COLUMNS = [
    "lgbtq_hate_crimes",
    "percentage_lgbtq_crimes",
    "agency_reporting_percentage",
    "sexual_orientation_protected_num",
    "gender_identity_protected_num",
    NEWS_COUNT_COLUMN,
    "lgbtq_crimes_per_capita",
    "lgbtq_crimes_per_lgbtq_capita",
]


# ============================================================================
# Table Schemas: Map normalized columns to cleaning functions
# ============================================================================
# Each schema is a list of (column_name, cleaner_function, dtype) tuples.
# Columns not listed pass through untouched.

ColumnSchema = list[tuple[str, Callable[[Any], Any], str]]

HATE_CRIME_SCHEMA: ColumnSchema = [
    *[(col, clean_integer, "Int64") for col in BIAS_CATEGORY_COLUMNS],
    ("population_covered", clean_integer, "Int64"),
]

REPORTING_SCHEMA: ColumnSchema = [
    ("agencies_submitting_incident_reports", clean_integer, "Int64"),
    ("number_of_participating_agencies", clean_integer, "Int64"),
]

POPULATION_SCHEMA: ColumnSchema = [
    (col, clean_percentage, "float64") for col in PERCENTAGE_COLUMNS
]

# Base table first; every other table is left-joined onto it in this order
JOIN_ORDER = (
    "hate_crimes",
    "reporting",
    "population",
    "legal_protections",
    "social_mentions",
    "news_mentions",
)


class SourcePaths(BaseModel):
    """Locations of every input file and of the output file for one run."""

    hate_crimes: Path
    reporting: Path
    population: Path
    legal_protections: Path
    social_mentions: Path
    news_mentions: Path
    output: Path

    @classmethod
    def from_data_dir(
        cls, data_dir: Path, output: Path | None = None
    ) -> "SourcePaths":
        """Build paths for the default file names inside data_dir.

        Args:
            data_dir: Directory holding the six source CSV files.
            output: Output file; defaults to OUTPUT_FILE inside data_dir.

        Returns:
            A SourcePaths instance.
        """
        data_dir = Path(data_dir)
        sources = {name: data_dir / filename for name, filename in SOURCE_FILES.items()}
        return cls(**sources, output=output or data_dir / OUTPUT_FILE)

    @classmethod
    def from_env(cls) -> "SourcePaths":
        """Build paths from environment variables, falling back to defaults."""
        output = os.getenv("HATE_CRIME_OUTPUT_PATH")
        return cls.from_data_dir(DATA_DIR, Path(output) if output else None)

    def sources(self) -> dict[str, Path]:
        """Return the input paths keyed by table name, in join order."""
        return {name: getattr(self, name) for name in JOIN_ORDER}

    def missing_sources(self) -> list[Path]:
        """Return the input paths that do not exist on disk."""
        return [path for path in self.sources().values() if not path.exists()]
