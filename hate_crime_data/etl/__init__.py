"""ETL subpackage for the state dataset build.

This subpackage contains:
- cleaners: Column-name normalization and cell parsing functions
- config: Source locations, table schemas and join order
- schema_utils: Schema-driven column cleaning
- loaders: Per-source loading workflows
- key_checks: Join-key diagnostics
- joins: Left-join fold and per-capita features
"""

from hate_crime_data.etl.cleaners import (
    clean_column_name,
    clean_integer,
    clean_number,
    clean_percentage,
    clean_yes_no,
    normalize_columns,
    safe_divide,
)
from hate_crime_data.etl.joins import (
    add_per_capita_columns,
    build_final_table,
    join_tables,
    write_final_table,
)
from hate_crime_data.etl.loaders import (
    load_hate_crimes,
    load_legal_protections,
    load_news_mentions,
    load_population,
    load_reporting,
    load_social_mentions,
)

__all__ = [
    "add_per_capita_columns",
    "build_final_table",
    "clean_column_name",
    "clean_integer",
    "clean_number",
    "clean_percentage",
    "clean_yes_no",
    "join_tables",
    "load_hate_crimes",
    "load_legal_protections",
    "load_news_mentions",
    "load_population",
    "load_reporting",
    "load_social_mentions",
    "normalize_columns",
    "safe_divide",
    "write_final_table",
]
