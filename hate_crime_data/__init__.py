"""State-level LGBTQ hate crime dataset builder.

This package joins FBI hate crime statistics with agency reporting rates,
LGBT population estimates, legal protections and media coverage into a
single per-state table.
"""

from hate_crime_data.build_dataset import main, run_pipeline
from hate_crime_data.etl.joins import build_final_table

__all__ = ["build_final_table", "main", "run_pipeline"]
