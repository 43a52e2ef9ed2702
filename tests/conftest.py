#!/usr/bin/env python3
"""Shared test fixtures for the test suite.

This module provides small raw source tables for three states and a
directory of CSV files built from them. The states are chosen to cover the
interesting join cases:
- Oregon: present in every source
- Hawaii: zero hate crimes and zero population covered
- Vermont: absent from the news source
"""

from pathlib import Path

import pandas as pd
import pytest

from hate_crime_data.etl.config import SourcePaths


@pytest.fixture
def raw_hate_crimes() -> pd.DataFrame:
    """Provide an FBI-style hate crime table with raw headers."""
    return pd.DataFrame(
        {
            "State": ["Oregon", "Hawaii", "Vermont"],
            "Race/ Ethnicity/ Ancestry": [100, 0, 10],
            "Religion": [20, 0, 2],
            "Sexual orientation": [30, 0, 4],
            "Disability": [5, 0, 0],
            "Gender": [2, 0, 0],
            "Gender Identity": [3, 0, 1],
            "Population covered": ["4,190,713", "0", "626,299"],
        }
    )


@pytest.fixture
def raw_reporting() -> pd.DataFrame:
    """Provide an agency participation table with raw headers."""
    return pd.DataFrame(
        {
            "State": ["Oregon", "Hawaii", "Vermont"],
            "Number of participating agencies": [227, 1, 88],
            "Agencies submitting incident reports": [30, 0, 10],
        }
    )


@pytest.fixture
def raw_population() -> pd.DataFrame:
    """Provide an LGBT population table with percentage strings."""
    return pd.DataFrame(
        {
            "State": ["Oregon", "Hawaii", "Vermont"],
            "LGBT Adult Population": [153000, 39000, 27000],
            "LGBT Population Density": ["5.6%", "4.6%", "5.2%"],
            "% of LGBT Individuals Raising Children": ["27%", "31%", "24%"],
            "% of Same-Sex Couples Raising Children": ["15%", "22%", "not reported"],
        }
    )


@pytest.fixture
def raw_legal() -> pd.DataFrame:
    """Provide a legal protection table with Y/N flags."""
    return pd.DataFrame(
        {
            "State": ["Oregon", "Hawaii", "Vermont"],
            "Sexual Orientation Protected": ["Y", "Y", "Y"],
            "Gender Identity Protected": ["Y", "N", "Unknown"],
        }
    )


@pytest.fixture
def raw_social() -> pd.DataFrame:
    """Provide pre-aggregated social media mention counts."""
    return pd.DataFrame(
        {
            "State": ["Oregon", "Hawaii", "Vermont"],
            "Social Mentions": [120, 15, 40],
        }
    )


@pytest.fixture
def raw_news() -> pd.DataFrame:
    """Provide article rows with one exact duplicate and no Vermont rows."""
    return pd.DataFrame(
        {
            "State": ["Oregon", "Hawaii", "Oregon", "Oregon"],
            "Date": ["2019-01-01", "2019-03-01", "2019-01-01", "2019-02-01"],
            "URL": ["a", "c", "a", "b"],
        }
    )


@pytest.fixture
def source_paths(
    tmp_path: Path,
    raw_hate_crimes: pd.DataFrame,
    raw_reporting: pd.DataFrame,
    raw_population: pd.DataFrame,
    raw_legal: pd.DataFrame,
    raw_social: pd.DataFrame,
    raw_news: pd.DataFrame,
) -> SourcePaths:
    """Write every raw table to CSV and return their locations.

    Returns:
        SourcePaths pointing at tmp_path, with the output under tmp_path/out.
    """
    paths = SourcePaths.from_data_dir(tmp_path, tmp_path / "out" / "final.csv")
    raw_tables = {
        "hate_crimes": raw_hate_crimes,
        "reporting": raw_reporting,
        "population": raw_population,
        "legal_protections": raw_legal,
        "social_mentions": raw_social,
        "news_mentions": raw_news,
    }
    for name, csv_path in paths.sources().items():
        raw_tables[name].to_csv(csv_path, index=False)
    return paths
