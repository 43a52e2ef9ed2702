"""Tests for join-key diagnostics.

Covers suggest_key, check_join_keys and report_key_check.
"""

import pandas as pd

from hate_crime_data.etl.key_checks import (
    KeyCheckResult,
    check_join_keys,
    report_key_check,
    suggest_key,
)

# --- Fixtures ---

BASE = pd.DataFrame({"state": ["California", "Pennsylvania", "Texas"]})


# --- suggest_key ---


def test_suggest_key_case_mismatch():
    assert suggest_key("california", ["California", "Texas"]) == "California"


def test_suggest_key_misspelling():
    assert suggest_key("Pensylvania", ["California", "Pennsylvania"]) == "Pennsylvania"


def test_suggest_key_no_close_match():
    assert suggest_key("Guam", ["California", "Texas"]) is None


# --- check_join_keys ---


def test_clean_keys_have_no_issues():
    result = check_join_keys(BASE, BASE.copy(), "reporting")
    assert result == KeyCheckResult(table_name="reporting")
    assert not result.has_issues


def test_duplicate_keys_detected():
    right = pd.DataFrame({"state": ["Texas", "Texas", "California", "Pennsylvania"]})
    result = check_join_keys(BASE, right, "social_mentions")
    assert result.duplicate_keys == ["Texas"]
    assert result.has_issues


def test_missing_and_orphan_keys():
    right = pd.DataFrame({"state": ["california", "Texas", "Guam"]})
    result = check_join_keys(BASE, right, "population")
    assert result.missing_keys == ["California", "Pennsylvania"]
    assert result.orphan_keys == ["Guam", "california"]
    assert result.suggestions == {"california": "California"}


def test_missing_keys_alone_are_not_issues():
    right = pd.DataFrame({"state": ["Texas"]})
    result = check_join_keys(BASE, right, "news_mentions")
    assert result.missing_keys == ["California", "Pennsylvania"]
    assert not result.has_issues


def test_null_keys_ignored():
    right = pd.DataFrame({"state": ["Texas", None]})
    result = check_join_keys(BASE, right, "legal_protections")
    assert result.orphan_keys == []
    assert result.duplicate_keys == []


def test_empty_right_table():
    right = pd.DataFrame({"state": pd.Series([], dtype=object)})
    result = check_join_keys(BASE, right, "reporting")
    assert result.missing_keys == ["California", "Pennsylvania", "Texas"]
    assert not result.has_issues


# --- report_key_check ---


def test_report_prints_warnings(capsys):
    result = KeyCheckResult(
        table_name="population",
        duplicate_keys=["Texas"],
        orphan_keys=["Guam", "california"],
        suggestions={"california": "California"},
    )
    report_key_check(result)
    out = capsys.readouterr().out
    assert "population has repeated state values ['Texas']" in out
    assert "key 'california' matches no state (did you mean 'California'?)" in out
    assert "key 'Guam' matches no state\n" in out


def test_report_silent_when_clean(capsys):
    report_key_check(KeyCheckResult(table_name="reporting"))
    assert capsys.readouterr().out == ""
