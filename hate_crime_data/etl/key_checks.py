"""Join-key diagnostics for the state-level tables.

Every source is expected to carry exactly one row per state, spelled the
same way as in the base hate crime table. Nothing enforces that upstream,
so before each join the right-hand table is compared against the base
table: repeated keys (which would fan out base rows), base states the
table does not cover, and right-hand keys that never match. For keys that
never match, fuzzy matching proposes the base state they were probably
meant to be ("california" vs "California", "Pensylvania" vs "Pennsylvania").

The checks only report. Table contents are never changed here.
"""

import pandas as pd
from pydantic import BaseModel, Field
from rapidfuzz import fuzz

from hate_crime_data.etl.config import STATE_KEY

RAPIDFUZZ_THRESHOLD = 80


class KeyCheckResult(BaseModel):
    """Outcome of comparing one right-hand table's keys with the base table."""

    table_name: str
    duplicate_keys: list[str] = Field(default_factory=list)
    missing_keys: list[str] = Field(default_factory=list)
    orphan_keys: list[str] = Field(default_factory=list)
    suggestions: dict[str, str] = Field(default_factory=dict)

    @property
    def has_issues(self) -> bool:
        return bool(self.duplicate_keys or self.orphan_keys)


def _keys(df: pd.DataFrame, key: str) -> pd.Series:
    return df[key].dropna().astype(str)


def suggest_key(orphan: str, candidates: list[str]) -> str | None:
    """Find the base key an unmatched key most likely refers to.

    Comparison is case-insensitive and uses rapidfuzz's ratio score.

    Args:
        orphan: Key from a right-hand table with no exact match.
        candidates: Keys present in the base table.

    Returns:
        The best-scoring candidate at or above RAPIDFUZZ_THRESHOLD, or None.

    Examples:
        >>> suggest_key("california", ["California", "Texas"])
        'California'
        >>> suggest_key("Guam", ["California", "Texas"]) is None
        True
    """
    best_key = None
    best_score = 0.0
    for candidate in candidates:
        score = fuzz.ratio(orphan.lower(), candidate.lower())
        if score > best_score:
            best_key, best_score = candidate, score
    if best_score >= RAPIDFUZZ_THRESHOLD:
        return best_key
    return None


def check_join_keys(
    base: pd.DataFrame, right: pd.DataFrame, table_name: str, key: str = STATE_KEY
) -> KeyCheckResult:
    """Compare the join keys of a right-hand table with the base table.

    Args:
        base: Current left-hand table (starting from hate crimes).
        right: Table about to be left-joined onto base.
        table_name: Label of the right-hand table.
        key: Join column present in both tables.

    Returns:
        KeyCheckResult listing duplicate, missing and orphan keys, with
        spelling suggestions for orphans.
    """
    base_keys = _keys(base, key)
    right_keys = _keys(right, key)
    base_set = set(base_keys)
    right_set = set(right_keys)

    duplicates = sorted(right_keys[right_keys.duplicated()].unique())
    missing = sorted(base_set - right_set)
    orphans = sorted(right_set - base_set)

    candidates = sorted(base_set)
    suggestions = {}
    for orphan in orphans:
        match = suggest_key(orphan, candidates)
        if match is not None:
            suggestions[orphan] = match

    return KeyCheckResult(
        table_name=table_name,
        duplicate_keys=duplicates,
        missing_keys=missing,
        orphan_keys=orphans,
        suggestions=suggestions,
    )


def report_key_check(result: KeyCheckResult) -> None:
    """Print warnings for a key check result."""
    name = result.table_name
    if result.duplicate_keys:
        print(
            f"  Warning: {name} has repeated {STATE_KEY} values "
            f"{result.duplicate_keys}; matching rows will be duplicated"
        )
    for orphan in result.orphan_keys:
        hint = result.suggestions.get(orphan)
        if hint:
            print(f"  Warning: {name} key {orphan!r} matches no state (did you mean {hint!r}?)")
        else:
            print(f"  Warning: {name} key {orphan!r} matches no state")
    if result.missing_keys:
        print(f"  {len(result.missing_keys)} states have no {name} row")
