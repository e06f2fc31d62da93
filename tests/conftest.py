"""Pytest fixtures shared across the propbar test suite."""

from __future__ import annotations

from collections.abc import Sequence

import pandas as pd
import pytest


@pytest.fixture
def tips() -> pd.DataFrame:
    """Return a small smoker/sex table with text columns."""

    return pd.DataFrame(
        {
            "smoker": ["No", "No", "Yes", "No", "Yes", "Yes", "No", "No"],
            "sex": ["Female", "Male", "Male", "Male", "Female", "Male", "Female", "Male"],
            "time": ["Lunch", "Dinner", "Dinner", "Lunch", "Dinner", "Lunch", "Dinner", "Dinner"],
        }
    )


@pytest.fixture
def titanic() -> pd.DataFrame:
    """Return a weighted Class/Survived table with categorical columns."""

    return pd.DataFrame(
        {
            "Class": pd.Categorical(["1st", "1st", "2nd", "2nd", "Crew", "Crew"], categories=["1st", "2nd", "Crew"]),
            "Survived": pd.Categorical(["No", "Yes", "No", "Yes", "No", "Yes"], categories=["No", "Yes"]),
            "Freq": [122, 203, 167, 118, 673, 212],
        }
    )


def pytest_collection_modifyitems(items: Sequence[pytest.Item]) -> None:
    """Enforce that every test has exactly one speed marker.

    The suite is runnable by intent:
    - `unit`: pure, fast tests with no rendering or IO.
    - `integration`: tests touching rendering backends or IO.

    Each test must have exactly one of these markers.
    """

    invalid: list[str] = []
    for item in items:
        has_unit = item.get_closest_marker("unit") is not None
        has_integration = item.get_closest_marker("integration") is not None
        if has_unit == has_integration:
            markers = []
            if has_unit:
                markers.append("unit")
            if has_integration:
                markers.append("integration")
            invalid.append(f"{item.nodeid} (markers={markers or 'none'})")

    if invalid:
        joined = "\n".join(f"- {nodeid}" for nodeid in invalid)
        raise pytest.UsageError(
            "Each test must have exactly one speed marker: `@pytest.mark.unit` or "
            "`@pytest.mark.integration`.\n"
            f"Offending tests:\n{joined}"
        )
