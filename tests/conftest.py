"""Shared pytest configuration for the EVENTSITE suite.

Engine, container and test-data fixtures live in `tests/fixtures/` and are
loaded as plugins so every layer sees the same names.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


pytest_plugins = [
    "tests.fixtures.sqlite",
    "tests.fixtures.postgres",
    "tests.fixtures.datagen",
]


@pytest.fixture
def engine(request: pytest.FixtureRequest) -> Engine:
    """Engine resolved from the fixture named by the indirect parameter.

    Tests that should run on both SQL backends write:

        @pytest.mark.parametrize(
            "engine", ["sqlite_engine_file", "postgres_engine"], indirect=True
        )
        def test_claims(engine): ...
    """
    return request.getfixturevalue(request.param)
