"""Default marks for tests under `tests/contract/`."""

from pathlib import Path

import pytest

# pylint: disable=unused-argument

CONTRACT_ROOT = Path(__file__).parent.resolve()
MARKER_NAME = "contract"


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark every item collected below `tests/contract/` as `contract` unless it already is."""
    for item in items:
        if CONTRACT_ROOT not in item.path.resolve().parents:
            continue
        if MARKER_NAME not in {marker.name for marker in item.iter_markers()}:
            item.add_marker(pytest.mark.contract)
