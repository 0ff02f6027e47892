"""Shared fixtures and marker auto-assignment by folder."""

from __future__ import annotations

from pathlib import Path

import pytest

from sfafkit import logger
from sfafkit.typing.models import Record

SCENARIO_TEXT = (
    "005. U\n010. M\n102. AFSP250001\n110. K4726.5\n113. FX\n114. A3E\n115. K5\n200. USAF\n"
    "300. FL\n301. EGLIN AFB\n303. 3024N08643W\n400. FL\n401. EGLIN AFB\n403. 3024N08643W\n"
    "144. Y\n803. SMITH J\n"
)


@pytest.fixture
def scenario_text() -> str:
    """SFAF text of a USAF record lacking only Field 701."""
    return SCENARIO_TEXT


@pytest.fixture
def compliant_record() -> Record:
    """Record passing every compliance check."""
    return Record.from_mapping(
        {
            "005": "U",
            "010": "M",
            "102": "AF 014589",
            "110": "K4726.5",
            "113": "FX",
            "114": "A3E",
            "115": "K5",
            "144": "Y",
            "200": "USAF",
            "300": "FL",
            "301": "EGLIN AFB",
            "303": "302400N0864300W",
            "400": "FL",
            "401": "EGLIN AFB",
            "403": "302400N0864300W",
            "701": "AFFSA",
            "803": "SMITH J",
        },
    )


def _mark_tests_by_directory(
    config: pytest.Config,
    items: list[pytest.Item],
    marker: str,
) -> None:
    """Mark collected tests located under tests/<marker>/."""
    target_dir = Path(config.rootpath) / "tests" / marker
    target_dir = target_dir.resolve()

    for item in items:
        try:
            path = Path(str(item.path)).resolve()
        except OSError:
            logger.warning(
                f"Could not resolve path for test item {item.name!s}; skipping {marker!s} marker assignment",
            )
            continue

        if path == target_dir or target_dir in path.parents:
            item.add_marker(getattr(pytest.mark, marker))


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Apply directory-based markers to test items."""
    _mark_tests_by_directory(config, items, "unit")
    _mark_tests_by_directory(config, items, "integration")
    _mark_tests_by_directory(config, items, "end2end")
