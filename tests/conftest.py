from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from testdoc.logging import get_logger
from tests._fixtures.records_builder import RecordsBuilder


@pytest.fixture
def records_builder(tmp_path: Path) -> RecordsBuilder:
    """Provide a reusable records builder rooted at the pytest tmp_path."""
    return RecordsBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_testdoc_logger() -> Iterator[None]:
    # CLI tests bind handlers to per-test capture streams.
    yield
    logger = get_logger()
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel("NOTSET")
