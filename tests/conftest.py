from __future__ import annotations

import logging
import sys
from pathlib import Path

import pytest

# Ensure tests always import the local src tree, not an older installed wheel.
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))


@pytest.fixture(autouse=True)
def _reset_dbremote_logging():
    """Drop handlers installed by CLI runs so they don't leak between tests."""
    yield
    logger = logging.getLogger("dbremote")
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
