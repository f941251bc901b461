from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from tests._fixtures.module_builder import ModuleBuilder


@pytest.fixture
def module_builder(tmp_path: Path) -> ModuleBuilder:
    """Provide a snapshot builder rooted at the pytest tmp_path."""
    return ModuleBuilder(tmp_path)


@pytest.fixture(autouse=True)
def _reset_apiaudit_logger() -> Iterator[None]:
    """Undo configure_logging so caplog keeps seeing apiaudit records."""
    yield
    logger = logging.getLogger("apiaudit")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
