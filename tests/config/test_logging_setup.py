from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import pytest

from identipy.config import configure_logging

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    sqlalchemy_level = logging.getLogger("sqlalchemy.engine").level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.getLogger("sqlalchemy.engine").setLevel(sqlalchemy_level)


@pytest.mark.usefixtures("restore_root_logger")
def test_logs_go_to_stderr_with_terse_format() -> None:
    configure_logging(force=True)

    root = logging.getLogger()
    (handler,) = root.handlers
    assert isinstance(handler, logging.StreamHandler)
    assert handler.stream is sys.stderr
    assert handler.formatter is not None
    assert handler.formatter._fmt == "%(levelname)s %(message)s"  # noqa: SLF001
    assert root.level == logging.INFO
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


@pytest.mark.usefixtures("restore_root_logger")
def test_debug_logging_shows_logger_names() -> None:
    configure_logging(level=logging.DEBUG, force=True)

    (handler,) = logging.getLogger().handlers
    assert handler.formatter is not None
    assert "[%(name)s]" in (handler.formatter._fmt or "")  # noqa: SLF001
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
