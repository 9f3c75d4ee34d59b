"""pytest configuration shared by all tests.

Loguru records are forwarded into the standard logging module so that pytest
captures them, and proxy environment variables are cleared so that no test
depends on the network setup of the machine running it.
"""

import logging
from typing import TYPE_CHECKING

import pytest
from loguru import logger

from simplehttp.configs import reset_settings_cache

if TYPE_CHECKING:
    from loguru import Message

PROXY_ENV_VARS = (
    "HTTP_PROXY",
    "HTTPS_PROXY",
    "ALL_PROXY",
    "NO_PROXY",
    "http_proxy",
    "https_proxy",
    "all_proxy",
    "no_proxy",
    "REQUEST_METHOD",
)


def logging_sink(message: "Message") -> None:
    """Forward a loguru message to the stdlib logger of the emitting module.

    The source file, line and function are kept so pytest reports them.
    """
    record = message.record
    level = logging.getLevelName(record["level"].name)
    if not isinstance(level, int):
        # TRACE and SUCCESS have no stdlib counterpart
        level = logging.DEBUG if record["level"].no < logging.INFO else logging.INFO

    name = record["name"] or "__main__"
    py_logger = logging.getLogger(name)
    py_logger.handle(
        py_logger.makeRecord(
            name=name,
            level=level,
            fn=record["file"].path if record["file"] else "unknown",
            lno=record["line"],
            msg=record["message"],
            args=(),
            exc_info=None,
            func=record["function"],
        )
    )


@pytest.fixture(scope="session", autouse=True)
def configure_loguru_for_pytest() -> None:
    """Replace every loguru handler with a sink into stdlib logging."""
    logger.remove()
    logger.add(logging_sink, format="{message}", level="DEBUG")


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove proxy variables and cached settings before each test."""
    for name in PROXY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("SEND_PUSH_NOTIFICATIONS", raising=False)
    monkeypatch.delenv("PUSH_NOTIFICATION_SERVER", raising=False)
    reset_settings_cache()
