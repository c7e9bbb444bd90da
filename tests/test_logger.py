import logging
from unittest.mock import MagicMock

import pytest

from supply_monitor.clients import http as http_module
from supply_monitor.clients.http import HttpClient
from supply_monitor.logger import TRACE, ColoredFormatter, setup_logging


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    saved = (root.level, list(root.handlers))
    noisy = {name: logging.getLogger(name).level for name in ("urllib3", "web3")}
    yield
    root.setLevel(saved[0])
    root.handlers[:] = saved[1]
    for name, level in noisy.items():
        logging.getLogger(name).setLevel(level)


def test_trace_level_enables_library_loggers():
    setup_logging("trace")

    assert logging.getLogger().level == TRACE
    assert logging.getLogger("urllib3").level == TRACE
    assert logging.getLevelName(TRACE) == "TRACE"


def test_debug_quietens_library_loggers():
    setup_logging("DEBUG")

    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger("urllib3").level == logging.WARNING


def test_unknown_level_falls_back_to_info():
    setup_logging("chatty")

    assert logging.getLogger().level == logging.INFO


def test_formatter_colours_level_without_mutating_record():
    record = logging.LogRecord("x", TRACE, __file__, 1, "raw body", None, None)

    text = ColoredFormatter(fmt="%(levelname)s %(message)s").format(record)

    assert "\033[90m" in text
    assert text.endswith("raw body")
    assert record.levelname == "TRACE"


@pytest.mark.asyncio
async def test_response_bodies_logged_at_trace(monkeypatch, caplog):
    response = http_module.requests.Response()
    response.status_code = 200
    response.url = "https://api.example/x"
    response._content = b'{"total_supply": "1"}'
    monkeypatch.setattr(http_module.requests, "get", MagicMock(return_value=response))

    with caplog.at_level(TRACE, logger="supply_monitor.clients.http"):
        await HttpClient().get_json("https://api.example/x")

    traced = [r for r in caplog.records if r.levelno == TRACE]
    assert len(traced) == 1
    assert '"total_supply": "1"' in traced[0].getMessage()
