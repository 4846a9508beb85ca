import json
import logging

import pytest
import structlog

from catan_rules.engine.rules import end_turn
from catan_rules.logging_config import configure_logging, get_logger


@pytest.fixture(autouse=True)
def reset_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_production_logging_is_json(capsys):
    configure_logging("production")
    get_logger("test").info("robber_moved", hex="0,0")
    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["event"] == "robber_moved"
    assert record["hex"] == "0,0"
    assert record["level"] == "info"


def test_production_drops_debug(capsys):
    configure_logging("production")
    get_logger().debug("action_applied")
    assert capsys.readouterr().out == ""


def test_engine_is_silent_until_configured(make_game, capsys):
    state = make_game()
    assert not end_turn(state, "p2")
    assert capsys.readouterr().out == ""
