import json
import logging

import pytest

from selfemploy.core.logger import JsonFormatter, build_formatter, init_logging


def _record(**extra):
    record = logging.LogRecord("selfemploy.test", logging.INFO, __file__, 1, "raised %s", ("Q1",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_tags_service_and_env():
    line = JsonFormatter("SelfEmploy Periods", "prod").format(_record())

    payload = json.loads(line)
    assert payload["message"] == "raised Q1"
    assert payload["service"] == "SelfEmploy Periods"
    assert payload["env"] == "prod"
    assert payload["level"] == "INFO"
    assert "extra" not in payload


def test_json_formatter_collects_extra_fields():
    line = JsonFormatter("svc", "test").format(_record(notification={"id": 3, "priority": "high"}))

    assert json.loads(line)["extra"] == {"notification": {"id": 3, "priority": "high"}}


def test_build_formatter_by_format():
    assert isinstance(build_formatter("json"), JsonFormatter)
    assert not isinstance(build_formatter("plain"), JsonFormatter)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def test_init_logging_force_replaces_handlers(restore_root_logger):
    root = restore_root_logger
    root.addHandler(logging.NullHandler())

    init_logging(level=logging.DEBUG, force=True)

    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0], logging.StreamHandler)
    assert root.level == logging.DEBUG
    assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING


def test_init_logging_keeps_existing_handlers(restore_root_logger):
    root = restore_root_logger
    marker = logging.NullHandler()
    root.addHandler(marker)

    init_logging()

    assert marker in root.handlers
