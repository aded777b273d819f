import logging

import pytest

from object_mapper import logging as om_logging
from object_mapper import map_object, settings
from tests.shapes import User, UserDTO


def test_not_serializable_fails():
    with pytest.raises(TypeError):
        logging.root.warning("This should fail!", extra=dict(bad_key={"sets aren't serializable"}))


def test_verbose_context(capsys):
    level_before = om_logging.LOGGER.level

    with om_logging.enable_verbose_debug_messages(handler=True):
        assert om_logging.ENABLE_VERBOSE_LOGGING is True
        assert om_logging.LOGGER.level == logging.DEBUG
        assert om_logging.LOGGER.propagate is False
        map_object(User(id=1, name="Alice"), UserDTO)

    assert om_logging.ENABLE_VERBOSE_LOGGING is False
    assert om_logging.LOGGER.level == level_before
    assert om_logging.LOGGER.propagate is True
    assert not any(isinstance(h, logging.StreamHandler) for h in om_logging.LOGGER.handlers)

    out = capsys.readouterr().out
    assert "[------] [object_mapper.ObjectMapper:DEBUG] Mapped field 'name' from source: 'Alice'." in out


def test_verbose_without_handler(caplog):
    state = om_logging.enable_verbose_debug_messages(handler=False)
    try:
        assert om_logging.LOGGER.propagate is True
        with caplog.at_level(logging.DEBUG, logger="object_mapper"):
            map_object(User(id=1), UserDTO)
    finally:
        state.restore()

    assert om_logging.ENABLE_VERBOSE_LOGGING is False
    assert "Mapped field 'id' from source: 1." in caplog.messages


@pytest.mark.parametrize(
    "task_id, expected",
    [
        (None, "[------] msg"),
        (0x2B, "[0x002b] msg"),
        (0x2B00, "[0x2b00] msg"),
        (0xFFFF, "[0xffff] msg"),
    ],
)
def test_task_formatter(task_id, expected):
    formatter = om_logging.TaskFormatter("%(message)s")
    record = logging.LogRecord("object_mapper", logging.DEBUG, __file__, 1, "msg", None, None)
    if task_id is not None:
        record.task_id = task_id
    assert formatter.format(record) == expected


def test_generate_task_id():
    assert om_logging.generate_task_id(1.0) == om_logging.generate_task_id(1.0)
    assert 0 <= om_logging.generate_task_id() <= 0xFFFF


def test_settings_namespace():
    assert settings.logging.MAP_FRAME.exit == logging.INFO

    with pytest.raises(RuntimeError, match="public namespace"):
        settings.logging()
