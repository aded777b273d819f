"""Logging utilities.

All messages are emitted by the :data:`LOGGER` or its children. Per-field messages (one for every field of every
mapped object) are only emitted while :data:`ENABLE_VERBOSE_LOGGING` is set.
"""

import logging as _l
import sys as _sys
import typing as _t
from random import Random as _Random
from time import perf_counter as _perf_counter

from rics.env import read as _env

ENABLE_VERBOSE_LOGGING: bool = _env.read_bool("OBJECT_MAPPER_VERBOSE")
"""If ``True``, emit a ``DEBUG``-level message for every mapped field.

Initialized from :envvar:`OBJECT_MAPPER_VERBOSE`. See :func:`enable_verbose_debug_messages`.
"""

LOGGER = _l.getLogger("object_mapper")
"""Namespace root logger. Defaults to ``WARNING``, or ``DEBUG`` when verbose output is enabled by the environment."""
if LOGGER.level == _l.NOTSET:
    LOGGER.setLevel(_l.DEBUG if ENABLE_VERBOSE_LOGGING else _l.WARNING)


class VerboseDebugMessages:
    """Verbose output state returned by :func:`enable_verbose_debug_messages`.

    Restores the previous state on :meth:`restore`, or when used as a context manager.
    """

    def __init__(self, handler: _l.Handler | None) -> None:
        self._handler = handler
        self._before = (ENABLE_VERBOSE_LOGGING, LOGGER.level, LOGGER.propagate)

    def _apply(self) -> None:
        global ENABLE_VERBOSE_LOGGING  # noqa: PLW0603

        ENABLE_VERBOSE_LOGGING = True
        LOGGER.setLevel(_l.DEBUG)
        if self._handler is not None:
            LOGGER.addHandler(self._handler)
            LOGGER.propagate = False

    def restore(self) -> None:
        """Undo the changes made by :func:`enable_verbose_debug_messages`."""
        global ENABLE_VERBOSE_LOGGING  # noqa: PLW0603

        ENABLE_VERBOSE_LOGGING, level, propagate = self._before
        LOGGER.setLevel(level)
        if self._handler is not None:
            LOGGER.removeHandler(self._handler)
            LOGGER.propagate = propagate
            self._handler = None

    def __enter__(self) -> "VerboseDebugMessages":
        return self

    def __exit__(self, *_: _t.Any) -> None:
        self.restore()


def enable_verbose_debug_messages(*, handler: bool | _t.Literal["auto"] = "auto") -> VerboseDebugMessages:
    """Print a message for every mapped field. May be used as a context.

    Args:
        handler: If ``True``, print to standard out using a :class:`TaskFormatter`, without propagating to the root
            logger. If `'auto'` (default), do so only if the :data:`LOGGER` has no handlers of its own or via
            propagation.

    Returns:
        A :class:`VerboseDebugMessages` instance. Changes are permanent unless it is used as a context, or
        :meth:`~VerboseDebugMessages.restore` is called.

    Examples:
        >>> from object_mapper import map_object
        >>> with enable_verbose_debug_messages():  # doctest: +SKIP
        ...     map_object(user, UserDTO)
        [0x0000] [object_mapper.ObjectMapper:DEBUG] Mapped field 'name' from source: 'Alice'.
    """
    stream_handler = None
    if handler is True or (handler == "auto" and not LOGGER.hasHandlers()):
        stream_handler = _l.StreamHandler(_sys.stdout)
        stream_handler.setFormatter(TaskFormatter("[%(name)s:%(levelname)s] %(message)s"))

    state = VerboseDebugMessages(stream_handler)
    state._apply()
    return state


class TaskFormatter(_l.Formatter):
    """Prefix messages with the ``task_id`` of the record, if any."""

    def formatMessage(self, record: _l.LogRecord) -> str:  # noqa: N802
        task_id = getattr(record, "task_id", None)
        prefix = "[------]" if task_id is None else f"[{task_id:#06x}]"
        return f"{prefix} {super().formatMessage(record)}"


def generate_task_id(seed: float | None = None) -> int:
    """Generate a new task ID."""
    if seed is None:
        seed = _perf_counter()
    random = _Random(seed)  # noqa: S311
    return random.randint(0, 0xFFFF)


def get_event_key(method: _t.Any, stage: str) -> str:
    """Construct `event_key` value."""
    cls = type(method.__self__).__name__
    return f"{cls}.{method.__name__}:{stage}"
