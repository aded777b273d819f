"""Global mapping settings."""

import logging as _l
import typing as _t


class KeyEventLogLevel(_t.NamedTuple):
    """Enter/exit log level pair for key events. Default level is 10 ``logging.DEBUG=10``."""

    enter: int = _l.DEBUG
    """Log level for the ``ENTER`` message, e.g. ``OBJECTMAPPER.MAP_OBJECTS.ENTER``.

    .. code-block:: python
       :caption: Example: Enter message of the :meth:`.ObjectMapper.map_objects`-method.

       Begin mapping of 3 'User'-type elements to 'UserDTO'.
    """

    exit: int = _l.DEBUG
    """Log level for the ``EXIT`` message, e.g. ``OBJECTMAPPER.MAP_OBJECTS.EXIT``.

    .. code-block:: python
       :caption: Example: Exit message of the :meth:`.ObjectMapper.map_objects`-method.

       Finished mapping of 3 'User'-type elements to 'UserDTO' in 41 μs.
    """


class logging:  # noqa: N801
    """Global logging settings used by all instances."""

    MAP_OBJECTS: KeyEventLogLevel = KeyEventLogLevel()
    """Levels for ``OBJECTMAPPER.MAP_OBJECTS`` key event messages."""
    MAP_FRAME: KeyEventLogLevel = KeyEventLogLevel(exit=_l.INFO)
    """Levels for ``PANDAS.MAP_FRAME`` key event messages."""

    def __init__(self) -> None:
        _raise_info_message(self)


def _raise_info_message(obj: _t.Any) -> None:
    from rics.misc import get_public_module, tname  # noqa: PLC0415

    raise RuntimeError(
        f"Class '{get_public_module(obj)}.{tname(obj)}' is used as a public"
        f" namespace. There is no need to instantiate this class."
    )
