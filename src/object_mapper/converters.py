"""Registry of per-type value converters.

Converters are keyed by type and selected by exact match: the runtime type of the value being written, or the declared
type of the source field when the value is ``None``. Subclasses do not inherit converters from their bases.
"""

import logging
import typing as _t
from collections.abc import Iterator, Mapping
from threading import Lock
from types import MappingProxyType

from rics.misc import tname

from .exceptions import ConverterRegistrationError
from .types import Converter

LOGGER = logging.getLogger(__package__).getChild("converters")


class ConverterRegistry(Mapping[type[_t.Any], Converter]):
    """A thread-safe ``{type: converter}`` registry.

    Writes are serialized by a lock and publish a new immutable snapshot, which readers use without locking. A reader
    racing a registration sees either the old or the new snapshot, never a partially updated one.

    Args:
        converters: Initial converters.
    """

    def __init__(self, converters: Mapping[type[_t.Any], Converter] | None = None) -> None:
        self._lock = Lock()
        self._snapshot: Mapping[type[_t.Any], Converter] = MappingProxyType({})
        for key, converter in (converters or {}).items():
            self.register(key, converter)

    def register(self, type_: type[_t.Any], converter: Converter) -> None:
        """Register a converter, replacing any existing converter for `type_`.

        Args:
            type_: Type of values to convert.
            converter: A callable ``(value) -> value``.

        Raises:
            ConverterRegistrationError: If `type_` is not a type or `converter` is not callable.
        """
        if not isinstance(type_, type):
            raise ConverterRegistrationError(f"Converter key must be a type, but got {type_!r}.")
        if not callable(converter):
            raise ConverterRegistrationError(f"Converter for type '{tname(type_)}' must be callable: {converter!r}.")

        with self._lock:
            before = self._snapshot.get(type_)
            self._snapshot = MappingProxyType({**self._snapshot, type_: converter})

        if LOGGER.isEnabledFor(logging.DEBUG):
            replaced = "" if before is None else f" Replaced previous converter {tname(before)!r}."
            LOGGER.debug(f"Registered converter {tname(converter)!r} for type '{tname(type_)}'.{replaced}")

    def snapshot(self) -> Mapping[type[_t.Any], Converter]:
        """Return an immutable view of the current converters."""
        return self._snapshot

    def copy(self) -> "ConverterRegistry":
        """Create an independent registry with the same converters."""
        return ConverterRegistry(self._snapshot)

    def __getitem__(self, key: type[_t.Any]) -> Converter:
        return self._snapshot[key]

    def __iter__(self) -> Iterator[type[_t.Any]]:
        return iter(self._snapshot)

    def __len__(self) -> int:
        return len(self._snapshot)

    def __repr__(self) -> str:
        types = [tname(t) for t in self._snapshot]
        return f"{tname(self)}({types=})"


_DEFAULT_REGISTRY = ConverterRegistry()


def get_default_registry() -> ConverterRegistry:
    """Return the process-wide registry used by :func:`register_converter` and the module-level mapping functions."""
    return _DEFAULT_REGISTRY


def register_converter(type_: type[_t.Any], converter: Converter) -> None:
    """Register a converter in the :func:`default registry <get_default_registry>`.

    Args:
        type_: Type of values to convert.
        converter: A callable ``(value) -> value``.

    Raises:
        ConverterRegistrationError: If `type_` is not a type or `converter` is not callable.

    Examples:
        Map an enum to its name.

        >>> from enum import Enum
        >>> class Color(Enum):
        ...     RED = 1
        >>> register_converter(Color, lambda c: None if c is None else c.name)
    """
    _DEFAULT_REGISTRY.register(type_, converter)
