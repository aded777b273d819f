import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from functools import lru_cache
from time import perf_counter
from types import MappingProxyType
from typing import Any

from rics.misc import tname
from rics.strings import format_perf_counter as fmt_perf

from .. import logging as _logging
from ..exceptions import FieldReadError, FieldWriteError
from ._inspect import FieldInfo, _inspect_fields, inspect_fields

LOGGER = logging.getLogger(__package__)


@dataclass(frozen=True, slots=True)
class FieldAccessor:
    """Reads or writes a single named field."""

    owner: type[Any]
    """The shape which declares the field."""
    info: FieldInfo
    """Field metadata."""

    @property
    def name(self) -> str:
        """Name of the field."""
        return self.info.name

    def get(self, obj: Any) -> Any:
        """Read the field from `obj`.

        Raises:
            FieldReadError: If the read raises.
        """
        try:
            return getattr(obj, self.info.name)
        except Exception as e:
            raise FieldReadError(self.info.name, obj) from e

    def set(self, obj: Any, value: Any) -> None:
        """Write `value` to the field of `obj`.

        Raises:
            FieldWriteError: If the write raises.
        """
        try:
            setattr(obj, self.info.name, value)
        except Exception as e:
            raise FieldWriteError(self.info.name, value, type(obj)) from e


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """Precomputed pairing of a destination field with the same-named source field, if any."""

    name: str
    destination: FieldAccessor
    source: FieldAccessor | None = None

    def __repr__(self) -> str:
        source = "<absent>" if self.source is None else tname(self.source.owner)
        return f"FieldDescriptor({self.name!r}: {source} -> {tname(self.destination.owner)})"


class FieldMap(Mapping[str, FieldDescriptor]):
    """An immutable ``{name: FieldDescriptor}`` mapping, in destination declaration order.

    Args:
        source_type: Type to read from.
        destination_type: Type to write to.
        descriptors: Field descriptors keyed by destination field name.
    """

    __slots__ = ("_descriptors", "_destination_type", "_source_type")

    def __init__(
        self,
        source_type: type[Any],
        destination_type: type[Any],
        descriptors: Mapping[str, FieldDescriptor],
    ) -> None:
        self._source_type = source_type
        self._destination_type = destination_type
        self._descriptors = MappingProxyType(dict(descriptors))

    @property
    def source_type(self) -> type[Any]:
        """Type to read from."""
        return self._source_type

    @property
    def destination_type(self) -> type[Any]:
        """Type to write to. Used to create new destination instances."""
        return self._destination_type

    @property
    def matched(self) -> list[str]:
        """Names of destination fields which have a source counterpart."""
        return [name for name, d in self._descriptors.items() if d.source is not None]

    def __getitem__(self, name: str) -> FieldDescriptor:
        return self._descriptors[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __repr__(self) -> str:
        return f"{tname(self)}({tname(self._source_type)} -> {tname(self._destination_type)}: {list(self._descriptors)})"


def resolve_field_map(source_type: type[Any], destination_type: type[Any]) -> FieldMap:
    """Pair every writable public field of `destination_type` with a same-named readable field of `source_type`.

    Results are cached, so calling this function repeatedly for the same pair of types is cheap. Field maps are
    immutable and may be shared between threads.

    Args:
        source_type: Type to read from.
        destination_type: Type to write to.

    Returns:
        A :attr:`FieldMap`. Destination fields without a source counterpart have ``descriptor.source=None``.

    Raises:
        TypeError: If either argument is not a type.
    """
    for arg in (source_type, destination_type):
        if not isinstance(arg, type):
            raise TypeError(f"Expected a type, but got {arg!r} of type={tname(arg)!r}.")
    return _resolve_field_map(source_type, destination_type)


@lru_cache(maxsize=512)
def _resolve_field_map(source_type: type[Any], destination_type: type[Any]) -> FieldMap:
    start = perf_counter()

    source_fields = inspect_fields(source_type)
    descriptors: dict[str, FieldDescriptor] = {}
    for name, info in inspect_fields(destination_type).items():
        if not info.writable:
            continue

        source_info = source_fields.get(name)
        source = None if source_info is None or not source_info.readable else FieldAccessor(source_type, source_info)
        descriptors[name] = FieldDescriptor(name, FieldAccessor(destination_type, info), source)

    field_map = FieldMap(source_type, destination_type, descriptors)

    if LOGGER.isEnabledFor(logging.DEBUG):
        matched = field_map.matched
        unmatched = [name for name in field_map if name not in matched]
        details = f" Matched: {matched}, unmatched: {unmatched}." if _logging.ENABLE_VERBOSE_LOGGING else ""
        LOGGER.debug(
            f"Resolved {len(matched)}/{len(field_map)} fields of '{tname(destination_type)}'"
            f" from '{tname(source_type)}' in {fmt_perf(start)}.{details}"
        )

    return field_map


def clear_cache() -> None:
    """Forget all cached field maps and shape inspection results."""
    _resolve_field_map.cache_clear()
    _inspect_fields.cache_clear()
