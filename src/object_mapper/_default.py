from collections.abc import Iterable
from typing import Any

from ._mapper import ObjectMapper
from .types import DestinationT, IgnoreFields, OverridesProducer, OverridesType, SourceT

_DEFAULT_MAPPER: ObjectMapper[Any, Any] = ObjectMapper()


def map_object(
    source: Any,
    destination_type: type[DestinationT] | None = None,
    overrides: OverridesType = None,
    destination: DestinationT | None = None,
    ignore_fields: IgnoreFields = None,
    ignore_source_nulls: bool = True,
) -> DestinationT | None:
    """Map a single object using the default converter registry.

    See :meth:`.ObjectMapper.map_object` for details.
    """
    return _DEFAULT_MAPPER.map_object(source, destination_type, overrides, destination, ignore_fields, ignore_source_nulls)


def map_objects(
    items: Iterable[SourceT | None] | None,
    destination_type: type[DestinationT],
    overrides_producer: OverridesProducer[SourceT] | None = None,
    ignore_fields: IgnoreFields = None,
    ignore_source_nulls: bool = True,
    *,
    source_type: type[SourceT] | None = None,
) -> list[DestinationT | None] | None:
    """Map a collection of objects using the default converter registry.

    See :meth:`.ObjectMapper.map_objects` for details.
    """
    return _DEFAULT_MAPPER.map_objects(
        items,
        destination_type,
        overrides_producer,
        ignore_fields,
        ignore_source_nulls,
        source_type=source_type,
    )
