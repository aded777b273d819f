import logging
from collections.abc import Iterable, Mapping
from time import perf_counter
from typing import Any, Generic, Self

from rics.misc import tname
from rics.paths import AnyPath
from rics.strings import format_perf_counter as fmt_perf

from . import logging as _logging
from . import settings as _settings
from .converters import ConverterRegistry, get_default_registry
from .exceptions import ConverterError, DestinationCreationError, FieldWriteError
from .fields import FieldDescriptor, FieldMap, is_assignable, resolve_field_map
from .overrides import as_override_source
from .types import Converter, DestinationT, IgnoreFields, OverridesProducer, OverridesType, SourceT


class ObjectMapper(Generic[SourceT, DestinationT]):
    """Copy public fields between objects by name.

    For every public, writable field of the destination type, the value is taken from the `overrides` (if present)
    or from the same-named field of the source (if present). Values are passed through a registered converter, if
    there is one for the type of the value, before they are written.

    Args:
        registry: Converters to use. If ``None``, use the :func:`default registry <.get_default_registry>`.
        check_types: If ``True``, raise :class:`.FieldWriteError` for values which are incompatible with the declared
            type of the destination field. See :func:`.is_assignable` for details.

    Examples:
        Basic usage.

        >>> from dataclasses import dataclass
        >>> @dataclass
        ... class User:
        ...     name: str = ""
        ...     password: str = ""
        >>> @dataclass
        ... class UserDTO:
        ...     name: str = ""
        >>> ObjectMapper().map_object(User("Alice", "hunter2"), UserDTO, overrides={"name": "Bob"})
        UserDTO(name='Bob')
    """

    def __init__(
        self,
        registry: ConverterRegistry | None = None,
        *,
        check_types: bool = True,
    ) -> None:
        self._registry = registry
        self._check_types = check_types
        self._logger = logging.getLogger(__package__).getChild("ObjectMapper")

    @classmethod
    def from_config(cls, path: AnyPath) -> "ObjectMapper[Any, Any]":
        """Create an ``ObjectMapper`` from a TOML file.

        See :mod:`object_mapper.config` for the file format.

        Args:
            path: Path to a TOML file.

        Returns:
            A new ``ObjectMapper`` with its own converter registry.
        """
        from .config import from_config  # noqa: PLC0415

        return from_config(path)

    def map_object(
        self,
        source: SourceT | None,
        destination_type: type[DestinationT] | None = None,
        overrides: OverridesType = None,
        destination: DestinationT | None = None,
        ignore_fields: IgnoreFields = None,
        ignore_source_nulls: bool = True,
    ) -> DestinationT | None:
        """Map a single object.

        Args:
            source: Object to read from. If ``None``, return ``None`` immediately.
            destination_type: Type to map to. Defaults to the type of `destination`.
            overrides: Values which take precedence over the fields of the `source`, even if ``None``. Either a
                ``{name: value}`` mapping or any object with public attributes.
            destination: An existing object to update in-place. Create a new object if ``None``.
            ignore_fields: Destination fields to leave untouched.
            ignore_source_nulls: If ``True``, ``None``-valued source fields are not copied. Does not apply to
                `overrides`.

        Returns:
            The `destination`, or ``None`` if `source` is ``None``.

        Raises:
            TypeError: If neither `destination_type` nor `destination` is given.
            FieldReadError: If reading a source or override field raises.
            FieldWriteError: If a value cannot be written to the destination.
            ConverterError: If a converter raises.
            DestinationCreationError: If `destination_type` cannot be instantiated without arguments.
        """
        if source is None:
            return None

        if destination_type is None:
            if destination is None:
                raise TypeError("At least one of `destination_type` and `destination` must be given.")
            destination_type = type(destination)

        field_map = resolve_field_map(type(source), destination_type)
        return self.map_instance(source, field_map, overrides, destination, ignore_fields, ignore_source_nulls)

    def map_objects(
        self,
        items: Iterable[SourceT | None] | None,
        destination_type: type[DestinationT],
        overrides_producer: OverridesProducer[SourceT] | None = None,
        ignore_fields: IgnoreFields = None,
        ignore_source_nulls: bool = True,
        *,
        source_type: type[SourceT] | None = None,
        task_id: int | None = None,
    ) -> list[DestinationT | None] | None:
        """Map a collection of objects to new `destination_type` instances.

        The :class:`.FieldMap` is resolved once and reused for every element.

        Args:
            items: Objects to read from. If ``None``, return ``None`` immediately.
            destination_type: Type to map to.
            overrides_producer: A callable ``(element) -> overrides``, called once for each non-``None`` element.
            ignore_fields: Destination fields to leave untouched.
            ignore_source_nulls: If ``True``, ``None``-valued source fields are not copied.
            source_type: Type of the `items`. Derive from the first non-``None`` element if ``None``.
            task_id: Used for logging.

        Returns:
            A list with one element per item in `items`, in the same order. ``None`` elements are mapped to ``None``.

        Raises:
            FieldReadError: If reading a source or override field raises.
            FieldWriteError: If a value cannot be written to the destination.
            ConverterError: If a converter raises.
            DestinationCreationError: If `destination_type` cannot be instantiated without arguments.

        Notes:
            The `overrides_producer` is never called with ``None``. A ``None`` element has nothing to map, so it is
            mapped to ``None`` without consulting the producer.
        """
        if items is None:
            return None

        start = perf_counter()
        if task_id is None:
            task_id = _logging.generate_task_id(start)

        items = list(items)
        if source_type is None:
            source_type = next((type(item) for item in items if item is not None), None)
            if source_type is None:
                return [None] * len(items)

        logger = self.logger
        levels = _settings.logging.MAP_OBJECTS
        if logger.isEnabledFor(levels.enter):
            logger.log(
                levels.enter,
                f"Begin mapping of {len(items)} '{tname(source_type)}'-type elements to '{tname(destination_type)}'.",
                extra=dict(
                    task_id=task_id,
                    event_key=_logging.get_event_key(self.map_objects, "enter"),
                    num_items=len(items),
                ),
            )

        field_map = resolve_field_map(source_type, destination_type)
        rv = [
            self.map_instance(
                item,
                field_map,
                None if overrides_producer is None or item is None else overrides_producer(item),
                None,
                ignore_fields,
                ignore_source_nulls,
                task_id=task_id,
            )
            for item in items
        ]

        if logger.isEnabledFor(levels.exit):
            seconds = perf_counter() - start
            logger.log(
                levels.exit,
                f"Finished mapping of {len(rv)} '{tname(source_type)}'-type elements to '{tname(destination_type)}'"
                f" in {fmt_perf(start)}.",
                extra=dict(
                    task_id=task_id,
                    event_key=_logging.get_event_key(self.map_objects, "exit"),
                    seconds=seconds,
                    num_items=len(rv),
                ),
            )

        return rv

    def map_instance(
        self,
        source: SourceT | None,
        field_map: FieldMap,
        overrides: OverridesType = None,
        destination: DestinationT | None = None,
        ignore_fields: IgnoreFields = None,
        ignore_source_nulls: bool = True,
        *,
        task_id: int | None = None,
    ) -> DestinationT | None:
        """Map a single object using a precomputed :class:`.FieldMap`.

        Use :func:`.resolve_field_map` to create field maps. See :meth:`map_object` for details.

        Args:
            source: Object to read from. If ``None``, return ``None`` immediately.
            field_map: Field correspondence, as returned by :func:`.resolve_field_map`.
            overrides: Values which take precedence over the fields of the `source`, even if ``None``.
            destination: An existing object to update in-place. Create a new object if ``None``.
            ignore_fields: Destination fields to leave untouched.
            ignore_source_nulls: If ``True``, ``None``-valued source fields are not copied.
            task_id: Used for logging.

        Returns:
            The `destination`, or ``None`` if `source` is ``None``.
        """
        if source is None:
            return None

        if destination is None:
            destination = self._create(field_map.destination_type)

        override_source = as_override_source(overrides)
        ignore = _as_set(ignore_fields)
        converters = self.registry.snapshot()

        logger = self.logger
        verbose = _logging.ENABLE_VERBOSE_LOGGING and logger.isEnabledFor(logging.DEBUG)

        for name, descriptor in field_map.items():
            if name in ignore:
                continue

            value, found = (None, False) if override_source is None else override_source.lookup(name)
            if not found:
                if descriptor.source is None:
                    continue

                value = descriptor.source.get(source)
                if value is None and ignore_source_nulls:
                    continue

            if converters:
                value = self._convert(descriptor, value, converters)

            if self._check_types:
                declared_type = descriptor.destination.info.declared_type
                if not is_assignable(value, declared_type):
                    raise FieldWriteError(
                        name,
                        value,
                        type(destination),
                        reason=f"Expected declared type {declared_type!r}. Hint: Register a converter for this type.",
                    )

            descriptor.destination.set(destination, value)

            if verbose:
                origin = "overrides" if found else "source"
                logger.debug(f"Mapped field {name!r} from {origin}: {value!r}.", extra={"task_id": task_id})

        return destination

    @staticmethod
    def _create(destination_type: type[DestinationT]) -> DestinationT:
        try:
            return destination_type()
        except Exception as e:
            raise DestinationCreationError(destination_type) from e

    @staticmethod
    def _convert(descriptor: FieldDescriptor, value: Any, converters: Mapping[type[Any], Converter]) -> Any:
        if value is not None:
            key: type[Any] | None = type(value)
        elif descriptor.source is not None:
            key = descriptor.source.info.declared_class
        else:
            key = None

        if key is None or (converter := converters.get(key)) is None:
            return value

        try:
            return converter(value)
        except Exception as e:
            raise ConverterError(descriptor.name, key) from e

    @property
    def registry(self) -> ConverterRegistry:
        """Return the converters used by this instance."""
        return get_default_registry() if self._registry is None else self._registry

    @property
    def check_types(self) -> bool:
        """If ``True``, incompatible values are rejected before they are written."""
        return self._check_types

    @property
    def logger(self) -> logging.Logger:
        """Return the ``Logger`` that is used by this instance."""
        return self._logger

    @logger.setter
    def logger(self, logger: logging.Logger) -> None:
        self._logger = logger

    def copy(self, **overrides: Any) -> Self:
        """Make a copy of this ``ObjectMapper``.

        Args:
            overrides: Keyword arguments to use when instantiating the copy. Options that aren't given will be taken
                from the current instance.

        Returns:
            A copy of this ``ObjectMapper`` with `overrides` applied. The registry is shared, not copied.
        """
        kwargs: dict[str, Any] = {
            "registry": self._registry,
            "check_types": self._check_types,
            **overrides,
        }
        cls = type(self)
        return cls(**kwargs)

    def __repr__(self) -> str:
        registry = "<default>" if self._registry is None else self._registry
        return f"{tname(self)}({registry=}, check_types={self._check_types})"


def _as_set(ignore_fields: IgnoreFields) -> frozenset[str]:
    if not ignore_fields:
        return frozenset()
    if isinstance(ignore_fields, str):
        return frozenset((ignore_fields,))
    return frozenset(ignore_fields)
