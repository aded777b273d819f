"""Test utilities."""

from collections.abc import Iterator as _Iterator
from collections.abc import Mapping as _Mapping
from contextlib import contextmanager as _contextmanager
from typing import Any as _Any

from . import converters as _converters
from .fields import clear_cache as _clear_cache
from .types import Converter as _Converter


@_contextmanager
def temporary_converters(
    converters: _Mapping[type[_Any], _Converter] | None = None,
    *,
    inherit: bool = False,
) -> _Iterator[_converters.ConverterRegistry]:
    """Temporarily replace the default converter registry.

    Registrations made inside the context (e.g. using :func:`~object_mapper.register_converter`) are discarded on exit.

    Args:
        converters: Initial converters of the temporary registry.
        inherit: If ``True``, start from a copy of the current default registry.

    Yields:
        The temporary registry.

    Examples:
        >>> with temporary_converters({bool: int}) as registry:
        ...     len(registry)
        1
    """
    before = _converters._DEFAULT_REGISTRY

    registry = before.copy() if inherit else _converters.ConverterRegistry()
    for key, converter in (converters or {}).items():
        registry.register(key, converter)

    _converters._DEFAULT_REGISTRY = registry
    try:
        yield registry
    finally:
        _converters._DEFAULT_REGISTRY = before


def reset_field_cache() -> None:
    """Forget cached field maps; useful when classes are redefined between tests."""
    _clear_cache()
