"""Types used for mapping."""

import typing as _t
from collections import abc as _abc

if _t.TYPE_CHECKING:
    from .overrides import OverrideSource

SourceT = _t.TypeVar("SourceT")
"""Type of the object being mapped from."""
DestinationT = _t.TypeVar("DestinationT")
"""Type of the object being mapped to."""

Converter = _abc.Callable[[_t.Any], _t.Any]
"""Signature for a type converter.

Args:
    value: A value (possibly ``None``) about to be written to a destination field.

Returns:
    The value to write instead.
"""

OverridesType: _t.TypeAlias = _t.Union[_abc.Mapping[str, _t.Any], "OverrideSource", object, None]
"""Types accepted as overrides.

Mappings are looked up by key. Any other object is inspected for a public attribute of the same name, e.g. a
:py:class:`types.SimpleNamespace` or a dataclass instance.
"""

OverridesProducer = _abc.Callable[[SourceT], OverridesType]
"""Signature for a per-element override producer used by :meth:`.ObjectMapper.map_objects`.

Args:
    element: The source element about to be mapped.

Returns:
    Overrides for `element`.
"""

IgnoreFields: _t.TypeAlias = _abc.Collection[str] | None
"""Destination field names to skip entirely."""
