"""Discovery of named fields on source and destination shapes.

A shape is any class whose public instance data members can be enumerated from the type alone: dataclasses, named
tuples, classes with annotated attributes (including `attrs` and `pydantic` models), properties and ``__slots__``.
"""

from ._assignable import is_assignable
from ._descriptors import FieldAccessor, FieldDescriptor, FieldMap, clear_cache, resolve_field_map
from ._inspect import FieldInfo, inspect_fields, unwrap_optional

__all__ = [
    "FieldAccessor",
    "FieldDescriptor",
    "FieldInfo",
    "FieldMap",
    "clear_cache",
    "inspect_fields",
    "is_assignable",
    "resolve_field_map",
    "unwrap_optional",
]
