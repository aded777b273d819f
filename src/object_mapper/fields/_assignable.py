import typing
from types import NoneType, UnionType
from typing import Any


def is_assignable(value: Any, declared_type: Any) -> bool:
    """Check whether `value` may be written to a field annotated with `declared_type`.

    The check is shallow: generic aliases such as ``list[int]`` are checked against their origin (``list``) only.
    Annotations which cannot be checked at runtime accept any value, and so does ``None``.

    Args:
        value: A value about to be written.
        declared_type: Annotation of the destination field.

    Returns:
        ``False`` if `value` is known to be incompatible with `declared_type`.

    Examples:
        >>> is_assignable(1, float)
        True
        >>> is_assignable("1", int | None)
        False
        >>> is_assignable([1], list[str])
        True
    """
    if value is None or declared_type is None or declared_type is Any:
        return True

    origin = typing.get_origin(declared_type)
    if origin is typing.Annotated:
        return is_assignable(value, typing.get_args(declared_type)[0])
    if origin in (typing.Union, UnionType):
        return any(is_assignable(value, arg) for arg in typing.get_args(declared_type))
    if origin is typing.Literal:
        return True
    if origin is not None:
        declared_type = origin

    if declared_type is NoneType:
        return False
    if not isinstance(declared_type, type):
        return True  # TypeVar, NewType, forward references, ...

    if declared_type is float:
        return isinstance(value, int | float)
    if declared_type is complex:
        return isinstance(value, int | float | complex)

    try:
        return isinstance(value, declared_type)
    except TypeError:
        return True  # Protocols which aren't runtime checkable, TypedDict, ...
