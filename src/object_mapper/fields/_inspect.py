import dataclasses
import inspect
import sys
import typing
from collections.abc import Mapping
from functools import lru_cache
from types import MappingProxyType, NoneType, UnionType
from typing import Any

from rics.misc import tname


@dataclasses.dataclass(frozen=True)
class FieldInfo:
    """A public instance data member of a shape."""

    name: str
    """Name of the member."""
    declared_type: Any = None
    """Annotation of the member, or ``None`` if the shape does not declare one."""
    readable: bool = True
    """If ``False``, the member may not be used as a source field."""
    writable: bool = True
    """If ``False``, the member may not be used as a destination field."""

    @property
    def declared_class(self) -> type[Any] | None:
        """Declared type as a plain class, with ``Optional`` unwrapped.

        Returns:
            A class, or ``None`` if the declared type is not a single class (e.g. ``int | str`` or ``Any``).
        """
        return unwrap_optional(self.declared_type)


def inspect_fields(cls: type[Any]) -> Mapping[str, FieldInfo]:
    """Enumerate the public instance data members of a type.

    Members are collected from (in order): dataclass fields, named tuple fields, annotated class attributes, properties
    and ``__slots__``. The first occurrence of a name wins. Names which start with an underscore are skipped, as are
    ``ClassVar`` annotations and the ``InitVar`` and ``KW_ONLY`` pseudo-fields of dataclasses. Results are cached.

    Args:
        cls: A type to inspect.

    Returns:
        An immutable ``{name: FieldInfo}`` mapping, in declaration order.

    Raises:
        TypeError: If `cls` is not a type.
    """
    if not isinstance(cls, type):
        raise TypeError(f"Expected a type, but got {cls!r} of type={tname(cls)!r}.")
    return _inspect_fields(cls)


@lru_cache(maxsize=512)
def _inspect_fields(cls: type[Any]) -> Mapping[str, FieldInfo]:
    hints = _get_hints(cls)
    fields: dict[str, FieldInfo] = {}

    def add(name: str, *, readable: bool = True, writable: bool = True, declared_type: Any = None) -> None:
        if name.startswith("_") or name in fields:
            return
        fields[name] = FieldInfo(name, hints.get(name, declared_type), readable, writable)

    is_dataclass = dataclasses.is_dataclass(cls)
    if is_dataclass:
        for field in dataclasses.fields(cls):
            add(field.name)

    if issubclass(cls, tuple) and hasattr(cls, "_fields"):
        for name in cls._fields:
            add(name, writable=False)

    for name, hint in hints.items():
        if _is_classvar(hint) or (is_dataclass and _is_dataclass_pseudo_field(hint)):
            continue
        add(name)

    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if isinstance(attr, property):
                add(
                    name,
                    readable=attr.fget is not None,
                    writable=attr.fset is not None,
                    declared_type=_get_return_type(attr),
                )

    for klass in reversed(cls.__mro__):
        slots = vars(klass).get("__slots__", ())
        for name in (slots,) if isinstance(slots, str) else slots:
            add(name)

    return MappingProxyType(fields)


def unwrap_optional(declared_type: Any) -> type[Any] | None:
    """Returns the class `declared_type` refers to, ignoring ``None`` members of unions."""
    origin = typing.get_origin(declared_type)
    if origin is typing.Annotated:
        return unwrap_optional(typing.get_args(declared_type)[0])
    if origin in (typing.Union, UnionType):
        args = [arg for arg in typing.get_args(declared_type) if arg is not NoneType]
        return unwrap_optional(args[0]) if len(args) == 1 else None
    if declared_type is Any or origin is not None:
        return None
    return declared_type if isinstance(declared_type, type) else None


def _get_hints(cls: type[Any]) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, TypeError):
        # Unresolvable forward references; keep names, drop types we cannot evaluate.
        hints: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            hints.update(_get_raw_annotations(klass))
        return {
            name: None if isinstance(hint, str | typing.ForwardRef) else hint
            for name, hint in hints.items()
            if not _is_classvar(hint) and not (dataclasses.is_dataclass(cls) and _is_dataclass_pseudo_field(hint))
        }


def _get_raw_annotations(klass: type[Any]) -> dict[str, Any]:
    if sys.version_info >= (3, 14):
        import annotationlib  # noqa: PLC0415

        return annotationlib.get_annotations(klass, format=annotationlib.Format.FORWARDREF)
    return inspect.get_annotations(klass)


def _get_return_type(prop: property) -> Any:
    if prop.fget is None:
        return None
    try:
        return typing.get_type_hints(prop.fget).get("return")
    except (NameError, TypeError):
        return None


def _is_classvar(hint: Any) -> bool:
    if isinstance(hint, str):
        return hint.startswith(("ClassVar", "typing.ClassVar"))
    return hint is typing.ClassVar or typing.get_origin(hint) is typing.ClassVar


def _is_dataclass_pseudo_field(hint: Any) -> bool:
    if isinstance(hint, str):
        return hint.startswith(("InitVar", "dataclasses.InitVar", "KW_ONLY", "dataclasses.KW_ONLY"))
    return isinstance(hint, dataclasses.InitVar) or hint is dataclasses.InitVar or hint is dataclasses.KW_ONLY
