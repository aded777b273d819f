"""Per-call override values.

Overrides may be given either as an explicit ``{name: value}`` mapping, or as any object with public attributes
(e.g. a :py:class:`types.SimpleNamespace`). Both are wrapped in an :class:`OverrideSource` by
:func:`as_override_source`, so that the mapping engine never needs to know which form is in use.
"""

import inspect as _inspect
import typing as _t
from abc import ABC, abstractmethod
from collections.abc import Mapping
from types import FunctionType, MethodType

from rics.misc import tname

from .exceptions import FieldReadError

_MISSING = object()


class OverrideSource(ABC):
    """Lookup interface for override values."""

    @abstractmethod
    def lookup(self, name: str) -> tuple[_t.Any, bool]:
        """Look up an override value.

        Args:
            name: A destination field name.

        Returns:
            A tuple ``(value, found)``. When `found` is ``True``, the `value` must be used even if it is ``None``.
        """

    def __repr__(self) -> str:
        return f"{tname(self)}({self.overrides!r})"

    @property
    @abstractmethod
    def overrides(self) -> _t.Any:
        """Return the underlying overrides."""


class MappingOverrides(OverrideSource):
    """Overrides backed by an explicit ``{name: value}`` mapping.

    Args:
        overrides: A mapping. Keys are matched exactly.
    """

    def __init__(self, overrides: Mapping[str, _t.Any]) -> None:
        self._overrides = overrides

    @property
    def overrides(self) -> Mapping[str, _t.Any]:
        return self._overrides

    def lookup(self, name: str) -> tuple[_t.Any, bool]:
        value = self._overrides.get(name, _MISSING)
        return (None, False) if value is _MISSING else (value, True)


class AttributeOverrides(OverrideSource):
    """Overrides backed by the public attributes of an arbitrary object.

    Attributes are discovered without being evaluated, so that a missing name is never confused with a failing
    property. Methods of the class are never used as override values, but callables stored on the instance are.

    Args:
        overrides: Any object.
    """

    def __init__(self, overrides: object) -> None:
        self._overrides = overrides

    @property
    def overrides(self) -> object:
        return self._overrides

    def lookup(self, name: str) -> tuple[_t.Any, bool]:
        if name.startswith("_"):
            return None, False

        instance_attributes = getattr(self._overrides, "__dict__", {})
        if name in instance_attributes:
            return instance_attributes[name], True

        static = _inspect.getattr_static(self._overrides, name, _MISSING)
        if static is _MISSING or isinstance(static, FunctionType | MethodType | classmethod | staticmethod):
            return None, False

        try:
            return getattr(self._overrides, name), True
        except Exception as e:
            raise FieldReadError(name, self._overrides) from e


def as_override_source(overrides: _t.Any) -> OverrideSource | None:
    """Wrap `overrides` in a suitable :class:`OverrideSource`.

    Args:
        overrides: A mapping, an :class:`OverrideSource`, any other object, or ``None``.

    Returns:
        An ``OverrideSource``, or ``None`` if `overrides` is ``None``.
    """
    if overrides is None or isinstance(overrides, OverrideSource):
        return overrides
    if isinstance(overrides, Mapping):
        return MappingOverrides(overrides)
    return AttributeOverrides(overrides)


def resolve_override(overrides: _t.Any, name: str) -> tuple[_t.Any, bool]:
    """Look up `name` in `overrides`, which may be of any type accepted by :func:`as_override_source`.

    Args:
        overrides: Override values.
        name: A destination field name.

    Returns:
        A tuple ``(value, found)``.

    Raises:
        FieldReadError: If reading an attribute of `overrides` raises.

    Examples:
        >>> from types import SimpleNamespace
        >>> resolve_override({"a": None}, "a")
        (None, True)
        >>> resolve_override(SimpleNamespace(a=1), "b")
        (None, False)
    """
    source = as_override_source(overrides)
    return (None, False) if source is None else source.lookup(name)
