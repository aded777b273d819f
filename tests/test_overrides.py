from types import MappingProxyType, SimpleNamespace

import pytest

from object_mapper.exceptions import FieldReadError
from object_mapper.overrides import (
    AttributeOverrides,
    MappingOverrides,
    OverrideSource,
    as_override_source,
    resolve_override,
)
from tests.shapes import Broken, User


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "Bob", "email": None},
        MappingProxyType({"name": "Bob", "email": None}),
        SimpleNamespace(name="Bob", email=None),
        User(name="Bob", email=None),
    ],
)
def test_both_representations(overrides):
    assert resolve_override(overrides, "name") == ("Bob", True)
    assert resolve_override(overrides, "email") == (None, True), "explicit None is found"
    assert resolve_override(overrides, "display_name") == (None, False)


def test_no_overrides():
    assert as_override_source(None) is None
    assert resolve_override(None, "name") == (None, False)


def test_dispatch():
    assert isinstance(as_override_source({}), MappingOverrides)
    assert isinstance(as_override_source(SimpleNamespace()), AttributeOverrides)

    source = MappingOverrides({"a": 1})
    assert as_override_source(source) is source


def test_exact_name_only():
    assert resolve_override({"Name": "Bob"}, "name") == (None, False)
    assert resolve_override(SimpleNamespace(Name="Bob"), "name") == (None, False)


def test_methods_and_private_attributes_are_not_overrides():
    class Overrides:
        _secret = "hidden"

        def name(self) -> str:
            return "method"

        @classmethod
        def email(cls) -> str:
            return "classmethod"

    assert resolve_override(Overrides(), "name") == (None, False)
    assert resolve_override(Overrides(), "email") == (None, False)
    assert resolve_override(Overrides(), "_secret") == (None, False)


def test_properties_are_evaluated():
    assert resolve_override(Broken(), "id") == (1, True)

    with pytest.raises(FieldReadError, match="'name'") as exc_info:
        resolve_override(Broken(), "name")
    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_custom_source():
    class Upper(OverrideSource):
        @property
        def overrides(self) -> None:
            return None

        def lookup(self, name):
            return name.upper(), True

    assert resolve_override(Upper(), "name") == ("NAME", True)
    assert repr(Upper()) == "Upper(None)"


def _callback() -> str:
    return "called"


@pytest.mark.parametrize("overrides", [{"callback": _callback}, SimpleNamespace(callback=_callback)])
def test_callable_values(overrides):
    assert resolve_override(overrides, "callback") == (_callback, True)
