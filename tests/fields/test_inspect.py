from typing import Annotated, Any, Optional

import pytest

from object_mapper.fields import FieldInfo, inspect_fields, unwrap_optional
from tests.shapes import Account, Signup, Slotted, Status, User, UserRecord


def test_dataclass():
    fields = inspect_fields(User)
    assert list(fields) == ["id", "name", "email", "status", "password"]
    assert fields["id"] == FieldInfo("id", int, readable=True, writable=True)
    assert fields["status"].declared_type == Status | None
    assert fields["status"].declared_class is Status


def test_properties_and_classvars():
    fields = inspect_fields(Account)
    assert list(fields) == ["owner", "balance", "summary"]
    assert "currency" not in fields, "ClassVar is not an instance member"
    assert fields["balance"] == FieldInfo("balance", int, readable=True, writable=True)
    assert fields["summary"] == FieldInfo("summary", str, readable=True, writable=False)


def test_named_tuple_is_read_only():
    fields = inspect_fields(UserRecord)
    assert list(fields) == ["id", "name", "email"]
    assert all(info.readable and not info.writable for info in fields.values())
    assert fields["id"].declared_type is int


def test_slots():
    fields = inspect_fields(Slotted)
    assert sorted(fields) == ["email", "name"]
    assert fields["name"].declared_type is None


def test_private_members_are_skipped():
    class Shape:
        _hidden: int = 0
        visible: int = 0

        @property
        def _also_hidden(self) -> int:
            return 1

    assert list(inspect_fields(Shape)) == ["visible"]


def test_inherited_annotations():
    class Base:
        a: int = 0

    class Child(Base):
        b: str = ""

    assert list(inspect_fields(Child)) == ["a", "b"]


def test_unresolvable_forward_reference():
    class Shape:
        known: int = 0
        unknown: "DoesNotExist" = None  # type: ignore[name-defined]  # noqa: F821

    fields = inspect_fields(Shape)
    assert list(fields) == ["known", "unknown"]
    assert fields["known"].declared_type is int
    assert fields["unknown"].declared_type is None


def test_is_immutable():
    fields = inspect_fields(User)
    with pytest.raises(TypeError):
        fields["id"] = FieldInfo("id")  # type: ignore[index]


def test_cached():
    assert inspect_fields(User) is inspect_fields(User)


def test_not_a_type():
    with pytest.raises(TypeError, match="Expected a type"):
        inspect_fields(User())  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "declared_type, expected",
    [
        (int, int),
        (Optional[int], int),  # noqa: UP045
        (int | None, int),
        (Annotated[int | None, "meta"], int),
        (int | str, None),
        (int | str | None, None),
        (list[int], None),
        (Any, None),
        (None, None),
    ],
)
def test_unwrap_optional(declared_type, expected):
    assert unwrap_optional(declared_type) is expected


def test_dataclass_pseudo_fields():
    assert list(inspect_fields(Signup)) == ["name", "password_hash"]


@pytest.mark.parametrize("not_a_type", [User(), [User], {"a": 1}])
def test_not_a_type_is_checked_before_caching(not_a_type):
    with pytest.raises(TypeError, match="Expected a type"):
        inspect_fields(not_a_type)
