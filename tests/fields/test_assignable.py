from collections.abc import Sequence
from typing import Annotated, Any, Literal, NewType, Protocol, TypeVar

import pytest

from object_mapper.fields import is_assignable
from tests.shapes import Status

T = TypeVar("T")
UserId = NewType("UserId", int)


class HasName(Protocol):
    name: str


@pytest.mark.parametrize(
    "value, declared_type",
    [
        (None, int),
        (1, None),
        (1, Any),
        (1, int),
        (True, int),
        (1, float),
        (1.5, complex),
        ("a", str | None),
        ("a", int | str),
        ([1], list[str]),
        ((1,), Sequence[int]),
        ("a", Annotated[str, "meta"]),
        ("b", Literal["a"]),
        (1, T),
        (1, UserId),
        (1, HasName),
        (Status.ACTIVE, Status),
    ],
)
def test_assignable(value, declared_type):
    assert is_assignable(value, declared_type)


@pytest.mark.parametrize(
    "value, declared_type",
    [
        ("1", int),
        (1.5, int),
        ("1", float),
        ("a", int | None),
        ({1}, list[int]),
        (1, Annotated[str, "meta"]),
        (1, type(None)),
        (1, Status),
    ],
)
def test_not_assignable(value, declared_type):
    assert not is_assignable(value, declared_type)
