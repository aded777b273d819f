import json
import logging
from collections.abc import Iterator

import pytest

from object_mapper import ConverterRegistry
from object_mapper.testing import temporary_converters


class CheckSerializeToJson(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        d = record.__dict__.copy()
        d.pop("exc_info", None)
        json.dumps(d)


logging.root.addHandler(CheckSerializeToJson())


@pytest.fixture(autouse=True)
def registry() -> Iterator[ConverterRegistry]:
    """Give every test an empty default converter registry."""
    with temporary_converters() as registry:
        yield registry
