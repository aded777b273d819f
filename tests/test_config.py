from decimal import Decimal

import pytest

from object_mapper import ObjectMapper
from object_mapper.config import from_config, load_toml_file, make_registry
from object_mapper.converters import get_default_registry
from object_mapper.exceptions import ConfigurationError
from tests.shapes import Point, PointDTO


@pytest.fixture
def write(tmp_path):
    def write(content: str):
        path = tmp_path / "mapper.toml"
        path.write_text(content, encoding="utf-8")
        return path

    return write


def test_converters(write):
    path = write(
        """
        [converters]
        "decimal.Decimal" = "builtins.str"
        "builtins.float" = "builtins.round"
        """
    )
    mapper = from_config(path)

    assert dict(mapper.registry) == {Decimal: str, float: round}
    assert mapper.check_types is True
    assert len(get_default_registry()) == 0, "default registry not modified"


def test_mapper_options(write):
    mapper = ObjectMapper.from_config(write("[mapper]\ncheck_types = false\n"))

    assert mapper.check_types is False
    assert len(mapper.registry) == 0
    assert mapper.registry is not get_default_registry()


def test_mapping_with_configured_converter(write):
    mapper = from_config(write('[converters]\n"builtins.float" = "builtins.abs"\n'))
    assert mapper.map_object(Point(-1.0, -2.0), PointDTO) == PointDTO(1.0, 2.0)


def test_empty_file(write):
    mapper = from_config(write(""))
    assert mapper.check_types is True
    assert len(mapper.registry) == 0


def test_interpolation(write, monkeypatch):
    monkeypatch.setenv("CONVERTER_MODULE", "builtins")
    mapper = from_config(write('[converters]\n"builtins.float" = "${CONVERTER_MODULE}.abs"\n'))
    assert mapper.registry[float] is abs


def test_load_toml_file_without_interpolation(write):
    path = write('key = "${NOT_INTERPOLATED}"\n')
    assert load_toml_file(path) == {"key": "${NOT_INTERPOLATED}"}


@pytest.mark.parametrize(
    "content, match",
    [
        ("[unknown]\n", "Unknown sections"),
        ("[mapper]\nignore_source_nulls = false\n", "Unknown \\[mapper\\] options"),
        ('[converters]\n"no_such_module.Type" = "builtins.str"\n', "Cannot resolve"),
        ('[converters]\n"decimal.NoSuchType" = "builtins.str"\n', "Cannot resolve"),
        ('[converters]\n"decimal.Decimal" = "math.pi"\n', "not callable"),
        ('[converters]\n"math.floor" = "builtins.str"\n', "not a type"),
        ('[converters]\n"decimal.Decimal" = 1\n', "Expected a function name"),
    ],
)
def test_bad_config(write, content, match):
    with pytest.raises(ConfigurationError, match=match):
        from_config(write(content))


def test_make_registry():
    registry = make_registry({"decimal.Decimal": "builtins.float"})
    assert registry[Decimal] is float
