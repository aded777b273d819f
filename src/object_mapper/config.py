"""Create an :class:`.ObjectMapper` from TOML configuration.

.. code-block:: toml
   :caption: Example configuration.

   [mapper]
   check_types = true

   [converters]
   # Fully qualified type name = fully qualified function name.
   "decimal.Decimal" = "builtins.str"
   "my_app.domain.Status" = "my_app.converters.status_to_code"

Environment variables may be used in values, e.g. ``"${CONVERTER_MODULE}.convert"``. See
:func:`rics.env.interpolation.replace_in_string` for the syntax.
"""

import logging
import tomllib
import typing as _t

from rics.env.interpolation import replace_in_string
from rics.misc import get_by_full_name, tname
from rics.paths import AnyPath, any_path_to_path

from .converters import ConverterRegistry
from .exceptions import ConfigurationError

if _t.TYPE_CHECKING:
    from ._mapper import ObjectMapper

LOGGER = logging.getLogger(__package__).getChild("config")

SECTIONS = ("mapper", "converters")
MAPPER_OPTIONS = ("check_types",)


def load_toml_file(
    path: AnyPath,
    *,
    allow_interpolation: bool = False,
    allow_nested: bool = False,
    allow_blank: bool = False,
) -> dict[str, _t.Any]:
    """Load a TOML file.

    This function reads a TOML file with forced `UTF-8` encoding (as per the standard). It will optionally perform
    environment variable value interpolation as well and replace matching names in the file (in-memory, the file will
    not be changed or read more than once).

    Args:
        path: Path to file.
        allow_interpolation: If ``True``, perform env var value interpolation.
        allow_blank: If ``False``, blank values are considered missing.
        allow_nested: If ``False``, raise an error if variables are defined within the default value of other variables.

    Returns:
        A dict parsed from `path`.
    """
    with any_path_to_path(path).open(encoding="UTF-8") as f:
        toml_string = f.read()

    if allow_interpolation:
        toml_string = replace_in_string(toml_string, allow_nested=allow_nested, allow_blank=allow_blank)

    return tomllib.loads(toml_string)


def make_registry(converters: dict[str, str]) -> ConverterRegistry:
    """Create a registry from ``{type_name: function_name}`` pairs.

    Args:
        converters: Fully qualified names of types and converter functions.

    Returns:
        A new :class:`.ConverterRegistry`.

    Raises:
        ConfigurationError: If a name cannot be resolved, or does not refer to a type and a callable respectively.
    """
    registry = ConverterRegistry()
    for type_name, func_name in converters.items():
        if not isinstance(func_name, str):
            raise ConfigurationError(f"Bad converter for {type_name=}: Expected a function name, got {func_name!r}.")

        try:
            key = get_by_full_name(type_name)
            func = get_by_full_name(func_name)
        except (AttributeError, ImportError, ValueError) as e:
            raise ConfigurationError(f"Cannot resolve converter {type_name!r} = {func_name!r}: {e}") from e

        if not isinstance(key, type):
            raise ConfigurationError(f"Converter key {type_name!r} is not a type: {key!r}.")
        if not callable(func):
            raise ConfigurationError(f"Converter {func_name!r} for type {type_name!r} is not callable.")

        registry.register(key, func)
    return registry


def from_config(path: AnyPath) -> "ObjectMapper[_t.Any, _t.Any]":
    """Create an :class:`.ObjectMapper` from a TOML file.

    The mapper is given its own :class:`.ConverterRegistry`; the default registry is not modified.

    Args:
        path: Path to a TOML file. Environment variables are interpolated.

    Returns:
        A new ``ObjectMapper``.

    Raises:
        ConfigurationError: If the configuration is invalid.
    """
    from ._mapper import ObjectMapper  # noqa: PLC0415

    config = load_toml_file(path, allow_interpolation=True)

    unknown = set(config).difference(SECTIONS)
    if unknown:
        raise ConfigurationError(f"Unknown sections {sorted(unknown)} in '{path}'. Known sections: {SECTIONS}.")

    mapper_config: dict[str, _t.Any] = config.get("mapper", {})
    unknown = set(mapper_config).difference(MAPPER_OPTIONS)
    if unknown:
        raise ConfigurationError(f"Unknown [mapper] options {sorted(unknown)} in '{path}'. Known: {MAPPER_OPTIONS}.")

    registry = make_registry(config.get("converters", {}))
    mapper: ObjectMapper[_t.Any, _t.Any] = ObjectMapper(registry, **mapper_config)

    if LOGGER.isEnabledFor(logging.DEBUG):
        LOGGER.debug(f"Created {mapper} from '{path}' with {len(registry)} converters: {[tname(t) for t in registry]}.")

    return mapper
