"""Errors raised by the mapping suite."""

from typing import Any as _Any


class ConfigurationError(TypeError):
    """Raised in case of bad configuration."""


class ConverterRegistrationError(TypeError):
    """Raised when a converter cannot be registered, e.g. when the converter is not callable."""


class MappingError(Exception):
    """Base exception class for all mapping-related issues."""

    def __init__(self, msg: str) -> None:
        super().__init__(msg)

        func = "object_mapper.logging.enable_verbose_debug_messages"
        if __debug__:
            from object_mapper.logging import enable_verbose_debug_messages  # noqa: PLC0415

            expected = enable_verbose_debug_messages.__module__ + "." + enable_verbose_debug_messages.__name__
            assert func == expected  # noqa: S101
        self.add_note(f"Hint: Use `{func}` for detailed output.")


class FieldReadError(MappingError):
    """Raised when reading a field from a source or overrides object fails.

    Args:
        field: Name of the field that could not be read.
        owner: The object which was being read.
    """

    def __init__(self, field: str, owner: _Any) -> None:
        super().__init__(f"Failed to read field {field!r} of {type(owner).__name__!r}-type object.")
        self.field = field
        self.owner = owner


class FieldWriteError(MappingError, TypeError):
    """Raised when a value cannot be written to a destination field.

    Args:
        field: Name of the destination field.
        value: The value which was rejected.
        destination_type: Type of the destination.
        reason: Optional explanation.
    """

    def __init__(self, field: str, value: _Any, destination_type: type[_Any], reason: str = "") -> None:
        msg = f"Cannot write {type(value).__name__!r}-type {value=} to field {field!r} of {destination_type.__name__!r}."
        if reason:
            msg += f" {reason}"
        super().__init__(msg)
        self.field = field
        self.value = value
        self.destination_type = destination_type


class ConverterError(MappingError):
    """Raised when a registered converter fails.

    Args:
        field: Name of the destination field being mapped.
        key: The type used to select the converter.
    """

    def __init__(self, field: str, key: type[_Any]) -> None:
        super().__init__(f"Converter for type {key.__name__!r} raised while mapping field {field!r}.")
        self.field = field
        self.key = key


class DestinationCreationError(MappingError, TypeError):
    """Raised when a destination instance cannot be created.

    Args:
        destination_type: The type that could not be instantiated.
    """

    def __init__(self, destination_type: type[_Any]) -> None:
        super().__init__(f"Failed to create a {destination_type.__name__!r}-instance using `{destination_type.__name__}()`.")
        self.add_note(
            "Hint: Destination types must be constructible without arguments. "
            "Pass `destination=<instance>` to map into an existing object instead."
        )
        self.destination_type = destination_type
