"""Copy matching public fields between objects, with overrides and per-type converters.

For an introduction, see :class:`ObjectMapper`.

Environment variables
---------------------
.. envvar:: OBJECT_MAPPER_VERBOSE

   Global switch. Set to ``true`` to overwrite the default :data:`~.logging.ENABLE_VERBOSE_LOGGING` value. Note that
   this variable is only read once (on module import).
"""

import logging as _logging

from ._default import map_object, map_objects
from ._mapper import ObjectMapper
from .converters import ConverterRegistry, register_converter

__all__ = [
    "ConverterRegistry",
    "ObjectMapper",
    "__version__",  # Make MyPy happy
    "map_object",
    "map_objects",
    "register_converter",
]

__version__ = "0.4.0"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
del _logging
