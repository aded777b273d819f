"""Integration for `Pandas <https://pandas.pydata.org/>`_ types.

Each row of a ``DataFrame`` is treated as a source object whose fields are the columns of the frame. Columns names
which aren't valid Python identifiers (or start with an underscore) cannot be matched to destination fields.
"""

import logging as _l
import typing as _t
from collections import namedtuple as _namedtuple
from functools import lru_cache as _lru_cache
from time import perf_counter as _perf_counter

import numpy as _np
import pandas as _pd
from rics.misc import tname as _tname
from rics.strings import format_perf_counter as _fmt_perf

from object_mapper import logging as _logging
from object_mapper import settings as _settings
from object_mapper._mapper import ObjectMapper as _ObjectMapper
from object_mapper.types import DestinationT as _DestinationT
from object_mapper.types import IgnoreFields as _IgnoreFields
from object_mapper.types import OverridesProducer as _OverridesProducer

LOGGER = _l.getLogger(__package__).getChild("pandas")


def map_frame(
    df: _pd.DataFrame,
    destination_type: type[_DestinationT],
    overrides_producer: _OverridesProducer[tuple[_t.Any, ...]] | None = None,
    ignore_fields: _IgnoreFields = None,
    ignore_source_nulls: bool = True,
    *,
    mapper: _ObjectMapper[_t.Any, _t.Any] | None = None,
    task_id: int | None = None,
) -> list[_DestinationT]:
    """Map the rows of a ``DataFrame`` to `destination_type` instances.

    Missing values (e.g. ``NaN``, ``NaT`` and ``pd.NA``) are converted to ``None`` and are therefore skipped if
    `ignore_source_nulls` is set. Values are converted to Python objects before they are mapped.

    Args:
        df: A ``DataFrame``. The index is ignored.
        destination_type: Type to map to.
        overrides_producer: A callable ``(row) -> overrides``, called once per row. Rows are named tuples.
        ignore_fields: Destination fields to leave untouched.
        ignore_source_nulls: If ``True``, missing values are not copied.
        mapper: Mapper to use. Uses the default converter registry if ``None``.
        task_id: Used for logging.

    Returns:
        One `destination_type` instance per row, in the same order as `df`.

    Raises:
        TypeError: If `df` is not a ``DataFrame``.
    """
    if not isinstance(df, _pd.DataFrame):
        raise TypeError(f"Expected a DataFrame, but got type={_tname(df)!r}.")

    start = _perf_counter()
    if task_id is None:
        task_id = _logging.generate_task_id(start)

    levels = _settings.logging.MAP_FRAME
    if LOGGER.isEnabledFor(levels.enter):
        LOGGER.log(
            levels.enter,
            f"Begin mapping of {len(df)}x{len(df.columns)} DataFrame to '{_tname(destination_type)}'.",
            extra=dict(task_id=task_id, event_key="pandas.map_frame:enter", num_rows=len(df)),
        )

    row_type = make_row_type(tuple(map(str, df.columns)))
    rows = [row_type(*map(_to_python, row)) for row in df.itertuples(index=False, name=None)]

    if mapper is None:
        mapper = _ObjectMapper()

    rv = mapper.map_objects(
        rows,
        destination_type,
        overrides_producer,
        ignore_fields,
        ignore_source_nulls,
        source_type=row_type,
        task_id=task_id,
    )
    assert rv is not None  # noqa: S101

    if LOGGER.isEnabledFor(levels.exit):
        LOGGER.log(
            levels.exit,
            f"Finished mapping of {len(rv)} rows to '{_tname(destination_type)}' in {_fmt_perf(start)}.",
            extra=dict(task_id=task_id, event_key="pandas.map_frame:exit", num_rows=len(rv)),
        )

    return _t.cast(list[_DestinationT], rv)


@_lru_cache(maxsize=64)
def make_row_type(columns: tuple[str, ...]) -> type[tuple[_t.Any, ...]]:
    """Create a named tuple type for rows with the given `columns`.

    Invalid identifiers are renamed to positional names (e.g. ``'_1'``), which are never matched.
    """
    return _namedtuple("Row", columns, rename=True)  # type: ignore[return-value]


def _to_python(value: _t.Any) -> _t.Any:
    if isinstance(value, _np.generic):
        value = value.item()
    if value is None or (_pd.api.types.is_scalar(value) and _pd.isna(value)):
        return None
    return value
