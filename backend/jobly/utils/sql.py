import logging
from typing import Any, Mapping, NamedTuple, Sequence

from sqlalchemy.orm import Session

from jobly.exceptions import ErrorKind, JoblyError

logger = logging.getLogger(__name__)


def execute(db: Session, sql: str, params: Sequence[Any] = ()) -> list[dict]:
    """Run a positional-parameter statement on the session's connection and return rows as dicts."""
    logger.debug("SQL %s | params=%r", " ".join(sql.split()), params)
    result = db.connection().exec_driver_sql(sql, tuple(params))
    if not result.returns_rows:
        return []
    return [dict(row) for row in result.mappings().all()]


def like_pattern(text: str) -> str:
    """Substring pattern for ``LIKE ... ESCAPE '\\'`` with ``%`` and ``_`` in ``text`` matched literally."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class PartialUpdate(NamedTuple):
    set_cols: str
    values: list[Any]


def sql_for_partial_update(data_to_update: Mapping[str, Any], js_to_sql: Mapping[str, str]) -> PartialUpdate:
    """Build the SET clause of an UPDATE from the fields being changed.

    Keys of ``data_to_update`` are looked up in ``js_to_sql`` to get the column
    name (falling back to the key itself). Placeholders are SQLite numbered
    parameters, so values bind positionally::

        {"firstName": "Aliya", "age": 32}, {"firstName": "first_name"}
        => PartialUpdate('"first_name"=?1, "age"=?2', ["Aliya", 32])

    The caller appends any further parameters (e.g. the WHERE id) after
    ``values``, starting at index ``len(values) + 1``.
    """
    keys = list(data_to_update)
    if not keys:
        raise JoblyError(ErrorKind.INVALID_INPUT, "No data")

    cols = [f'"{js_to_sql.get(key, key)}"=?{idx}' for idx, key in enumerate(keys, start=1)]
    return PartialUpdate(
        set_cols=", ".join(cols),
        values=[data_to_update[key] for key in keys],
    )


def check_fields(data: Mapping[str, Any], allowed: Mapping[str, str]) -> None:
    unknown = sorted(k for k in data if k not in allowed)
    if unknown:
        raise JoblyError(ErrorKind.INVALID_INPUT, f"Cannot update field(s): {', '.join(unknown)}")
