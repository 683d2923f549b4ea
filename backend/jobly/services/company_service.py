import logging

from sqlalchemy.orm import Session

from jobly.exceptions import ErrorKind, JoblyError
from jobly.utils.sql import execute, like_pattern

logger = logging.getLogger(__name__)

_COMPANY_COLUMNS = "handle, name, description, num_employees, logo_url"


def create(
    db: Session,
    handle: str,
    name: str,
    description: str,
    num_employees: int | None = None,
    logo_url: str | None = None,
) -> dict:
    duplicates = execute(db, "SELECT handle FROM companies WHERE handle = ?1 OR name = ?2", [handle, name])
    if any(row["handle"] == handle for row in duplicates):
        raise JoblyError(ErrorKind.DUPLICATE_ENTRY, f"Duplicate company: {handle}")
    if duplicates:
        raise JoblyError(ErrorKind.DUPLICATE_ENTRY, f"Duplicate company name: {name}")

    rows = execute(
        db,
        f"""
        INSERT INTO companies (handle, name, description, num_employees, logo_url)
        VALUES (?1, ?2, ?3, ?4, ?5)
        RETURNING {_COMPANY_COLUMNS}
        """,
        [handle, name, description, num_employees, logo_url],
    )
    db.commit()
    logger.info("Created company %s", handle)
    return rows[0]


def find_all(
    db: Session,
    name: str | None = None,
    min_employees: int | None = None,
    max_employees: int | None = None,
) -> list[dict]:
    if min_employees is not None and max_employees is not None and min_employees > max_employees:
        raise JoblyError(ErrorKind.INVALID_INPUT, "minEmployees cannot be greater than maxEmployees")

    query = f"SELECT {_COMPANY_COLUMNS} FROM companies"
    values: list = []
    where: list[str] = []

    if name:
        values.append(like_pattern(name))
        where.append(f"lower(name) LIKE lower(?{len(values)}) ESCAPE '\\'")
    if min_employees is not None:
        values.append(min_employees)
        where.append(f"num_employees >= ?{len(values)}")
    if max_employees is not None:
        values.append(max_employees)
        where.append(f"num_employees <= ?{len(values)}")

    if where:
        query += " WHERE " + " AND ".join(where)
    query += " ORDER BY name"

    return execute(db, query, values)


def get(db: Session, handle: str) -> dict:
    rows = execute(db, f"SELECT {_COMPANY_COLUMNS} FROM companies WHERE handle = ?1", [handle])
    if not rows:
        raise JoblyError(ErrorKind.NOT_FOUND, f"No company: {handle}")
    company = rows[0]

    company["jobs"] = execute(
        db,
        """
        SELECT id, title, salary, equity
        FROM jobs
        WHERE company_handle = ?1
        ORDER BY id
        """,
        [handle],
    )
    return company
