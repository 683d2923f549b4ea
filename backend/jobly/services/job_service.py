import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.exceptions import ErrorKind, JoblyError
from jobly.utils.sql import check_fields, execute, like_pattern, sql_for_partial_update

logger = logging.getLogger(__name__)

# External field name -> column name for every field a job update may touch.
JOB_UPDATE_FIELDS = {
    "title": "title",
    "salary": "salary",
    "equity": "equity",
    "companyHandle": "company_handle",
}

_JOB_COLUMNS = "id, title, salary, equity, company_handle"


def create(db: Session, title: str, salary: int | None, equity: str | None, company_handle: str) -> dict:
    duplicate = execute(db, "SELECT title FROM jobs WHERE title = ?1", [title])
    if duplicate:
        raise JoblyError(ErrorKind.DUPLICATE_ENTRY, f"Duplicate job: {title}")

    try:
        rows = execute(
            db,
            f"""
            INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES (?1, ?2, ?3, ?4)
            RETURNING {_JOB_COLUMNS}
            """,
            [title, salary, equity, company_handle],
        )
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        err = _classify_integrity_error(exc, title, company_handle)
        if err is None:
            raise
        raise err from exc

    job = rows[0]
    logger.info("Created job %s (%r) for company %s", job["id"], title, company_handle)
    return job


def find_all(
    db: Session,
    title: str | None = None,
    min_salary: int | None = None,
    has_equity: bool | None = None,
) -> list[dict]:
    """List jobs, optionally narrowed by filters.

    - title: case-insensitive substring match (empty means no constraint)
    - min_salary: salary >= min_salary
    - has_equity: when True, only jobs with equity > 0

    Rows carry the joined company name as ``company_name`` and are ordered by title.
    """
    query = """
        SELECT j.id,
               j.title,
               j.salary,
               j.equity,
               j.company_handle,
               c.name AS company_name
        FROM jobs j
        LEFT JOIN companies c ON c.handle = j.company_handle
    """
    values: list = []
    where: list[str] = []

    if title:
        values.append(like_pattern(title))
        where.append(f"lower(j.title) LIKE lower(?{len(values)}) ESCAPE '\\'")
    if min_salary is not None:
        values.append(min_salary)
        where.append(f"j.salary >= ?{len(values)}")
    if has_equity is True:
        where.append("CAST(j.equity AS REAL) > 0")

    if where:
        query += " WHERE " + " AND ".join(where)
    query += " ORDER BY j.title"

    return execute(db, query, values)


def get(db: Session, job_id: int) -> dict:
    rows = execute(db, f"SELECT {_JOB_COLUMNS} FROM jobs WHERE id = ?1", [job_id])
    if not rows:
        raise JoblyError(ErrorKind.NOT_FOUND, f"No job: {job_id}")
    job = rows[0]

    companies = execute(
        db,
        """
        SELECT handle, name, description, num_employees, logo_url
        FROM companies
        WHERE handle = ?1
        """,
        [job["company_handle"]],
    )
    if companies:
        job["company"] = companies[0]
    return job


def update(db: Session, job_id: int, data: dict) -> dict:
    """Partially update a job; only the fields present in ``data`` change.

    ``data`` uses external field names (see ``JOB_UPDATE_FIELDS``).
    """
    check_fields(data, JOB_UPDATE_FIELDS)
    set_cols, values = sql_for_partial_update(data, JOB_UPDATE_FIELDS)
    id_idx = len(values) + 1

    try:
        rows = execute(
            db,
            f"""
            UPDATE jobs
            SET {set_cols}
            WHERE id = ?{id_idx}
            RETURNING {_JOB_COLUMNS}
            """,
            [*values, job_id],
        )
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        err = _classify_integrity_error(exc, data.get("title"), data.get("companyHandle"))
        if err is None:
            raise
        raise err from exc

    if not rows:
        raise JoblyError(ErrorKind.NOT_FOUND, f"No job: {job_id}")
    logger.info("Updated job %s: %s", job_id, ", ".join(data))
    return rows[0]


def remove(db: Session, job_id: int) -> None:
    rows = execute(db, "DELETE FROM jobs WHERE id = ?1 RETURNING id", [job_id])
    db.commit()
    if not rows:
        raise JoblyError(ErrorKind.NOT_FOUND, f"No job: {job_id}")
    logger.info("Deleted job %s", job_id)


def _classify_integrity_error(exc: IntegrityError, title: str | None, company_handle: str | None) -> JoblyError | None:
    detail = str(exc.orig)
    if "UNIQUE" in detail and "jobs.title" in detail:
        return JoblyError(ErrorKind.DUPLICATE_ENTRY, f"Duplicate job: {title}")
    if "FOREIGN KEY" in detail:
        return JoblyError(ErrorKind.INVALID_INPUT, f"No company: {company_handle}")
    return None
