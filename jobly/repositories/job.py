"""
Jobs Repository.

Responsibilities:
- CRUD operations for the jobs table.
- Filtered listing through the shared WHERE-clause builder.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.core.sql import PredicateRule, build_filter_clause, build_set_clause, contains
from jobly.database import constraint_violation, execute

logger = logging.getLogger(__name__)

JOB_COLUMNS = "id, title, salary, equity, company_handle"

JOB_FIELD_MAP = {
    "title": "title",
    "salary": "salary",
    "equity": "equity",
}

JOB_FILTER_RULES = {
    "title": PredicateRule("LOWER(title) LIKE {}", contains),
    "minSalary": PredicateRule("salary >= {}"),
    "hasEquity": PredicateRule("equity > 0"),
}
JOB_FILTER_KEYS = frozenset(JOB_FILTER_RULES)


def _rejected(exc: IntegrityError, company_handle: Optional[str] = None) -> BadRequestError:
    violation = constraint_violation(exc)
    logger.warning(f"Rejected job write: {exc.orig}")
    if violation.kind == "foreign_key":
        return BadRequestError(f"Company doesn't exist: {company_handle}")
    return BadRequestError(f"Invalid job data: {violation.constraint or violation.kind}")


class JobRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a job from {title, salary?, equity?, company_handle}.

        The company must exist; the foreign key decides, so there is no
        window between checking for the company and inserting the job.
        Raises BadRequestError for a missing company or out-of-range values.
        """
        company_handle = data["company_handle"]
        try:
            with self.db.begin_nested():
                row = execute(
                    self.db,
                    f"""INSERT INTO jobs
                        (title, salary, equity, company_handle)
                        VALUES ($1, $2, $3, $4)
                        RETURNING {JOB_COLUMNS}""",
                    [
                        data["title"],
                        data.get("salary"),
                        data.get("equity"),
                        company_handle,
                    ],
                ).mappings().one()
        except IntegrityError as e:
            raise _rejected(e, company_handle)

        self.db.commit()
        logger.info(f"Created job {row['id']} for {company_handle}")
        return dict(row)

    def find_all(self, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        List jobs ordered by title.

        filters may hold title (case-insensitive substring), minSalary and
        hasEquity; any other key raises BadRequestError.
        """
        where = build_filter_clause(filters or {}, JOB_FILTER_KEYS, JOB_FILTER_RULES)
        rows = execute(
            self.db,
            f"""SELECT {JOB_COLUMNS}
                FROM jobs
                {where.clause}
                ORDER BY title""",
            where.values,
        ).mappings().all()
        return [dict(row) for row in rows]

    def get(self, job_id: int) -> Dict[str, Any]:
        row = execute(
            self.db,
            f"""SELECT {JOB_COLUMNS}
                FROM jobs
                WHERE id = $1""",
            [job_id],
        ).mappings().first()
        if row is None:
            raise NotFoundError(f"No job: {job_id}")
        return dict(row)

    def update(self, job_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partial update of {title, salary, equity}.

        Raises BadRequestError for empty data or out-of-range values,
        NotFoundError for an unknown id.
        """
        set_clause = build_set_clause(data, JOB_FIELD_MAP)
        try:
            with self.db.begin_nested():
                row = execute(
                    self.db,
                    f"""UPDATE jobs
                        SET {set_clause.clause}
                        WHERE id = ${set_clause.next_index}
                        RETURNING {JOB_COLUMNS}""",
                    [*set_clause.values, job_id],
                ).mappings().first()
        except IntegrityError as e:
            raise _rejected(e)

        if row is None:
            raise NotFoundError(f"No job: {job_id}")

        self.db.commit()
        logger.info(f"Updated job {job_id}: {', '.join(data)}")
        return dict(row)

    def remove(self, job_id: int) -> None:
        row = execute(
            self.db,
            """DELETE
               FROM jobs
               WHERE id = $1
               RETURNING id""",
            [job_id],
        ).first()
        if row is None:
            raise NotFoundError(f"No job: {job_id}")

        self.db.commit()
        logger.info(f"Removed job {job_id}")
