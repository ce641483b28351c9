"""
Companies Repository.

Responsibilities:
- CRUD operations for the companies table.
- Filtered listing through the shared WHERE-clause builder.

Rows are returned as plain dicts keyed by the public (camelCase) field names.
"""
import logging
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.exceptions import BadRequestError, NotFoundError
from jobly.core.sql import PredicateRule, build_filter_clause, build_set_clause, contains
from jobly.database import constraint_violation, execute

logger = logging.getLogger(__name__)

COMPANY_COLUMNS = (
    "handle, name, description, "
    "num_employees AS \"numEmployees\", logo_url AS \"logoUrl\""
)

# Public field name -> column; unlisted fields share the column's name
COMPANY_FIELD_MAP = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

COMPANY_FILTER_RULES = {
    "name": PredicateRule("LOWER(name) LIKE {}", contains),
    "minEmployees": PredicateRule("num_employees >= {}"),
    "maxEmployees": PredicateRule("num_employees <= {}"),
}
COMPANY_FILTER_KEYS = frozenset(COMPANY_FILTER_RULES)

# How the unique name constraint is reported (PostgreSQL, SQLite)
_NAME_CONSTRAINTS = {"uq_companies_name", "companies.name"}


def _rejected(exc: IntegrityError, handle: str, name: Optional[str]) -> BadRequestError:
    violation = constraint_violation(exc)
    logger.warning(f"Rejected write to company {handle}: {exc.orig}")
    if violation.kind == "unique" and violation.constraint in _NAME_CONSTRAINTS:
        return BadRequestError(f"Duplicate company name: {name}")
    if violation.kind == "unique":
        return BadRequestError(f"Duplicate company: {handle}")
    return BadRequestError(f"Invalid company data: {violation.constraint or violation.kind}")


class CompanyRepository:
    def __init__(self, db: Session):
        self.db = db

    def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Create a company from {handle, name, description, numEmployees, logoUrl}.

        Raises BadRequestError if the handle or the name is already taken.
        """
        handle = data["handle"]
        try:
            with self.db.begin_nested():
                row = execute(
                    self.db,
                    f"""INSERT INTO companies
                        (handle, name, description, num_employees, logo_url)
                        VALUES ($1, $2, $3, $4, $5)
                        RETURNING {COMPANY_COLUMNS}""",
                    [
                        handle,
                        data["name"],
                        data["description"],
                        data.get("numEmployees"),
                        data.get("logoUrl"),
                    ],
                ).mappings().one()
        except IntegrityError as e:
            raise _rejected(e, handle, data["name"])

        self.db.commit()
        logger.info(f"Created company {handle}")
        return dict(row)

    def find_all(self, filters: Optional[Mapping[str, Any]] = None) -> List[Dict[str, Any]]:
        """
        List companies ordered by name.

        filters may hold name (case-insensitive substring), minEmployees and
        maxEmployees; any other key raises BadRequestError.
        """
        where = build_filter_clause(filters or {}, COMPANY_FILTER_KEYS, COMPANY_FILTER_RULES)
        rows = execute(
            self.db,
            f"""SELECT {COMPANY_COLUMNS}
                FROM companies
                {where.clause}
                ORDER BY name""",
            where.values,
        ).mappings().all()
        return [dict(row) for row in rows]

    def get(self, handle: str) -> Dict[str, Any]:
        """Company with its jobs. Raises NotFoundError."""
        row = execute(
            self.db,
            f"""SELECT {COMPANY_COLUMNS}
                FROM companies
                WHERE handle = $1""",
            [handle],
        ).mappings().first()
        if row is None:
            raise NotFoundError(f"No company: {handle}")

        jobs = execute(
            self.db,
            """SELECT id, title, salary, equity, company_handle
               FROM jobs
               WHERE company_handle = $1
               ORDER BY id""",
            [handle],
        ).mappings().all()

        company = dict(row)
        company["jobs"] = [dict(job) for job in jobs]
        return company

    def update(self, handle: str, data: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Partial update: only the fields present in data change.

        data can include {name, description, numEmployees, logoUrl}.
        Raises BadRequestError for empty data, NotFoundError for an unknown handle.
        """
        set_clause = build_set_clause(data, COMPANY_FIELD_MAP)
        try:
            with self.db.begin_nested():
                row = execute(
                    self.db,
                    f"""UPDATE companies
                        SET {set_clause.clause}
                        WHERE handle = ${set_clause.next_index}
                        RETURNING {COMPANY_COLUMNS}""",
                    [*set_clause.values, handle],
                ).mappings().first()
        except IntegrityError as e:
            raise _rejected(e, handle, data.get("name"))

        if row is None:
            raise NotFoundError(f"No company: {handle}")

        self.db.commit()
        logger.info(f"Updated company {handle}: {', '.join(data)}")
        return dict(row)

    def remove(self, handle: str) -> None:
        """Delete a company and, by cascade, its jobs. Raises NotFoundError."""
        row = execute(
            self.db,
            """DELETE
               FROM companies
               WHERE handle = $1
               RETURNING handle""",
            [handle],
        ).first()
        if row is None:
            raise NotFoundError(f"No company: {handle}")

        self.db.commit()
        logger.info(f"Removed company {handle}")
