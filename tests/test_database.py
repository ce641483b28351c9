from sqlalchemy.exc import IntegrityError

from jobly.database import constraint_violation, execute


def _integrity_error(orig):
    return IntegrityError("INSERT ...", {}, orig)

def test_execute_binds_dollar_placeholders(db_session, companies):
    row = execute(
        db_session,
        "SELECT handle FROM companies WHERE num_employees >= $1 AND num_employees <= $2",
        [2, 2],
    ).one()
    assert row.handle == "c2"

def test_sqlite_check_violation():
    exc = _integrity_error(Exception("CHECK constraint failed: ck_jobs_equity"))
    assert constraint_violation(exc) == ("check", "ck_jobs_equity")

def test_sqlite_unique_violation_names_the_column():
    exc = _integrity_error(Exception("UNIQUE constraint failed: companies.name"))
    assert constraint_violation(exc) == ("unique", "companies.name")

def test_sqlite_foreign_key_violation():
    exc = _integrity_error(Exception("FOREIGN KEY constraint failed"))
    assert constraint_violation(exc).kind == "foreign_key"

def test_postgres_violation_uses_sqlstate():
    class Diag:
        constraint_name = "jobs_company_handle_fkey"

    class PgError(Exception):
        pgcode = "23503"
        diag = Diag()

    exc = _integrity_error(PgError("insert or update on table \"jobs\" violates foreign key"))
    assert constraint_violation(exc) == ("foreign_key", "jobs_company_handle_fkey")

def test_unrecognised_violation():
    exc = _integrity_error(Exception("something else"))
    assert constraint_violation(exc) == ("unknown", "something else")
