import logging
from typing import Any, Dict, Mapping

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from jobly.database import execute
from jobly.services import auth as auth_service

logger = logging.getLogger(__name__)

USER_COLUMNS = (
    "username, "
    "first_name AS \"firstName\", last_name AS \"lastName\", "
    "email, is_admin AS \"isAdmin\""
)


class UserRepository:
    def __init__(self, db: Session):
        self.db = db

    def authenticate(self, username: str, password: str) -> Dict[str, Any]:
        """Return the user if the password matches. Raises UnauthorizedError."""
        row = execute(
            self.db,
            f"""SELECT {USER_COLUMNS}, password
                FROM users
                WHERE username = $1""",
            [username],
        ).mappings().first()

        if row is None or not auth_service.verify_password(password, row["password"]):
            logger.warning(f"Failed login for {username}")
            raise UnauthorizedError("Invalid username/password")

        user = dict(row)
        del user["password"]
        return user

    def register(self, data: Mapping[str, Any], is_admin: bool = False) -> Dict[str, Any]:
        """
        Store a new user with a hashed password.

        Raises BadRequestError on a duplicate username.
        """
        username = data["username"]
        try:
            with self.db.begin_nested():
                row = execute(
                    self.db,
                    f"""INSERT INTO users
                        (username, password, first_name, last_name, email, is_admin)
                        VALUES ($1, $2, $3, $4, $5, $6)
                        RETURNING {USER_COLUMNS}""",
                    [
                        username,
                        auth_service.get_password_hash(data["password"]),
                        data["firstName"],
                        data["lastName"],
                        data["email"],
                        is_admin,
                    ],
                ).mappings().one()
        except IntegrityError:
            raise BadRequestError(f"Duplicate username: {username}")

        self.db.commit()
        logger.info(f"Registered user {username}{' (admin)' if is_admin else ''}")
        return dict(row)

    def get(self, username: str) -> Dict[str, Any]:
        row = execute(
            self.db,
            f"""SELECT {USER_COLUMNS}
                FROM users
                WHERE username = $1""",
            [username],
        ).mappings().first()
        if row is None:
            raise NotFoundError(f"No user: {username}")
        return dict(row)
