import sys
import os
import logging

# Ensure we can import jobly modules
sys.path.append(os.getcwd())

from jobly.core.exceptions import BadRequestError
from jobly.database import SessionLocal, init_db
from jobly.repositories.user import UserRepository

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)

def create_admin_user():
    username = os.getenv("ADMIN_USERNAME", "admin")
    password = os.getenv("ADMIN_PASSWORD")
    if not password:
        logger.error("Set ADMIN_PASSWORD to create the admin user.")
        sys.exit(1)

    init_db()
    db = SessionLocal()
    try:
        UserRepository(db).register(
            {
                "username": username,
                "password": password,
                "firstName": "Site",
                "lastName": "Admin",
                "email": os.getenv("ADMIN_EMAIL", "admin@example.com"),
            },
            is_admin=True,
        )
        logger.info(f"Admin user '{username}' created successfully.")
    except BadRequestError:
        logger.warning(f"Admin user '{username}' already exists.")
    finally:
        db.close()

if __name__ == "__main__":
    create_admin_user()
