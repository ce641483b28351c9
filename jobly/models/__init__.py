# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import company, job, user

# Explicit class exports for cleaner imports
from .company import Company
from .job import Job
from .user import User

__all__ = [
    "Company",
    "Job",
    "User",
]
