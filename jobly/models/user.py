"""
User accounts. Only admins may change companies and jobs.
"""
from sqlalchemy import Boolean, Column, String, Text
from jobly.database import Base


class User(Base):
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)
    password = Column(Text, nullable=False)  # bcrypt hash
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)

    def __repr__(self):
        return f"<User {self.username}{' (admin)' if self.is_admin else ''}>"
