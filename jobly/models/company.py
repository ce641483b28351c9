from sqlalchemy import CheckConstraint, Column, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from jobly.database import Base

class Company(Base):
    __tablename__ = "companies"
    __table_args__ = (
        CheckConstraint("num_employees >= 0", name="ck_companies_num_employees"),
        UniqueConstraint("name", name="uq_companies_name"),
    )

    handle = Column(String(25), primary_key=True)
    name = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    num_employees = Column(Integer, nullable=True)
    logo_url = Column(Text, nullable=True)

    # Rows are removed by the ON DELETE CASCADE of jobs.company_handle
    jobs = relationship("Job", back_populates="company", passive_deletes=True)

    def __repr__(self):
        return f"<Company {self.handle}>"
