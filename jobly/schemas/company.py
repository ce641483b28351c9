"""
Request/response shapes for companies.

The public API speaks camelCase (numEmployees, logoUrl); the aliases below
keep the Python attributes snake_case.
"""
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from jobly.schemas.job import JobResponse

# Request bodies accept the camelCase spelling only
_camel = ConfigDict(alias_generator=to_camel, extra="forbid")


class CompanyCreate(BaseModel):
    model_config = _camel

    handle: str = Field(min_length=1, max_length=25)
    name: str = Field(min_length=1)
    description: str
    num_employees: Optional[int] = Field(default=None, ge=0)
    logo_url: Optional[str] = None


class CompanyUpdate(BaseModel):
    """Partial update; the handle is the identity and cannot change."""
    model_config = _camel

    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(default=None, ge=0)
    logo_url: Optional[str] = None

    @field_validator("name", "description")
    @classmethod
    def not_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} may not be null")
        return v


class CompanyResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyDetail(CompanyResponse):
    jobs: List[JobResponse] = []


class CompanyEnvelope(BaseModel):
    company: CompanyResponse


class CompanyDetailEnvelope(BaseModel):
    company: CompanyDetail


class CompanyListEnvelope(BaseModel):
    companies: List[CompanyResponse]
