from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class JobBase(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1)
    salary: Optional[int] = Field(default=None, ge=0)
    equity: Optional[float] = Field(default=None, ge=0, le=1)


class JobCreate(JobBase):
    company_handle: str = Field(min_length=1, max_length=25)


class JobUpdate(BaseModel):
    """Partial update; the id and the owning company never change."""
    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = Field(default=None, min_length=1)
    salary: Optional[int] = Field(default=None, ge=0)
    equity: Optional[float] = Field(default=None, ge=0, le=1)

    @field_validator("title")
    @classmethod
    def title_not_null(cls, v):
        if v is None:
            raise ValueError("title may not be null")
        return v


class JobResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[float] = None
    company_handle: str


class JobEnvelope(BaseModel):
    job: JobResponse


class JobListEnvelope(BaseModel):
    jobs: List[JobResponse]
