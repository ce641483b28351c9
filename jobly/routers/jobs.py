from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from jobly.core.sql import check_filter_keys
from jobly.database import get_db
from jobly.repositories.job import JOB_FILTER_KEYS, JobRepository
from jobly.routers.auth_deps import require_admin
from jobly.schemas.job import JobCreate, JobEnvelope, JobListEnvelope, JobUpdate

router = APIRouter(
    prefix="/jobs",
    tags=["Jobs"],
)


def check_job_filter_keys(request: Request) -> None:
    check_filter_keys(request.query_params, JOB_FILTER_KEYS)


def get_job_filters(
    _: None = Depends(check_job_filter_keys),
    title: Optional[str] = Query(None, description="Case-insensitive substring of the title"),
    min_salary: Optional[int] = Query(None, alias="minSalary", ge=0),
    has_equity: Optional[bool] = Query(None, alias="hasEquity"),
) -> Dict[str, Any]:
    filters = {"title": title, "minSalary": min_salary, "hasEquity": has_equity}
    return {key: value for key, value in filters.items() if value is not None}


@router.post("", response_model=JobEnvelope, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
def create_job(job_in: JobCreate, db: Session = Depends(get_db)):
    """
    Create a job posting for an existing company. Admin only.
    """
    return {"job": JobRepository(db).create(job_in.model_dump())}


@router.get("", response_model=JobListEnvelope)
def list_jobs(
    filters: Dict[str, Any] = Depends(get_job_filters),
    db: Session = Depends(get_db),
):
    """
    List jobs, optionally filtered by title, minSalary, hasEquity.
    """
    return {"jobs": JobRepository(db).find_all(filters)}


@router.get("/{job_id}", response_model=JobEnvelope)
def get_job(job_id: int, db: Session = Depends(get_db)):
    return {"job": JobRepository(db).get(job_id)}


@router.patch("/{job_id}", response_model=JobEnvelope, dependencies=[Depends(require_admin)])
def update_job(job_id: int, job_in: JobUpdate, db: Session = Depends(get_db)):
    """
    Partial update of title, salary, equity. Admin only.
    """
    data = job_in.model_dump(exclude_unset=True)
    return {"job": JobRepository(db).update(job_id, data)}


@router.delete("/{job_id}", dependencies=[Depends(require_admin)])
def delete_job(job_id: int, db: Session = Depends(get_db)):
    JobRepository(db).remove(job_id)
    return {"deleted": str(job_id)}
