from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from jobly.core.sql import check_filter_keys
from jobly.database import get_db
from jobly.repositories.company import COMPANY_FILTER_KEYS, CompanyRepository
from jobly.routers.auth_deps import require_admin
from jobly.schemas.company import (
    CompanyCreate,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyListEnvelope,
    CompanyUpdate,
)

router = APIRouter(
    prefix="/companies",
    tags=["Companies"],
)


def check_company_filter_keys(request: Request) -> None:
    """Runs before the query values are parsed, so a bad key wins over a bad value."""
    check_filter_keys(request.query_params, COMPANY_FILTER_KEYS)


def get_company_filters(
    _: None = Depends(check_company_filter_keys),
    name: Optional[str] = Query(None, description="Case-insensitive substring of the name"),
    min_employees: Optional[int] = Query(None, alias="minEmployees", ge=0),
    max_employees: Optional[int] = Query(None, alias="maxEmployees", ge=0),
) -> Dict[str, Any]:
    """Query string -> filter mapping keyed like the public API."""
    filters = {"name": name, "minEmployees": min_employees, "maxEmployees": max_employees}
    return {key: value for key, value in filters.items() if value is not None}


@router.post("", response_model=CompanyEnvelope, status_code=status.HTTP_201_CREATED,
             dependencies=[Depends(require_admin)])
def create_company(company_in: CompanyCreate, db: Session = Depends(get_db)):
    """Create a company. Admin only."""
    company = CompanyRepository(db).create(company_in.model_dump(by_alias=True))
    return {"company": company}


@router.get("", response_model=CompanyListEnvelope)
def list_companies(
    filters: Dict[str, Any] = Depends(get_company_filters),
    db: Session = Depends(get_db),
):
    """
    List companies, optionally filtered by name, minEmployees, maxEmployees.
    """
    return {"companies": CompanyRepository(db).find_all(filters)}


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    return {"company": CompanyRepository(db).get(handle)}


@router.patch("/{handle}", response_model=CompanyEnvelope, dependencies=[Depends(require_admin)])
def update_company(handle: str, company_in: CompanyUpdate, db: Session = Depends(get_db)):
    """
    Partial update of name, description, numEmployees, logoUrl. Admin only.
    """
    data = company_in.model_dump(by_alias=True, exclude_unset=True)
    return {"company": CompanyRepository(db).update(handle, data)}


@router.delete("/{handle}", dependencies=[Depends(require_admin)])
def delete_company(handle: str, db: Session = Depends(get_db)):
    CompanyRepository(db).remove(handle)
    return {"deleted": handle}
