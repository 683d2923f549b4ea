from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobly.database import get_db
from jobly.dependencies import require_admin
from jobly.schemas.company import (
    CompanyCreate,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyListResponse,
)
from jobly.services import company_service

router = APIRouter(prefix="/companies", tags=["companies"])


@router.post("", response_model=CompanyEnvelope, status_code=201, dependencies=[Depends(require_admin)])
async def create_company(req: CompanyCreate, db: Session = Depends(get_db)):
    company = company_service.create(db, **req.model_dump())
    return CompanyEnvelope(company=company)


@router.get("", response_model=CompanyListResponse)
async def list_companies(
    name: str | None = None,
    min_employees: int | None = Query(None, alias="minEmployees", ge=0),
    max_employees: int | None = Query(None, alias="maxEmployees", ge=0),
    db: Session = Depends(get_db),
):
    companies = company_service.find_all(
        db, name=name, min_employees=min_employees, max_employees=max_employees
    )
    return CompanyListResponse(companies=companies)


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
async def get_company(handle: str, db: Session = Depends(get_db)):
    return CompanyDetailEnvelope(company=company_service.get(db, handle))
