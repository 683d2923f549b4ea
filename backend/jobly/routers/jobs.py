from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from jobly.database import get_db
from jobly.dependencies import require_admin
from jobly.schemas.job import (
    JobCreate,
    JobDetailEnvelope,
    JobEnvelope,
    JobListResponse,
    JobUpdate,
)
from jobly.services import job_service

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("", response_model=JobEnvelope, status_code=201, dependencies=[Depends(require_admin)])
async def create_job(req: JobCreate, db: Session = Depends(get_db)):
    job = job_service.create(
        db,
        title=req.title,
        salary=req.salary,
        equity=req.equity,
        company_handle=req.company_handle,
    )
    return JobEnvelope(job=job)


@router.get("", response_model=JobListResponse)
async def list_jobs(
    title: str | None = None,
    min_salary: int | None = Query(None, alias="minSalary", ge=0),
    has_equity: bool | None = Query(None, alias="hasEquity"),
    db: Session = Depends(get_db),
):
    jobs = job_service.find_all(db, title=title, min_salary=min_salary, has_equity=has_equity)
    return JobListResponse(jobs=jobs)


@router.get("/{job_id}", response_model=JobDetailEnvelope, response_model_exclude_unset=True)
async def get_job(job_id: int, db: Session = Depends(get_db)):
    return JobDetailEnvelope(job=job_service.get(db, job_id))


@router.patch("/{job_id}", response_model=JobEnvelope, dependencies=[Depends(require_admin)])
async def update_job(job_id: int, req: JobUpdate, db: Session = Depends(get_db)):
    update_data = req.model_dump(exclude_unset=True, by_alias=True)
    job = job_service.update(db, job_id, update_data)
    return JobEnvelope(job=job)


@router.delete("/{job_id}", dependencies=[Depends(require_admin)])
async def delete_job(job_id: int, db: Session = Depends(get_db)):
    job_service.remove(db, job_id)
    return {"deleted": str(job_id)}
