from pydantic import BaseModel, ConfigDict, Field, field_validator

from jobly.schemas.base import CamelModel
from jobly.schemas.company import CompanyResponse

# "0", "0.25", ".5", "1", "1.0"
EQUITY_PATTERN = r"^(0|0?\.[0-9]+|1(\.0+)?)$"


class JobCreate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(min_length=1)
    salary: int | None = Field(None, ge=0)
    equity: str | None = Field(None, pattern=EQUITY_PATTERN)
    company_handle: str = Field(min_length=1, max_length=25)


class JobUpdate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    title: str | None = Field(None, min_length=1)
    salary: int | None = Field(None, ge=0)
    equity: str | None = Field(None, pattern=EQUITY_PATTERN)
    company_handle: str | None = Field(None, min_length=1, max_length=25)

    @field_validator("title", "company_handle")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v


class JobResponse(CamelModel):
    id: int
    title: str
    salary: int | None
    equity: str | None
    company_handle: str


class JobListItem(JobResponse):
    company_name: str | None


class JobDetail(JobResponse):
    company: CompanyResponse | None = None


class JobEnvelope(BaseModel):
    job: JobResponse


class JobDetailEnvelope(BaseModel):
    job: JobDetail


class JobListResponse(BaseModel):
    jobs: list[JobListItem]
