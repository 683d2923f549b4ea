from pydantic import BaseModel, ConfigDict, Field

from jobly.schemas.base import CamelModel


class CompanyCreate(CamelModel):
    model_config = ConfigDict(extra="forbid")

    handle: str = Field(min_length=1, max_length=25, pattern=r"^[a-z0-9-]+$")
    name: str = Field(min_length=1)
    description: str
    num_employees: int | None = Field(None, ge=0)
    logo_url: str | None = None


class CompanyResponse(CamelModel):
    handle: str
    name: str
    description: str
    num_employees: int | None
    logo_url: str | None


class CompanyJob(CamelModel):
    id: int
    title: str
    salary: int | None
    equity: str | None


class CompanyDetail(CompanyResponse):
    jobs: list[CompanyJob] = []


class CompanyEnvelope(BaseModel):
    company: CompanyResponse


class CompanyDetailEnvelope(BaseModel):
    company: CompanyDetail


class CompanyListResponse(BaseModel):
    companies: list[CompanyResponse]
