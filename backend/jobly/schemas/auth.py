from pydantic import BaseModel, ConfigDict, Field

from jobly.schemas.base import CamelModel


class TokenRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserRegister(CamelModel):
    model_config = ConfigDict(extra="forbid")

    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=5, max_length=64)
    first_name: str = Field(min_length=1, max_length=30)
    last_name: str = Field(min_length=1, max_length=30)
    email: str = Field(min_length=6, max_length=60, pattern=r"^[^@\s]+@[^@\s]+$")


class TokenResponse(BaseModel):
    token: str
