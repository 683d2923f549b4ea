from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from jobly.database import get_db
from jobly.schemas.auth import TokenRequest, TokenResponse, UserRegister
from jobly.services.auth_service import auth_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/token", response_model=TokenResponse)
async def login(req: TokenRequest, db: Session = Depends(get_db)):
    user = auth_service.authenticate(db, req.username, req.password)
    return TokenResponse(token=auth_service.issue_token(user))


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(req: UserRegister, db: Session = Depends(get_db)):
    # Self-registration never grants admin.
    user = auth_service.register(db, **req.model_dump(), is_admin=False)
    return TokenResponse(token=auth_service.issue_token(user))
