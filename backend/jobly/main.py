import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from jobly.config import settings
from jobly.exceptions import ErrorKind, JoblyError
from jobly.routers import auth, companies, jobs

logger = logging.getLogger("jobly")

STATUS_BY_KIND = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.DUPLICATE_ENTRY: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.setLevel(settings.log_level.upper())
    # Startup: make sure the schema exists, then seed the configured admin
    try:
        from jobly.database import SessionLocal, init_db
        init_db()
        if settings.admin_username and settings.admin_password:
            from jobly.services.auth_service import auth_service
            db = SessionLocal()
            try:
                auth_service.ensure_admin(db, settings.admin_username, settings.admin_password)
            finally:
                db.close()
        logger.info("Database ready at %s", settings.db_path)
    except Exception as exc:
        logger.error("Could not initialise database %s: %s", settings.db_path, exc)
        raise
    yield
    # Shutdown: drop all issued tokens
    from jobly.services.auth_service import auth_service
    auth_service.revoke_all()


app = FastAPI(
    title="Jobly",
    description="Job board API: companies and the jobs they post",
    version="0.1.0",
    lifespan=lifespan,
)


def _error_body(message, status: int) -> dict:
    return {"error": {"message": message, "status": status}}


@app.exception_handler(JoblyError)
async def jobly_error_handler(request: Request, exc: JoblyError):
    status = STATUS_BY_KIND[exc.kind]
    return JSONResponse(status_code=status, content=_error_body(exc.message, status))


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()]
    return JSONResponse(status_code=400, content=_error_body(messages, 400))


app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(companies.router, prefix=settings.api_prefix)
app.include_router(jobs.router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}
