from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    db_path: Path = Path("jobly.sqlite")
    api_prefix: str = ""
    token_ttl_seconds: int = 3600  # 1 hour
    # Optional admin account created on startup when missing.
    admin_username: str | None = None
    admin_password: str | None = None
    log_level: str = "INFO"

    model_config = {"env_prefix": "JOBLY_"}


settings = Settings()
