import logging
import time

from sqlalchemy.orm import Session

from jobly.config import settings
from jobly.exceptions import ErrorKind, JoblyError
from jobly.utils.security import generate_token, hash_password, verify_password
from jobly.utils.sql import execute

logger = logging.getLogger(__name__)

_USER_COLUMNS = "username, first_name, last_name, email, is_admin"


class AuthService:
    def __init__(self):
        self._active_tokens: dict[str, tuple[dict, float]] = {}  # token -> (claims, expires_at)

    def _cleanup_expired(self):
        now = time.time()
        self._active_tokens = {
            t: entry for t, entry in self._active_tokens.items() if entry[1] > now
        }

    def register(
        self,
        db: Session,
        username: str,
        password: str,
        first_name: str,
        last_name: str,
        email: str,
        is_admin: bool = False,
    ) -> dict:
        duplicate = execute(db, "SELECT username FROM users WHERE username = ?1", [username])
        if duplicate:
            raise JoblyError(ErrorKind.DUPLICATE_ENTRY, f"Duplicate username: {username}")

        rows = execute(
            db,
            f"""
            INSERT INTO users (username, password, first_name, last_name, email, is_admin)
            VALUES (?1, ?2, ?3, ?4, ?5, ?6)
            RETURNING {_USER_COLUMNS}
            """,
            [username, hash_password(password), first_name, last_name, email, int(is_admin)],
        )
        db.commit()
        logger.info("Registered user %s (admin=%s)", username, is_admin)
        return _to_user(rows[0])

    def authenticate(self, db: Session, username: str, password: str) -> dict:
        rows = execute(
            db,
            f"SELECT {_USER_COLUMNS}, password FROM users WHERE username = ?1",
            [username],
        )
        if rows and verify_password(rows[0].pop("password"), password):
            return _to_user(rows[0])
        logger.warning("Failed login for %s", username)
        raise JoblyError(ErrorKind.UNAUTHORIZED, "Invalid username/password")

    def ensure_admin(self, db: Session, username: str, password: str) -> None:
        existing = execute(db, "SELECT username FROM users WHERE username = ?1", [username])
        if existing:
            return
        self.register(db, username, password, "Admin", "User", f"{username}@localhost", is_admin=True)
        logger.info("Seeded admin user %s", username)

    def issue_token(self, user: dict) -> str:
        token = generate_token()
        claims = {"username": user["username"], "is_admin": user["is_admin"]}
        self._active_tokens[token] = (claims, time.time() + settings.token_ttl_seconds)
        return token

    def resolve_token(self, token: str) -> dict | None:
        self._cleanup_expired()
        entry = self._active_tokens.get(token)
        return entry[0] if entry else None

    def revoke_all(self):
        self._active_tokens.clear()


def _to_user(row: dict) -> dict:
    row["is_admin"] = bool(row["is_admin"])
    return row


auth_service = AuthService()
