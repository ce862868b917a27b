# accounthub/shared/config.py
from pathlib import Path
from pydantic import BaseModel
import os

ROOT = Path(__file__).resolve().parents[2]   # project root

DEV_JWT_SECRET = "dev-secret-key-for-signing-must-be-at-least-256-bits-long"


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


def resolve_database_url() -> str:
    """First non-blank of the usual hosting variables, else a local SQLite file."""
    for name in ("DATABASE_URL", "DATABASE_PRIVATE_URL", "DATABASE_PUBLIC_URL", "POSTGRES_URL"):
        url = (os.getenv(name) or "").strip()
        if url:
            # SQLAlchemy only understands the postgresql:// scheme
            if url.startswith("postgres://"):
                url = "postgresql://" + url[len("postgres://"):]
            return url
    storage = ROOT / "storage"
    storage.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{(storage / 'accounthub.db').as_posix()}"


class Settings(BaseModel):
    ENV: str = os.getenv("ENV", "dev")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    DATABASE_URL: str = resolve_database_url()
    SEED_CATEGORIES: bool = _env_bool("SEED_CATEGORIES", "true")

    # JWT
    JWT_SECRET: str = os.getenv("JWT_SECRET", DEV_JWT_SECRET)
    JWT_ALG: str = os.getenv("JWT_ALG", "HS256")
    JWT_ACCESS_EXPIRE_MIN: int = int(os.getenv("JWT_ACCESS_EXPIRE_MIN", "15"))
    JWT_REFRESH_EXPIRE_DAYS: int = int(os.getenv("JWT_REFRESH_EXPIRE_DAYS", "7"))

    BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # password reset
    RESET_PASSWORD_BASE_URL: str = os.getenv("RESET_PASSWORD_BASE_URL", "http://localhost:8080")
    RESET_TOKEN_VALID_MINUTES: int = int(os.getenv("RESET_TOKEN_VALID_MINUTES", "60"))

    # outbound mail; no SMTP_HOST means reset links are only logged
    SMTP_HOST: str | None = os.getenv("SMTP_HOST") or None
    SMTP_PORT: int = int(os.getenv("SMTP_PORT", "587"))
    SMTP_USERNAME: str | None = os.getenv("SMTP_USERNAME") or None
    SMTP_PASSWORD: str | None = os.getenv("SMTP_PASSWORD") or None
    SMTP_FROM: str = os.getenv("SMTP_FROM", "no-reply@accounthub.local")
    SMTP_STARTTLS: bool = _env_bool("SMTP_STARTTLS", "true")

settings = Settings()
