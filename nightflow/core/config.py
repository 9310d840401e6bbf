# nightflow/core/config.py
import os
from typing import ClassVar, List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


def _default_database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url and url.strip():
        return url.strip()
    data_dir = os.path.abspath(os.getenv("DATA_DIR", "./data"))
    os.makedirs(data_dir, exist_ok=True)
    return f"sqlite:///{os.path.join(data_dir, 'nightflow.db')}"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class Settings(BaseModel):
    # Constant, not a pydantic field
    DATA_DIR: ClassVar[str] = os.path.abspath(os.getenv("DATA_DIR", "./data"))

    DATABASE_URL: str = Field(default_factory=_default_database_url)
    STORAGE_BACKEND: str = Field(default_factory=lambda: os.getenv("STORAGE_BACKEND", "sql"))
    RUN_MIGRATIONS: bool = Field(default_factory=lambda: _env_flag("RUN_MIGRATIONS", "true"))
    SEED_DEMO_DATA: bool = Field(default_factory=lambda: _env_flag("SEED_DEMO_DATA", "true"))

    SECRET_KEY: str = Field(default_factory=lambda: os.getenv("SECRET_KEY", "CHANGE_ME_SUPER_SECRET"))
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(default_factory=lambda: int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30")))
    REFRESH_TOKEN_EXPIRE_DAYS: int = Field(default_factory=lambda: int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7")))

    # Single dashboard account; ADMIN_PASSWORD_HASH wins over ADMIN_PASSWORD when set
    ADMIN_USERNAME: str = Field(default_factory=lambda: os.getenv("ADMIN_USERNAME", "admin"))
    ADMIN_PASSWORD: str = Field(default_factory=lambda: os.getenv("ADMIN_PASSWORD", "password"))
    ADMIN_PASSWORD_HASH: str | None = Field(default_factory=lambda: os.getenv("ADMIN_PASSWORD_HASH") or None)

    HOUSE_PARTNER_NAME: str = Field(default_factory=lambda: os.getenv("HOUSE_PARTNER_NAME", "Rumba"))

    LOG_LEVEL: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    CORS_ORIGINS: List[str] = Field(default_factory=lambda: _env_list("CORS_ORIGINS", "*"))


settings = Settings()
