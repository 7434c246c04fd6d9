"""Application configuration using pydantic settings with structured sections."""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

INSECURE_SECRET_KEY = "autostore-dev-secret"


class ServerSettings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3001
    reload: bool = False


class DatabaseSettings(BaseModel):
    url: str = Field(default="sqlite+aiosqlite:///./autostore.db", alias="url")
    echo: bool = False
    pool_size: Optional[int] = None
    max_overflow: Optional[int] = None


class SecuritySettings(BaseModel):
    secret_key: str = Field(default=INSECURE_SECRET_KEY, min_length=8)
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60


class BootstrapSettings(BaseModel):
    admin_username: str = "admin"
    admin_password: str = "admin123"


class StorageSettings(BaseModel):
    upload_dir: Path = Field(default=Path("storage/uploads"))
    chunk_size: int = 1024 * 1024


class AdvisorySettings(BaseModel):
    api_key: Optional[str] = None
    model: str = "gemini-2.0-flash"
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    timeout: float = 30.0


class Settings(BaseSettings):
    """Top-level application settings with nested sections."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"
    project_name: str = "Autostore"
    api_prefix: str = "/api"

    server: ServerSettings = ServerSettings()
    database: DatabaseSettings = DatabaseSettings()
    security: SecuritySettings = SecuritySettings()
    bootstrap: BootstrapSettings = BootstrapSettings()
    storage: StorageSettings = StorageSettings()
    advisory: AdvisorySettings = AdvisorySettings()

    @property
    def database_url(self) -> str:
        return self.database.url

    @property
    def host(self) -> str:
        return self.server.host

    @property
    def port(self) -> int:
        return self.server.port

    @property
    def secret_key(self) -> str:
        return self.security.secret_key

    @property
    def algorithm(self) -> str:
        return self.security.algorithm

    @property
    def access_token_expire_minutes(self) -> int:
        return self.security.access_token_expire_minutes

    @property
    def uses_insecure_secret(self) -> bool:
        return self.security.secret_key == INSECURE_SECRET_KEY

    @property
    def upload_storage_dir(self) -> Path:
        return self.storage.upload_dir


@lru_cache()
def get_settings() -> Settings:
    return Settings()
