from pydantic_settings import BaseSettings
from pydantic import Field

class Settings(BaseSettings):
    app_name: str = "Document Management"
    app_env: str = Field("dev", alias="APP_ENV")
    secret_key: str | None = Field(default=None, alias="SECRET_KEY")
    access_token_expire_minutes: int = Field(24 * 60, alias="ACCESS_TOKEN_EXPIRE_MINUTES")
    database_url: str | None = Field(default=None, alias="DATABASE_URL")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    default_page_limit: int = Field(10, alias="DEFAULT_PAGE_LIMIT")

    rate_limit_window_seconds: int = Field(60, alias="RATE_LIMIT_WINDOW_SECONDS")
    rate_limit_max_calls: int = Field(30, alias="RATE_LIMIT_MAX_CALLS")

    # optional bootstrap account, created by init_db when all three are set
    admin_username: str | None = Field(default=None, alias="ADMIN_USERNAME")
    admin_email: str | None = Field(default=None, alias="ADMIN_EMAIL")
    admin_password: str | None = Field(default=None, alias="ADMIN_PASSWORD")

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()

PLACEHOLDER_SECRETS = {"change-me", "changeme", "secret"}

def ensure_secret_key(current: Settings = settings) -> str:
    key = (current.secret_key or "").strip()
    if not key or key in PLACEHOLDER_SECRETS:
        raise RuntimeError("SECRET_KEY must be set to a private value before the app can start")
    return key
