import json

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str

    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_HOURS: int = 24
    AUTH_COOKIE_NAME: str = "token"

    PASSWORD_RESET_TOKEN_EXPIRE_HOURS: int = 1
    PASSWORD_MIN_LENGTH: int = 8

    EMAIL_BACKEND: str = "console"
    SMTP_HOST: str = "smtp.gmail.com"
    SMTP_PORT: int = 587
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_FROM_EMAIL: str = "noreply@adviceglobe.com"
    SMTP_FROM_NAME: str = "Advice Globe"

    # Base URL of the web frontend, used to build links in e-mails
    APP_BASE_URL: str = "http://localhost:3000"

    BACKEND_CORS_ORIGINS: str = '["http://localhost:3000"]'

    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Advice Globe API"
    DEBUG: bool = False

    RATE_LIMIT_ENABLED: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    @field_validator("SECRET_KEY")
    @classmethod
    def secret_key_not_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("SECRET_KEY must not be empty")
        return v

    @property
    def cors_origins(self) -> list[str]:
        if isinstance(self.BACKEND_CORS_ORIGINS, str):
            try:
                parsed: list[str] = json.loads(self.BACKEND_CORS_ORIGINS)
                return parsed
            except json.JSONDecodeError:
                return ["http://localhost:3000"]
        return self.BACKEND_CORS_ORIGINS

    @property
    def access_token_ttl_seconds(self) -> int:
        return self.ACCESS_TOKEN_EXPIRE_HOURS * 60 * 60


settings = Settings()
