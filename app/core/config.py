from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    ENV: str = "dev"  # "dev" or "prod"

    # Session storage. Leave REDIS_URL empty to keep sessions in process memory.
    REDIS_URL: str | None = None
    SESSION_KEY_PREFIX: str = "admission"
    SESSION_TTL_SECONDS: int = 60 * 60 * 2
    SESSION_COOKIE_NAME: str = "admission_session"
    FORM_STORAGE_KEY: str = "admissionForm"

    # Personal-details submissions per client IP
    SUBMIT_RATE_LIMIT: str = "30/minute"
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STRATEGY: str = "fixed-window"
    RATE_LIMIT_KEY_PREFIX: str = "admission-ratelimit"

    FRONTEND_URL: str = "http://localhost:5173"
    CORS_ORIGINS: list[str] = ["http://localhost:5173"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

settings = Settings()
