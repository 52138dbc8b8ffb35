"""Application configuration."""

from decimal import Decimal
from os import getenv

from pydantic import BaseModel


class Settings(BaseModel):
    """Runtime settings for the application."""

    app_name: str = "Meat Storefront API"
    app_env: str = getenv("APP_ENV", "dev")
    debug: bool = getenv("DEBUG", "0") == "1"
    database_url: str = getenv("DATABASE_URL", "sqlite:///./storefront.db")
    jwt_secret_key: str = getenv("JWT_SECRET_KEY", "dev-only-change-me-to-a-long-random-secret")
    jwt_algorithm: str = getenv("JWT_ALGORITHM", "HS256")
    jwt_expire_minutes: int = int(getenv("JWT_EXPIRE_MINUTES", "60"))
    session_secret: str = getenv("SESSION_SECRET", "dev-session-secret-change-me")
    session_secret_fallback: str = "dev-session-secret-change-me"
    admin_user: str = getenv("ADMIN_USER", "")
    admin_pass: str = getenv("ADMIN_PASS", "")
    app_timezone: str = getenv("APP_TIMEZONE", "Asia/Ulaanbaatar")
    upload_dir: str = getenv("UPLOAD_DIR", "./uploads")
    default_language: str = getenv("DEFAULT_LANGUAGE", "mn")
    default_shipping_fee: Decimal = Decimal(getenv("DEFAULT_SHIPPING_FEE", "3000"))
    default_cutoff_hour: int = int(getenv("DEFAULT_CUTOFF_HOUR", "18"))
    default_cutoff_minute: int = int(getenv("DEFAULT_CUTOFF_MINUTE", "30"))
    default_processing_days: int = int(getenv("DEFAULT_PROCESSING_DAYS", "1"))


settings: Settings = Settings()
