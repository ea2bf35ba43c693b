import re
from datetime import timedelta

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_DURATION_PATTERN = re.compile(r"^\s*(\d+)\s*([smhdwy]?)\s*$", re.IGNORECASE)
_DURATION_SECONDS = {
    "": 1,
    "s": 1,
    "m": 60,
    "h": 60 * 60,
    "d": 24 * 60 * 60,
    "w": 7 * 24 * 60 * 60,
    "y": 365 * 24 * 60 * 60,
}


def parse_duration(value: str) -> timedelta:
    """
    Parse a token lifetime such as ``"1d"``, ``"12h"``, ``"30m"`` or ``"3600"``.

    Raises:
        ValueError: if the value is not a positive integer with an optional
            ``s``/``m``/``h``/``d``/``w``/``y`` suffix
    """
    match = _DURATION_PATTERN.match(str(value))
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")

    amount, unit = match.groups()
    if int(amount) <= 0:
        raise ValueError(f"Duration must be positive: {value!r}")
    return timedelta(seconds=int(amount) * _DURATION_SECONDS[unit.lower()])


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    DATABASE_URL: str = "sqlite:///./jobboard.db"
    ACCOUNT_STORE: str = "sql"  # 'sql' | 'memory'

    # JWT Authentication
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    JWT_EXPIRATION: str = "1d"  # e.g. "45s", "30m", "12h", "1d", "2w", "1y" or seconds

    # Passwords & email verification
    BCRYPT_ROUNDS: int = 10
    VERIFY_TOKEN_EXPIRE_MINUTES: int = 60
    REQUIRE_VERIFIED_EMAIL: bool = False

    # Application
    APP_NAME: str = "JobBoard"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    BACKEND_CORS_ORIGINS: str = (
        "http://localhost:3000,"
        "http://127.0.0.1:3000"
    )

    @field_validator("JWT_EXPIRATION")
    @classmethod
    def validate_jwt_expiration(cls, v: str) -> str:
        """Reject unparseable token lifetimes at startup."""
        parse_duration(v)
        return v


settings = Settings()
