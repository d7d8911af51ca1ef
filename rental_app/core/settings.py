import re
from datetime import timedelta
from decimal import Decimal
from typing import List

from dotenv import load_dotenv
from pydantic import Field, ValidationInfo, field_validator
from pydantic_settings import BaseSettings

from .url_parser import parser

load_dotenv()

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$", re.IGNORECASE)
_DURATION_UNITS = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
    "w": "weeks",
}


def parse_duration(value: str | int | timedelta) -> timedelta:
    if isinstance(value, timedelta):
        return value
    if isinstance(value, int):
        return timedelta(seconds=value)

    match = _DURATION_RE.match(str(value))
    if not match:
        raise ValueError(
            f"Invalid duration: {value!r}. Use e.g. 7d, 12h, 30m, 45s or seconds."
        )
    amount, unit = match.groups()
    return timedelta(**{_DURATION_UNITS[unit.lower()]: int(amount)})


class Settings(BaseSettings):
    PROJECT_NAME: str = "Rental Marketplace API"
    PORT: int = 3000
    ENVIRONMENT: str = "development"
    DATABASE_URL: str
    JWT_SECRET_KEY: str
    ALGORITHM: str = "HS256"
    JWT_EXPIRES_IN: timedelta = timedelta(days=7)
    API_VERSION: str = "v1"
    ALLOWED_HOSTS_RAW: str = Field(default="*", validation_alias="ALLOWED_HOSTS")
    LOG_LEVEL: str = "INFO"
    AUTO_CREATE_TABLES: bool = False
    BCRYPT_ROUNDS: int = 12
    DEFAULT_PHONE_REGION: str = "RW"
    PLATFORM_FEE_RATE: Decimal = Decimal("0.05")

    @field_validator("DATABASE_URL", "JWT_SECRET_KEY")
    @classmethod
    def required_not_blank(cls, v: str, info: ValidationInfo):
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} is required")
        return v.strip()

    @field_validator("JWT_EXPIRES_IN", mode="before")
    @classmethod
    def validate_expiry(cls, v):
        return parse_duration(v)

    @field_validator("API_VERSION")
    @classmethod
    def strip_slashes(cls, v: str) -> str:
        return v.strip().strip("/")

    @property
    def ALLOWED_HOSTS(self) -> List[str]:
        return parser.parse_url_list(self.ALLOWED_HOSTS_RAW, "ALLOWED_HOSTS")

    @property
    def API_PREFIX(self) -> str:
        return f"/{self.API_VERSION}" if self.API_VERSION else ""

    class Config:
        env_file = ".env"
        extra = "ignore"
        case_sensitive = False


settings = Settings()
