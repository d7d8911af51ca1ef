from __future__ import annotations

import uuid
from datetime import datetime
from typing import List, Optional

import phonenumbers
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from core.settings import settings
from models.enums import (
    MAX_DB_INT,
    PASSWORD_MAX_BYTES,
    SELF_REGISTER_ROLES,
    PropertyStatus,
    PropertyType,
    RequestStatus,
    UserRole,
)


def normalize_phone(value: str) -> str:
    try:
        parsed = phonenumbers.parse(value, settings.DEFAULT_PHONE_REGION)
    except phonenumbers.NumberParseException:
        raise ValueError("Invalid phone number format. Use e.g. 0788123456 or +250788123456")
    if not phonenumbers.is_valid_number(parsed):
        raise ValueError("Invalid phone number.")
    return phonenumbers.format_number(parsed, phonenumbers.PhoneNumberFormat.E164)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Users


class UserCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    phone: str
    password: str = Field(
        ..., min_length=6, json_schema_extra={"type": "string", "format": "password"}
    )
    role: UserRole
    national_id: Optional[str] = Field(default=None, max_length=64)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("Name is required")
        return value

    @field_validator("phone", mode="before")
    @classmethod
    def validate_phone(cls, value):
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Phone is required")
        return normalize_phone(value.strip())

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, value: str):
        if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
            raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
        return value

    @field_validator("role")
    @classmethod
    def validate_role(cls, v: UserRole):
        if v not in SELF_REGISTER_ROLES:
            raise ValueError("Invalid role")
        return v

    @field_validator("national_id", mode="before")
    @classmethod
    def strip_national_id(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        return value


class UserLoginInput(CamelModel):
    phone: str
    password: str = Field(
        ..., min_length=1, json_schema_extra={"type": "string", "format": "password"}
    )

    @field_validator("phone", mode="before")
    @classmethod
    def normalize_login_phone(cls, value):
        if not isinstance(value, str) or not value.strip():
            raise ValueError("Phone is required")
        try:
            return normalize_phone(value.strip())
        except ValueError:
            # Unknown formats simply fail to match a stored user.
            return value.strip()


class UserPublicSchema(CamelModel):
    id: uuid.UUID
    name: str
    phone: str
    role: UserRole
    national_id: Optional[str] = None
    verified: bool
    created_at: datetime
    updated_at: datetime


class LoginOut(CamelModel):
    user: UserPublicSchema
    token: str


# Properties


class MediaOut(CamelModel):
    id: uuid.UUID
    url: str
    created_at: datetime


class PropertyCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    type: PropertyType
    price: int = Field(..., ge=0, le=MAX_DB_INT)
    location: str = Field(..., min_length=1, max_length=255)
    rooms: Optional[int] = Field(default=None, ge=0, le=MAX_DB_INT)
    owner_id: Optional[uuid.UUID] = None
    media: List[HttpUrl] = Field(default_factory=list)

    @field_validator("title", "location", mode="before")
    @classmethod
    def strip_text(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value


class PropertyUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    type: Optional[PropertyType] = None
    price: Optional[int] = Field(default=None, ge=0, le=MAX_DB_INT)
    location: Optional[str] = Field(default=None, min_length=1, max_length=255)
    rooms: Optional[int] = Field(default=None, ge=0, le=MAX_DB_INT)
    status: Optional[PropertyStatus] = None

    @field_validator("title", "location", mode="before")
    @classmethod
    def strip_text(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @model_validator(mode="after")
    def validate_patch_rules(self):
        for name in ("title", "type", "price", "location", "status"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null.")
        return self


class PropertySearchFilters(BaseModel):
    type: Optional[PropertyType] = None
    min_price: Optional[int] = Field(default=None, ge=0, le=MAX_DB_INT)
    max_price: Optional[int] = Field(default=None, ge=0, le=MAX_DB_INT)
    location: Optional[str] = None
    rooms: Optional[int] = Field(default=None, ge=0, le=MAX_DB_INT)
    status: Optional[PropertyStatus] = None
    verified: Optional[bool] = None


class PropertyOut(CamelModel):
    id: uuid.UUID
    title: str
    type: PropertyType
    price: int
    location: str
    rooms: Optional[int] = None
    status: PropertyStatus
    verified: bool
    owner_id: uuid.UUID
    owner: Optional[UserPublicSchema] = None
    media: List[MediaOut] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class PropertySummary(CamelModel):
    id: uuid.UUID
    title: str
    type: PropertyType
    price: int
    location: str
    status: PropertyStatus
    verified: bool
    owner_id: uuid.UUID


# Requests


class RequestCreate(CamelModel):
    property_id: uuid.UUID
    tenant_id: Optional[uuid.UUID] = None
    message: Optional[str] = Field(default=None, max_length=2000)

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        return value


class RequestSearchFilters(BaseModel):
    status: Optional[RequestStatus] = None
    tenant_id: Optional[uuid.UUID] = None
    property_id: Optional[uuid.UUID] = None


class RequestOut(CamelModel):
    id: uuid.UUID
    tenant_id: uuid.UUID
    property_id: uuid.UUID
    admin_id: Optional[uuid.UUID] = None
    status: RequestStatus
    message: Optional[str] = None
    tenant: Optional[UserPublicSchema] = None
    property: Optional[PropertyOut] = None
    created_at: datetime
    updated_at: datetime


# Commissions


class CommissionCreate(CamelModel):
    property_id: uuid.UUID
    commissioner_id: uuid.UUID
    amount: int = Field(..., ge=0, le=MAX_DB_INT)


class CommissionSearchFilters(BaseModel):
    commissioner_id: Optional[uuid.UUID] = None
    property_id: Optional[uuid.UUID] = None


class CommissionOut(CamelModel):
    id: uuid.UUID
    property_id: uuid.UUID
    commissioner_id: uuid.UUID
    amount: int
    platform_fee: int
    property: Optional[PropertySummary] = None
    commissioner: Optional[UserPublicSchema] = None
    created_at: datetime


# Admin


class AdminStatsOut(CamelModel):
    total_users: int
    total_properties: int
    total_requests: int
    total_commissions: int
    pending_users: int
    pending_properties: int
    pending_requests: int
    total_commission_amount: int
    total_platform_fee: int
