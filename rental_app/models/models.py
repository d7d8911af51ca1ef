import uuid
from datetime import datetime, timezone
from typing import List, Optional
from uuid import uuid4

from bcrypt import checkpw, gensalt, hashpw
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
    text,
)
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from core.get_db import Base

from .enums import (
    PASSWORD_MAX_BYTES,
    PropertyStatus,
    PropertyType,
    RequestStatus,
    UserRole,
)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[str] = mapped_column(
        String(32), unique=True, index=True, nullable=False
    )
    role: Mapped[UserRole] = mapped_column(
        Enum(UserRole, native_enum=False, length=20), nullable=False
    )
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    national_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    properties: Mapped[List["Property"]] = relationship(
        "Property", back_populates="owner", foreign_keys="Property.owner_id"
    )
    requests: Mapped[List["RentalRequest"]] = relationship(
        "RentalRequest",
        back_populates="tenant",
        foreign_keys="RentalRequest.tenant_id",
    )
    commissions: Mapped[List["Commission"]] = relationship(
        "Commission",
        back_populates="commissioner",
        foreign_keys="Commission.commissioner_id",
    )

    def set_password(self, raw_password: str, rounds: int = 12):
        salt = gensalt(rounds=rounds)
        self.hashed_password = hashpw(raw_password.encode("utf-8"), salt).decode(
            "utf-8"
        )

    def check_password(self, raw_password: str) -> bool:
        if not self.hashed_password:
            return False
        if len(raw_password.encode("utf-8")) > PASSWORD_MAX_BYTES:
            return False
        return checkpw(
            raw_password.encode("utf-8"), self.hashed_password.encode("utf-8")
        )

    @validates("verified")
    def validate_verified(self, key, value):
        if self.verified and not value:
            raise ValueError("A verified user cannot be unverified.")
        return value

    def __repr__(self):
        return f"<User {self.phone} ({self.role.value if self.role else None})>"


class Property(Base):
    __tablename__ = "properties"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_properties_price_non_negative"),
        CheckConstraint(
            "rooms IS NULL OR rooms >= 0", name="ck_properties_rooms_non_negative"
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[PropertyType] = mapped_column(
        Enum(PropertyType, native_enum=False, length=20), nullable=False
    )
    price: Mapped[int] = mapped_column(Integer, nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    rooms: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    status: Mapped[PropertyStatus] = mapped_column(
        Enum(PropertyStatus, native_enum=False, length=20),
        default=PropertyStatus.AVAILABLE,
        nullable=False,
        index=True,
    )
    verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    owner: Mapped["User"] = relationship(
        "User", back_populates="properties", foreign_keys=[owner_id]
    )
    media: Mapped[List["Media"]] = relationship(
        "Media",
        back_populates="property",
        cascade="all, delete-orphan",
        order_by="Media.position",
        collection_class=ordering_list("position"),
    )
    requests: Mapped[List["RentalRequest"]] = relationship(
        "RentalRequest", back_populates="property"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    @validates("verified")
    def validate_verified(self, key, value):
        if self.verified and not value:
            raise ValueError("A verified property cannot be unverified.")
        return value

    def __repr__(self):
        return f"<Property {self.title} ({self.id})>"


class Media(Base):
    __tablename__ = "media"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True
    )
    property: Mapped["Property"] = relationship("Property", back_populates="media")
    url: Mapped[str] = mapped_column(String(1024), nullable=False)
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )


class RentalRequest(Base):
    __tablename__ = "requests"
    __table_args__ = (
        Index(
            "uq_requests_pending_tenant_property",
            "tenant_id",
            "property_id",
            unique=True,
            postgresql_where=text("status = 'PENDING'"),
            sqlite_where=text("status = 'PENDING'"),
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    tenant_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    tenant: Mapped["User"] = relationship(
        "User", back_populates="requests", foreign_keys=[tenant_id]
    )
    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    property: Mapped["Property"] = relationship(
        "Property", back_populates="requests", foreign_keys=[property_id]
    )
    admin_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    admin: Mapped[Optional["User"]] = relationship("User", foreign_keys=[admin_id])
    status: Mapped[RequestStatus] = mapped_column(
        Enum(RequestStatus, native_enum=False, length=20),
        default=RequestStatus.PENDING,
        nullable=False,
        index=True,
    )
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )

    @validates("status")
    def validate_status(self, key, value):
        current = self.status
        if current is None or current == value:
            return value
        if current.next_status != value:
            raise ValueError(
                f"Request status cannot move from {current.value} to {value.value}."
            )
        return value

    def __repr__(self):
        return f"<RentalRequest {self.id} {self.status}>"


class Commission(Base):
    __tablename__ = "commissions"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_commissions_amount_non_negative"),
        CheckConstraint("platform_fee >= 0", name="ck_commissions_fee_non_negative"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    property_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("properties.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    property: Mapped["Property"] = relationship("Property")
    commissioner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    commissioner: Mapped["User"] = relationship(
        "User", back_populates="commissions", foreign_keys=[commissioner_id]
    )
    amount: Mapped[int] = mapped_column(Integer, nullable=False)
    platform_fee: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False, index=True
    )
