import enum
from datetime import datetime

from sqlalchemy import Column, DateTime, Enum, Integer, String

from menuhub.core.database import Base


class Role(str, enum.Enum):
    USER = "user"
    ADMIN = "admin"

    @property
    def bypasses_ownership(self) -> bool:
        return self is Role.ADMIN

    @property
    def can_manage_users(self) -> bool:
        return self is Role.ADMIN

    @classmethod
    def parse(cls, value: "str | Role") -> "Role":
        if isinstance(value, Role):
            return value
        return cls((value or "").strip().lower())


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    phone_number = Column(String(20), unique=True, index=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    role = Column(
        Enum(Role, values_callable=lambda roles: [role.value for role in roles], native_enum=False, length=16),
        nullable=False,
        default=Role.USER,
    )

    # one-time login codes, one outstanding code per channel
    sms_code = Column(String(12), nullable=True)
    sms_code_expires_at = Column(DateTime, nullable=True)
    email_code = Column(String(12), nullable=True)
    email_code_expires_at = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
    deleted_at = Column(DateTime, nullable=True, index=True)
