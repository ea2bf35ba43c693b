from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Integer, String, Text

from jobboard.db.base import Base


def utcnow() -> datetime:
    """Naive UTC timestamp; SQLite drops tzinfo on round-trip."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Role(str, Enum):
    JOB_SEEKER = "jobSeeker"
    EMPLOYER = "employer"


EMPLOYER_FIELDS = (
    "organization_name",
    "industry_type",
    "total_employee",
    "description",
    "address",
    "province",
    "city",
    "district",
    "postal_code",
    "created_org",
)


class Account(Base):
    """Registered job seeker or employer with credentials and role."""

    __tablename__ = "accounts"
    __table_args__ = (
        CheckConstraint(
            "role IN ('jobSeeker', 'employer')",
            name="ck_accounts_role",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String, nullable=False, default=Role.JOB_SEEKER.value)

    # Employer-only attributes
    organization_name = Column(String)
    industry_type = Column(String)
    total_employee = Column(Integer)
    description = Column(Text)
    address = Column(String)
    province = Column(String)
    city = Column(String)
    district = Column(String)
    postal_code = Column(String)
    created_org = Column(String)

    # Email verification
    is_verified = Column(Boolean, default=False, nullable=False)
    verify_token = Column(String, unique=True, index=True)
    verify_token_expiry = Column(DateTime)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    def __repr__(self) -> str:
        return f"<Account id={self.id} email={self.email!r} role={self.role}>"
