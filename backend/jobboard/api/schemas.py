"""
Response schemas shared by the auth routers.

``AccountPublic`` is the only shape an account leaves the service in; it
never carries the password hash or the email-verification token.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class AccountPublic(BaseModel):
    """Public projection of an account (camelCase JSON)."""

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    name: str
    email: str
    role: str
    is_verified: bool = False

    organization_name: Optional[str] = None
    industry_type: Optional[str] = None
    total_employee: Optional[int] = None
    description: Optional[str] = None
    address: Optional[str] = None
    province: Optional[str] = None
    city: Optional[str] = None
    district: Optional[str] = None
    postal_code: Optional[str] = None
    created_org: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserSummary(BaseModel):
    """Short projection returned by register, login and update."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class MessageResponse(BaseModel):
    msg: str
