"""
Account registration API.

Single role-aware registration endpoint used by the job-seeker and employer
signup forms. Errors are reported as ``{"error": message}``.
"""

from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from jobboard.api.deps import get_account_service
from jobboard.api.schemas import AccountPublic
from jobboard.services import AccountService

router = APIRouter()


# ============== Pydantic Schemas ==============


class AccountRegister(BaseModel):
    """
    Registration payload.

    Every field is optional here so that missing fields are reported by the
    account service as a 400 instead of a schema error.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None  # 'jobSeeker' | 'employer'

    # Employer organization details
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


# ============== API Endpoints ==============


@router.post("/register", response_model=AccountPublic)
def register(
    payload: AccountRegister,
    service: AccountService = Depends(get_account_service),
):
    """
    Register a job seeker or employer.

    Employers must include organizationName and industryType. Returns the
    created account without its password hash.
    """
    return service.register(payload.model_dump(exclude_none=True))
