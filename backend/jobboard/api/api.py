"""
API Router Aggregator.

Combines the registration API and the standalone auth service into a single
router for the main app.
"""

from fastapi import APIRouter

from jobboard.api.routes import accounts, auth

api_router = APIRouter()

# Role-aware signup used by the web forms, errors as {"error": ...}
api_router.include_router(
    accounts.router,
    prefix="/api/auth",
    tags=["Accounts"],
)

# Standalone auth service, errors as {"msg": ...}
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["Authentication"],
)
