from jobboard.services.account_store import (
    AccountStore,
    InMemoryAccountStore,
    SqlAccountStore,
)
from jobboard.services.accounts import (
    AccountService,
    REQUIRED_FIELDS,
    ROLE_REQUIRED_FIELDS,
)

__all__ = [
    "AccountStore",
    "InMemoryAccountStore",
    "SqlAccountStore",
    "AccountService",
    "REQUIRED_FIELDS",
    "ROLE_REQUIRED_FIELDS",
]
