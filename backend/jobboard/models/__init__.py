from jobboard.models.account import Account, Role, EMPLOYER_FIELDS

__all__ = ["Account", "Role", "EMPLOYER_FIELDS"]
