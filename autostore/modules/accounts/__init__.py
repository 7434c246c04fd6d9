"""Account domain services and models."""

from .models import Account, AccountCreateInput
from .service import AccountService
from .exceptions import AccountError, AccountAlreadyExistsError

__all__ = [
    "Account",
    "AccountCreateInput",
    "AccountService",
    "AccountError",
    "AccountAlreadyExistsError",
]
