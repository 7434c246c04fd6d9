"""Domain services for account management."""

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from autostore.core.crypto import hash_password, verify_password

from .exceptions import AccountAlreadyExistsError
from .models import Account, AccountCreateInput
from .repository import AccountRepository

logger = logging.getLogger(__name__)

# Verified against when the username is unknown.
_DUMMY_HASH = hash_password("autostore-dummy-password")


class AccountService:
    """Encapsulates core account use cases."""

    def __init__(self, repository: AccountRepository) -> None:
        self._repository = repository

    @classmethod
    def with_session(cls, session: AsyncSession) -> "AccountService":
        from autostore.infrastructure.database.repositories import SqlAccountRepository

        return cls(SqlAccountRepository(session))

    async def authenticate(self, username: str, password: str) -> Account | None:
        account = await self._repository.get_by_username(username)
        if account is None:
            verify_password(password, _DUMMY_HASH)
            return None
        if not verify_password(password, account.password_hash):
            return None
        return account

    async def create_account(self, payload: AccountCreateInput) -> Account:
        existing = await self._repository.get_by_username(payload.username)
        if existing is not None:
            raise AccountAlreadyExistsError(f"Username already exists: {payload.username}")

        return await self._repository.create_account(
            username=payload.username,
            password_hash=hash_password(payload.password),
        )

    async def ensure_default_admin(self, username: str, password: str) -> Account | None:
        """Seed the bootstrap admin when the user table is empty.

        Returns the created account, or ``None`` when any user already exists.
        """
        if await self._repository.count_accounts() > 0:
            return None

        try:
            account = await self.create_account(AccountCreateInput(username=username, password=password))
        except AccountAlreadyExistsError:
            # Another worker seeded the table between the count and the insert.
            logger.info("Default admin %s already seeded", username)
            return None
        logger.warning("Default admin created: %s (change the bootstrap password)", username)
        return account
