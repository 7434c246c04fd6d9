"""SQLAlchemy implementation of the account repository."""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from autostore.db.models import User as UserModel
from autostore.modules.accounts.exceptions import AccountAlreadyExistsError
from autostore.modules.accounts.models import Account
from autostore.modules.accounts.repository import AccountRepository


class SqlAccountRepository(AccountRepository):
    """Account repository backed by SQLAlchemy models."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_username(self, username: str) -> Account | None:
        stmt = select(UserModel).where(UserModel.username == username)
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_domain(model)

    async def count_accounts(self) -> int:
        result = await self._session.execute(select(func.count()).select_from(UserModel))
        return int(result.scalar_one())

    async def create_account(self, *, username: str, password_hash: str) -> Account:
        model = UserModel(username=username, password_hash=password_hash)
        self._session.add(model)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            await self._session.rollback()
            raise AccountAlreadyExistsError(f"Username already exists: {username}") from exc
        await self._session.refresh(model)
        account = self._to_domain(model)
        assert account is not None
        return account

    @staticmethod
    def _to_domain(model: UserModel | None) -> Account | None:
        if model is None:
            return None
        return Account(
            id=str(model.id),
            username=model.username,
            password_hash=model.password_hash,
        )
