"""Session token issuing/verification and the bearer auth dependency."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from autostore.core.config import SecuritySettings
from autostore.interfaces.http.deps.container import get_container
from autostore.schemas import TokenData

security = HTTPBearer(auto_error=False)


class InvalidSessionError(Exception):
    """Raised for malformed, unsigned, expired or tampered tokens."""


class SessionIssuer:
    """Signs and verifies self-contained, time-limited session tokens."""

    def __init__(self, secret_key: str, *, algorithm: str = "HS256", expire_minutes: int = 60) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._lifetime = timedelta(minutes=expire_minutes)

    @classmethod
    def from_settings(cls, settings: SecuritySettings) -> "SessionIssuer":
        return cls(
            settings.secret_key,
            algorithm=settings.algorithm,
            expire_minutes=settings.access_token_expire_minutes,
        )

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def issue(self, account_id: str, username: str, *, issued_at: Optional[datetime] = None) -> str:
        issued = issued_at or datetime.now(timezone.utc)
        payload = {
            "sub": account_id,
            "username": username,
            "iat": int(issued.timestamp()),
            "exp": int((issued + self._lifetime).timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenData:
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError as exc:
            raise InvalidSessionError(str(exc)) from exc

        account_id = payload.get("sub")
        username = payload.get("username")
        issued_at = payload.get("iat")
        expires_at = payload.get("exp")
        if not all([account_id, username, issued_at, expires_at]):
            raise InvalidSessionError("token is missing required claims")
        try:
            return TokenData(
                account_id=str(account_id),
                username=str(username),
                issued_at=datetime.fromtimestamp(int(issued_at), tz=timezone.utc),
                expires_at=datetime.fromtimestamp(int(expires_at), tz=timezone.utc),
            )
        except (TypeError, ValueError, OverflowError) as exc:
            raise InvalidSessionError("token claims are malformed") from exc


def get_session_issuer(container=Depends(get_container)) -> SessionIssuer:
    return container.session_issuer


async def get_current_account(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    issuer: SessionIssuer = Depends(get_session_issuer),
) -> TokenData:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return issuer.verify(credentials.credentials)
    except InvalidSessionError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Invalid or expired token") from exc
