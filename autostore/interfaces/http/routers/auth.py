"""Authentication endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status

from autostore.core.security import SessionIssuer, get_session_issuer
from autostore.interfaces.http.deps import get_account_service
from autostore.modules.accounts import AccountService
from autostore.schemas import ErrorResponse, LoginRequest, LoginResponse, UserInfo

router = APIRouter()


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Administrator login",
)
async def login(
    payload: LoginRequest,
    account_service: AccountService = Depends(get_account_service),
    issuer: SessionIssuer = Depends(get_session_issuer),
) -> LoginResponse:
    account = await account_service.authenticate(payload.username, payload.password)
    if account is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    token = issuer.issue(account.id, account.username)
    return LoginResponse(token=token, user=UserInfo(username=account.username))
