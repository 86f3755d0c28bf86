from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from libs.result import Error
from src.api.error import ClientError, ServerError
from src.api.utils.client_metadata import get_client_metadata
from src.api.utils.cookies import (
    clear_refresh_cookie,
    clear_refresh_cookie_headers,
    get_refresh_cookie_options,
    set_refresh_cookie,
)
from src.app.services.token_issuer import TokenIssuer
from src.app.use_cases.auth import (
    AuthErrorCode,
    ExtendSessionCommand,
    ExtendSessionUseCase,
    LoginCommand,
    LoginUseCase,
    LogoutCommand,
    LogoutUseCase,
)
from src.depends import (
    get_current_user,
    get_extend_session_use_case,
    get_login_use_case,
    get_logout_use_case,
    get_token_issuer,
)
from src.domain.base import utcnow

router = APIRouter(prefix="/auth", tags=["Authentication"])

ERROR_STATUS = {
    AuthErrorCode.MISSING_CREDENTIALS.value: status.HTTP_400_BAD_REQUEST,
    AuthErrorCode.INVALID_CREDENTIALS.value: status.HTTP_401_UNAUTHORIZED,
    AuthErrorCode.REFRESH_MISSING.value: status.HTTP_401_UNAUTHORIZED,
    AuthErrorCode.REFRESH_INVALID.value: status.HTTP_401_UNAUTHORIZED,
}


def raise_for_error(error: Error, headers: Optional[dict] = None):
    status_code = ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error, headers=headers)
    raise ClientError(error, status_code=status_code, headers=headers)


def success(message: str, data) -> dict:
    return {
        "success": True,
        "message": message,
        "data": data,
        "timestamp": utcnow().isoformat() + "Z",
    }


def cookie_options(issuer: TokenIssuer) -> dict:
    return get_refresh_cookie_options(
        ApplicationConfig.is_production(),
        issuer.refresh_token_max_age,
        ApplicationConfig.COOKIE_PATH,
    )


class LoginRequest(BaseModel):
    """
    Login HTTP request payload

    Fields are optional so that missing values reach the use case and come
    back as AUTH_MISSING_CREDENTIALS rather than a validation error.
    """

    username: Optional[str] = Field(None, description="Employee or customer email")
    password: Optional[str] = Field(None, description="Password")


@router.post("/login", status_code=status.HTTP_200_OK)
async def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    use_case: LoginUseCase = Depends(get_login_use_case),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    """
    Login

    Authenticates an employee or customer, returns an access token and sets
    the refresh token cookie.

    Raises:
        - 400 Bad Request: username or password missing
        - 401 Unauthorized: invalid credentials (same response for every cause)
        - 500 Internal Server Error: Server error
    """
    command = LoginCommand(
        username=body.username,
        password=body.password,
        client=get_client_metadata(request.headers, request.client.host if request.client else None),
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    value = result.value
    set_refresh_cookie(
        response,
        ApplicationConfig.REFRESH_COOKIE_NAME,
        value.refresh_token,
        cookie_options(issuer),
    )
    return success("Login successful", value.model_dump(by_alias=True))


@router.post("/extend-session", status_code=status.HTTP_200_OK)
async def extend_session(
    request: Request,
    response: Response,
    use_case: ExtendSessionUseCase = Depends(get_extend_session_use_case),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    """
    Extend Session

    Exchanges the refresh token cookie for a new access token. The refresh
    token is rotated and the old one stops working.

    Raises:
        - 401 Unauthorized: cookie missing, or session unknown, revoked or expired
        - 500 Internal Server Error: Server error
    """
    command = ExtendSessionCommand(
        refresh_token=request.cookies.get(ApplicationConfig.REFRESH_COOKIE_NAME),
        client=get_client_metadata(request.headers, request.client.host if request.client else None),
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(result.error)

    value = result.value
    set_refresh_cookie(
        response,
        ApplicationConfig.REFRESH_COOKIE_NAME,
        value.refresh_token,
        cookie_options(issuer),
    )
    return success("Session extended", value.model_dump(by_alias=True))


@router.post("/logout", status_code=status.HTTP_200_OK)
async def logout(
    request: Request,
    response: Response,
    use_case: LogoutUseCase = Depends(get_logout_use_case),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    """
    Logout

    Revokes the session behind the refresh token cookie and clears it.
    Calling it without a cookie, or twice, still succeeds. The cookie is
    cleared on a server error too.

    Raises:
        - 500 Internal Server Error: Server error
    """
    command = LogoutCommand(
        refresh_token=request.cookies.get(ApplicationConfig.REFRESH_COOKIE_NAME),
        client=get_client_metadata(request.headers, request.client.host if request.client else None),
    )
    result = await use_case.execute(command)

    if result.is_err():
        raise_for_error(
            result.error,
            headers=clear_refresh_cookie_headers(
                ApplicationConfig.REFRESH_COOKIE_NAME, cookie_options(issuer)
            ),
        )

    clear_refresh_cookie(response, ApplicationConfig.REFRESH_COOKIE_NAME, cookie_options(issuer))
    return success("Logout successful", result.value.model_dump())


@router.get("/me", status_code=status.HTTP_200_OK)
async def me(current_user: dict = Depends(get_current_user)):
    """Claims of the presented access token"""
    return success(
        "Authenticated",
        {
            "id": current_user.get("user_id"),
            "type": current_user.get("type"),
            "role": current_user.get("role"),
            "email": current_user.get("email"),
        },
    )
