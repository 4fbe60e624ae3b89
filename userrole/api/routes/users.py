"""User account routes."""
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, status

from ...core.exceptions import AuthenticationError
from ...core.logging import BusinessLogger, SecurityLogger
from ...core.security import (
    RequestContext,
    get_account_service,
    get_auth_context,
    require_admin,
)
from ...schemas.auth import (
    AuthorizeStatusRequest,
    AuthResponse,
    SigninRequest,
    SignupRequest,
    UserListResponse,
)
from ...schemas.common import MessageResponse
from ...services.account import AccountService

router = APIRouter(prefix="/users", tags=["Users"])


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def signup(
    fields: SignupRequest,
    accounts: AccountService = Depends(get_account_service),
):
    """Signup a user. The default authorize status is false."""
    result = await accounts.signup(fields)

    BusinessLogger.log_user_signed_up(
        user_id=str(result.user.id),
        user_name=result.user.user_name,
        role_id=str(result.user.role_id) if result.user.role_id else None,
    )

    return AuthResponse(
        message="User Saved Successfully",
        user=result.user,
        token=result.token,
    )


@router.post("/signin", response_model=AuthResponse)
async def signin(
    request: Request,
    credentials: Optional[SigninRequest] = None,
    accounts: AccountService = Depends(get_account_service),
):
    """Sign in with user name and password. Every signin opens a new session."""
    credentials = credentials or SigninRequest()
    client_ip = request.client.host if request.client else None
    user_agent = request.headers.get("user-agent")

    try:
        result = await accounts.signin(credentials.user_name, credentials.password)
    except AuthenticationError as e:
        SecurityLogger.log_login_attempt(
            user_name=credentials.user_name,
            success=False,
            ip_address=client_ip,
            user_agent=user_agent,
            failure_reason=e.error_code,
        )
        raise

    SecurityLogger.log_login_attempt(
        user_name=credentials.user_name,
        success=True,
        ip_address=client_ip,
        user_agent=user_agent,
    )

    return AuthResponse(
        message="User sign in successfully",
        user=result.user,
        token=result.token,
    )


@router.post("/signout", response_model=MessageResponse)
async def signout(
    context: RequestContext = Depends(get_auth_context),
    accounts: AccountService = Depends(get_account_service),
):
    """Sign out the presented token. Other sessions stay signed in."""
    await accounts.signout(context.user, context.token)

    BusinessLogger.log_user_signed_out(user_id=str(context.user.id))

    return MessageResponse(message="Signout Successful")


@router.get("/getUsersByAuthType", response_model=UserListResponse)
async def get_users_by_auth_type(
    auth_type: str = Query(..., alias="authType", description="true, false or all"),
    context: RequestContext = Depends(require_admin),
    accounts: AccountService = Depends(get_account_service),
):
    """Get a list of users by authorize type (admin only)."""
    users = await accounts.list_users_by_auth_type(auth_type)
    return UserListResponse(count=len(users), users=users)


@router.post("/changeAuthorizeStatus", response_model=MessageResponse)
async def change_authorize_status(
    change: Optional[AuthorizeStatusRequest] = None,
    context: RequestContext = Depends(require_admin),
    accounts: AccountService = Depends(get_account_service),
):
    """Change a user's authorize status (admin only)."""
    change = change or AuthorizeStatusRequest()
    user = await accounts.change_authorize_status(change.user_id, change.authorize)

    BusinessLogger.log_authorize_status_changed(
        user_id=str(user.id),
        authorize=user.authorize,
        changed_by=str(context.user.id),
    )

    return MessageResponse(message="authorize status is changed successfully")
