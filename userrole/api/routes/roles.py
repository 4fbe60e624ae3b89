"""Role administration routes."""
from fastapi import APIRouter, Depends, status

from ...core.logging import BusinessLogger
from ...core.security import RequestContext, get_account_service, require_admin
from ...schemas.role import RoleCreate, RoleCreatedResponse, RoleListResponse
from ...services.account import AccountService

router = APIRouter(prefix="/roles", tags=["Roles"])


@router.get("/getAllRoles", response_model=RoleListResponse)
async def get_all_roles(
    context: RequestContext = Depends(require_admin),
    accounts: AccountService = Depends(get_account_service),
):
    """Get all roles (admin only)."""
    roles = await accounts.list_roles()
    return RoleListResponse(count=len(roles), roles=roles)


@router.post(
    "/createRole",
    response_model=RoleCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_role(
    role_create: RoleCreate,
    context: RequestContext = Depends(require_admin),
    accounts: AccountService = Depends(get_account_service),
):
    """Create a uniquely named role (admin only)."""
    role = await accounts.create_role(role_create.name)

    BusinessLogger.log_role_created(
        role_id=str(role.id),
        name=role.name,
        created_by=str(context.user.id),
    )

    return RoleCreatedResponse(message="Role Saved Successfully", role=role)
