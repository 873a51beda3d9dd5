import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from walletauth_sdk.client import PrivyClient

from app.core.auth import require_bearer_token
from app.core.openapi import COMMON_ERROR_RESPONSES
from app.modules.custody.service import delete_user, find_user_by_email, get_custody_client
from app.schemas.users import (
    CheckUserByEmailRequest,
    CheckUserByEmailResponse,
    DeleteUserRequest,
    DeleteUserResponse,
    UserSummary,
)

router = APIRouter(prefix="/api", tags=["users"])
Custody = Annotated[PrivyClient, Depends(get_custody_client)]
logger = logging.getLogger("walletauth.users")


@router.post(
    "/check-user-by-email",
    response_model=CheckUserByEmailResponse,
    summary="Check User By Email",
    description="Looks up a custody user by email address and returns its first linked wallet.",
    responses=COMMON_ERROR_RESPONSES,
    dependencies=[Depends(require_bearer_token)],
)
def check_user_by_email(payload: CheckUserByEmailRequest, custody: Custody) -> CheckUserByEmailResponse:
    user = find_user_by_email(custody, payload.email)
    return CheckUserByEmailResponse(user=UserSummary(**user))


@router.post(
    "/delete-user",
    response_model=DeleteUserResponse,
    summary="Delete User",
    responses=COMMON_ERROR_RESPONSES,
)
def delete_user_endpoint(payload: DeleteUserRequest, custody: Custody) -> DeleteUserResponse:
    delete_user(custody, payload.user_id)
    logger.info("user_deleted", extra={"event_name": "user_deleted", "user_id": payload.user_id})
    return DeleteUserResponse(message=f"User {payload.user_id} deleted successfully")
