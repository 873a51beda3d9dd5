from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CheckUserByEmailRequest(BaseModel):
    email: str = Field(min_length=1)


class UserSummary(BaseModel):
    id: str
    email: str
    wallet: dict[str, Any] | None = None


class CheckUserByEmailResponse(BaseModel):
    success: bool = True
    user: UserSummary


class DeleteUserRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId", min_length=1)


class DeleteUserResponse(BaseModel):
    success: bool = True
    message: str
