from typing import Annotated

from fastapi import Header, HTTPException, status


def require_bearer_token(authorization: Annotated[str | None, Header()] = None) -> str:
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"code": "AUTH_BEARER_MISSING", "message": "Unauthorized"},
        )
    return authorization.removeprefix("Bearer ")
