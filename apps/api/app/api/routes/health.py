from fastapi import APIRouter

from app.core.config import settings

router = APIRouter(tags=["health"])


@router.get("/health", summary="Health")
def health() -> dict[str, object]:
    return {"ok": True, "service": settings.app_name}
