"""Health check endpoint."""

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Liveness probe; the engine has no backing services to check."""
    return {
        "status": "ok",
        "service": "Handoff Assignment Engine",
    }
