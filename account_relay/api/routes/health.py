from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check():
    """Liveness only; does not contact the remote services."""
    return {"status": "healthy"}
