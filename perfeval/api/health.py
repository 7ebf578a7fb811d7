"""Health endpoint."""

from fastapi import APIRouter

from perfeval.database import StoreDep

router = APIRouter()


@router.get("/health")
async def health(store: StoreDep):
    """Health check endpoint."""
    return {
        "status": "ok",
        "database": "ready" if store.initialized else "uninitialized",
    }
