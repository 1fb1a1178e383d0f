"""Health check routes."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@router.get("/ready")
async def readiness_check(request: Request) -> dict[str, str]:
    """Readiness check endpoint.

    Reports ``degraded`` while the last snapshot write has failed; the
    service keeps serving from memory either way.
    """
    writer = getattr(request.app.state, "snapshot_writer", None)
    if writer is not None and writer.last_write_failed:
        return {"status": "degraded"}
    return {"status": "ready"}
