# =============================================================================
# app/routers/health.py - Health Check Endpoint
# =============================================================================
# Provides the health check used by monitoring and load balancers.
# =============================================================================

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool
    message: str
    db: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """
    Health check endpoint.

    Runs SELECT 1 against the database. A failed probe is reported through
    the normal error envelope (500 INTERNAL_ERROR).
    """
    await request.app.state.database.ping()

    return HealthResponse(ok=True, message="Server is healthy", db="connected")
