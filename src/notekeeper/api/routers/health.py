from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from notekeeper.api import deps
from notekeeper.services.health import check_db

router = APIRouter(prefix="/health", tags=["health"])

@router.get("/liveness")
async def liveness():
    """The process is up and serving requests."""
    return {"status": "ok"}

@router.get("/readiness")
async def readiness(response: Response, session: AsyncSession = Depends(deps.get_db)):
    """The note store is reachable and migrated; 503 otherwise."""
    if await check_db(session):
        return {"status": "ready"}
    response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {"status": "degraded"}
