# backend/tugas/api/endpoints/health.py
import logging

from fastapi import APIRouter, Depends

from tugas.db.mongo import get_db

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check(db=Depends(get_db)):
    """
    Liveness plus a MongoDB ping, for load balancers and uptime checks.
    Always 200; a failed ping shows up as status "degraded".
    """
    mongo_ok = False
    mongo_error = None

    try:
        await db.command("ping")
        mongo_ok = True
    except Exception as e:
        logger.warning("MongoDB ping failed: %s", e)
        mongo_error = str(e)

    return {
        "status": "ok" if mongo_ok else "degraded",
        "mongo": mongo_ok,
        "mongo_error": mongo_error,
    }
