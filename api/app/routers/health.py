"""
Health Check Endpoints
"""
from fastapi import APIRouter, Depends, Request

from app.utils.mongodb import get_mongodb

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check"""
    return {"status": "healthy", "service": "wanderlist-api"}


@router.get("/health/ready")
async def readiness_check(
    request: Request,
    mongodb = Depends(get_mongodb),
):
    """
    Readiness check - verifies the document store and the destination catalog
    """
    catalog = getattr(request.app.state, "catalog", None)
    checks = {
        "mongodb": False,
        "catalog": catalog is not None and len(catalog) > 0,
    }

    # Check MongoDB
    try:
        await mongodb.command("ping")
        checks["mongodb"] = True
    except Exception as e:
        checks["mongodb_error"] = str(e)

    # Overall status
    all_healthy = all([checks["mongodb"], checks["catalog"]])

    return {
        "status": "ready" if all_healthy else "degraded",
        "checks": checks
    }


@router.get("/health/live")
async def liveness_check():
    """Liveness check - is the service running"""
    return {"status": "alive"}
