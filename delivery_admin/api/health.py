from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from delivery_admin.core.config import settings
from delivery_admin.core.database import get_db
from delivery_admin.models.order import Order

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)) -> dict[str, str | int | dict[str, str]]:
    health = {
        "status": "healthy",
        "service": settings.service_name,
        "business_timezone": settings.business_timezone,
        "checks": {}
    }

    try:
        health["orders"] = await db.scalar(select(func.count()).select_from(Order))
        health["checks"]["orders_table"] = "healthy"
    except Exception as e:
        health["checks"]["orders_table"] = f"unhealthy: {str(e)}"
        health["status"] = "unhealthy"

    return health
