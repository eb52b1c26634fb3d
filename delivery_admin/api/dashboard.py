from fastapi import APIRouter, Depends

from delivery_admin.api.orders import get_order_service
from delivery_admin.services.order import OrderService
from delivery_admin.schemas.order import DashboardSummary

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/summary", response_model=DashboardSummary)
async def get_summary(service: OrderService = Depends(get_order_service)) -> DashboardSummary:
    return await service.get_summary()
