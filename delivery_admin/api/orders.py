from typing import Dict, List
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from delivery_admin.core.clock import utc_now
from delivery_admin.core.database import get_db
from delivery_admin.repositories.order import OrderRepository
from delivery_admin.services.order import OrderService
from delivery_admin.schemas.order import OrderActions, OrderRecord, StatusChange

router = APIRouter(prefix="/orders", tags=["orders"])


def get_clock():
    return utc_now


def get_order_service(
    db: AsyncSession = Depends(get_db),
    clock=Depends(get_clock)
) -> OrderService:
    return OrderService(OrderRepository(db), clock=clock)


@router.get("", response_model=List[OrderRecord])
async def list_orders(
    status: str = Query("all", description="Order status or 'all'"),
    service: OrderService = Depends(get_order_service)
) -> List[OrderRecord]:
    return await service.list_orders(status)


@router.get("/counts", response_model=Dict[str, int])
async def count_orders(service: OrderService = Depends(get_order_service)) -> Dict[str, int]:
    return await service.count_orders()


@router.get("/{order_id}", response_model=OrderRecord)
async def get_order(
    order_id: str,
    service: OrderService = Depends(get_order_service)
) -> OrderRecord:
    return await service.get_order(order_id)


@router.get("/{order_id}/actions", response_model=OrderActions)
async def get_order_actions(
    order_id: str,
    service: OrderService = Depends(get_order_service)
) -> OrderActions:
    return await service.get_actions(order_id)


@router.post("/{order_id}/advance", response_model=OrderRecord)
async def advance_order(
    order_id: str,
    service: OrderService = Depends(get_order_service)
) -> OrderRecord:
    return await service.advance_order(order_id)


@router.post("/{order_id}/cancel", response_model=OrderRecord)
async def cancel_order(
    order_id: str,
    service: OrderService = Depends(get_order_service)
) -> OrderRecord:
    return await service.cancel_order(order_id)


@router.patch("/{order_id}/status", response_model=OrderRecord)
async def change_order_status(
    order_id: str,
    change: StatusChange,
    service: OrderService = Depends(get_order_service)
) -> OrderRecord:
    return await service.change_status(order_id, change.status)
