import logging
from datetime import tzinfo
from typing import Dict, List, Optional, Union

from delivery_admin.core.clock import Clock, utc_now
from delivery_admin.core.config import settings
from delivery_admin.exceptions import InvalidTransition, OrderNotFoundError
from delivery_admin.models.order import Order, OrderStatus
from delivery_admin.repositories.order import OrderRepository
from delivery_admin.schemas.order import DashboardSummary, OrderActions, OrderRecord
from delivery_admin.services import workflow

logger = logging.getLogger(__name__)


class OrderService:
    def __init__(
        self,
        repository: OrderRepository,
        clock: Clock = utc_now,
        tz: Optional[tzinfo] = None
    ) -> None:
        self.repository = repository
        self.clock = clock
        self.tz = tz if tz is not None else settings.tzinfo

    async def list_orders(self, status: Union[OrderStatus, str] = workflow.ALL) -> List[OrderRecord]:
        orders = [OrderRecord.model_validate(order) for order in await self.repository.list()]
        return workflow.filter_by_status(orders, status)

    async def count_orders(self) -> Dict[str, int]:
        orders = await self.list_orders()
        counts = {status.value: count for status, count in workflow.count_by_status(orders).items()}
        return {workflow.ALL: len(orders), **counts}

    async def get_order(self, order_id: str) -> OrderRecord:
        return OrderRecord.model_validate(await self._fetch(order_id))

    async def get_actions(self, order_id: str) -> OrderActions:
        return workflow.available_actions(await self.get_order(order_id))

    async def change_status(self, order_id: str, target: OrderStatus) -> OrderRecord:
        # validate against the stored state, not whatever the caller last saw
        stored = await self._fetch(order_id)
        current = OrderRecord.model_validate(stored)

        try:
            updated = workflow.apply_transition(current, target)
        except InvalidTransition:
            logger.warning(f"Rejected status change for order {order_id}: {current.status.value} -> {target.value}")
            raise

        await self.repository.update_status(stored, updated.status)
        logger.info(f"Order {order_id} status changed: {current.status.value} -> {updated.status.value}")

        return OrderRecord.model_validate(stored)

    async def advance_order(self, order_id: str) -> OrderRecord:
        current = await self.get_order(order_id)
        target = workflow.next_status(current.status)
        if target is None:
            logger.warning(f"Order {order_id} is {current.status.value} and cannot advance")
            raise InvalidTransition(current.status, None)
        return await self.change_status(order_id, target)

    async def cancel_order(self, order_id: str) -> OrderRecord:
        return await self.change_status(order_id, OrderStatus.CANCELLED)

    async def get_summary(self) -> DashboardSummary:
        now = self.clock()
        orders = await self.list_orders()
        summary = workflow.summarize(orders, now, self.tz)

        return DashboardSummary(
            **summary.model_dump(),
            currency=settings.currency,
            timezone=str(self.tz),
            as_of=now.astimezone(self.tz)
        )

    async def _fetch(self, order_id: str) -> Order:
        order = await self.repository.get_by_id(order_id)
        if not order:
            raise OrderNotFoundError(order_id)
        return order
