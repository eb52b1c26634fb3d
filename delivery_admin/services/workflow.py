"""Order status workflow and dashboard aggregates.

Everything here is a pure function over order snapshots: nothing is read from
or written to the store, and the current time is always passed in.

The happy path is the explicit ``STATUS_FLOW`` sequence. ``cancelled`` is a
side branch reachable from every status that is not terminal. ``delivered``
and ``cancelled`` are terminal.

"Today" is evaluated on calendar dates. When ``summarize`` receives a ``tz``,
``now`` and every aware ``created_at`` are converted into it first and naive
values are assumed to already be in it. Without ``tz``, the zone carried by
``now`` is used.
"""
from datetime import date, datetime, tzinfo
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Union

from delivery_admin.exceptions import InvalidTransition
from delivery_admin.models.order import OrderStatus, parse_status
from delivery_admin.schemas.order import OrderActions, OrderRecord, OrderSummary

__all__ = [
    "ALL",
    "STATUS_FLOW",
    "TERMINAL_STATUSES",
    "apply_transition",
    "available_actions",
    "can_transition",
    "count_by_status",
    "filter_by_status",
    "is_terminal",
    "next_status",
    "parse_status",
    "summarize",
]

ALL = "all"

STATUS_FLOW: tuple[OrderStatus, ...] = (
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.DELIVERING,
    OrderStatus.DELIVERED,
)

TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})


def next_status(current: OrderStatus) -> Optional[OrderStatus]:
    if current not in STATUS_FLOW:
        return None
    index = STATUS_FLOW.index(current)
    if index == len(STATUS_FLOW) - 1:
        return None
    return STATUS_FLOW[index + 1]


def is_terminal(status: OrderStatus) -> bool:
    return status in TERMINAL_STATUSES


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    if target == OrderStatus.CANCELLED:
        return not is_terminal(current)
    return target is not None and target == next_status(current)


def apply_transition(order: OrderRecord, target: OrderStatus) -> OrderRecord:
    """Return a copy of ``order`` moved to ``target``.

    The input is never modified. Raises InvalidTransition when the move is not
    allowed from the order's current status.
    """
    if not can_transition(order.status, target):
        raise InvalidTransition(order.status, target)
    return order.model_copy(update={"status": target})


def available_actions(order: OrderRecord) -> OrderActions:
    upcoming = next_status(order.status)
    return OrderActions(
        order_id=order.id,
        status=order.status,
        next_status=upcoming,
        can_advance=upcoming is not None,
        can_cancel=can_transition(order.status, OrderStatus.CANCELLED),
    )


def count_by_status(orders: Iterable[OrderRecord]) -> Dict[OrderStatus, int]:
    counts = {status: 0 for status in OrderStatus}
    for order in orders:
        counts[order.status] += 1
    return counts


def _local_date(moment: datetime, tz: Optional[tzinfo]) -> date:
    if tz is not None and moment.tzinfo is not None:
        moment = moment.astimezone(tz)
    return moment.date()


def summarize(
    orders: Sequence[OrderRecord],
    now: datetime,
    tz: Optional[tzinfo] = None,
) -> OrderSummary:
    zone = tz if tz is not None else now.tzinfo
    today = _local_date(now, zone)

    counts = {status: 0 for status in OrderStatus}
    delivered_today = 0
    revenue = Decimal("0.00")

    for order in orders:
        counts[order.status] += 1
        if order.status != OrderStatus.DELIVERED:
            continue
        if _local_date(order.created_at, zone) == today:
            delivered_today += 1
            revenue += order.total

    return OrderSummary(
        count_by_status=counts,
        total_orders=len(orders),
        delivered_today=delivered_today,
        today_revenue=revenue,
    )


def filter_by_status(
    orders: Sequence[OrderRecord],
    status: Union[OrderStatus, str],
) -> List[OrderRecord]:
    if status == ALL:
        return list(orders)
    wanted = parse_status(status)
    return [order for order in orders if order.status == wanted]
