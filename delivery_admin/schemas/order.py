from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Optional, Tuple
from pydantic import BaseModel, computed_field, field_validator

from delivery_admin.models.order import OrderStatus, PaymentMethod, parse_status


class OrderItemRecord(BaseModel):
    product_name: str
    quantity: int
    unit_price: Decimal
    total_price: Decimal

    model_config = {"from_attributes": True, "frozen": True}


class CustomerRecord(BaseModel):
    id: str
    name: str
    phone: str
    address: str | None = None

    model_config = {"from_attributes": True, "frozen": True}


class OrderRecord(BaseModel):
    """Immutable snapshot of an order as read from the store."""

    id: str
    status: OrderStatus
    total: Decimal
    created_at: datetime
    customer: CustomerRecord | None = None
    items: Tuple[OrderItemRecord, ...] = ()
    subtotal: Decimal = Decimal("0.00")
    delivery_fee: Decimal = Decimal("0.00")
    discount: Decimal = Decimal("0.00")
    payment_method: PaymentMethod | None = None
    delivery_address: str | None = None
    notes: str | None = None

    model_config = {"from_attributes": True, "frozen": True}

    @field_validator("status", mode="before")
    @classmethod
    def validate_status(cls, v: object) -> OrderStatus:
        return parse_status(v)

    @field_validator("created_at")
    @classmethod
    def validate_created_at(cls, v: datetime) -> datetime:
        # the store writes UTC; some backends hand it back without tzinfo
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @computed_field
    @property
    def reference(self) -> str:
        return self.id[:8].upper()


class OrderActions(BaseModel):
    order_id: str
    status: OrderStatus
    next_status: Optional[OrderStatus] = None
    can_advance: bool
    can_cancel: bool


class StatusChange(BaseModel):
    status: OrderStatus


class OrderSummary(BaseModel):
    count_by_status: Dict[OrderStatus, int]
    total_orders: int
    delivered_today: int
    today_revenue: Decimal


class DashboardSummary(OrderSummary):
    currency: str
    timezone: str
    as_of: datetime
