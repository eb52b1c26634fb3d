from delivery_admin.core.database import Base
from delivery_admin.models.order import Customer, Order, OrderItem, OrderStatus, PaymentMethod

__all__ = ["Base", "Customer", "Order", "OrderItem", "OrderStatus", "PaymentMethod"]
