from typing import Any, Optional


class DomainException(Exception):
    pass


class InvalidTransition(DomainException):
    """Requested status change is not allowed by the order workflow."""

    def __init__(self, current, target) -> None:
        self.current = current
        self.target = target
        target_label = target.value if target is not None else "none"
        super().__init__(f"Cannot move order from {current.value} to {target_label}")


class UnknownStatus(DomainException):
    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Unknown order status: {value!r}")


class OrderNotFoundError(DomainException):
    def __init__(self, order_id: str, detail: Optional[str] = None) -> None:
        self.order_id = order_id
        super().__init__(detail or f"Order {order_id} not found")
