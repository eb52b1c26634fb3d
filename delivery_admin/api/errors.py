import logging
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from delivery_admin.exceptions import InvalidTransition, OrderNotFoundError, UnknownStatus

logger = logging.getLogger(__name__)


async def order_not_found_handler(request: Request, exc: OrderNotFoundError) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)}
    )


async def invalid_transition_handler(request: Request, exc: InvalidTransition) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={
            "detail": str(exc),
            "current": exc.current.value,
            "target": exc.target.value if exc.target is not None else None
        }
    )


async def unknown_status_handler(request: Request, exc: UnknownStatus) -> JSONResponse:
    logger.warning(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc)}
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(OrderNotFoundError, order_not_found_handler)
    app.add_exception_handler(InvalidTransition, invalid_transition_handler)
    app.add_exception_handler(UnknownStatus, unknown_status_handler)
