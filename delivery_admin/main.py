from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from delivery_admin.core.logging import setup_logging
from delivery_admin.core.database import engine
from delivery_admin.core.config import settings
from delivery_admin.models import Base
from delivery_admin.api.errors import register_exception_handlers
from delivery_admin.api.orders import router as orders_router
from delivery_admin.api.dashboard import router as dashboard_router
from delivery_admin.api.health import router as health_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    await engine.dispose()


app = FastAPI(
    title="Delivery Admin",
    description="Order workflow and dashboard service for the delivery back office",
    version="0.1.0",
    lifespan=lifespan
)

cors_origins = settings.cors_origins.split(",") if settings.cors_origins else ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(health_router)
app.include_router(orders_router)
app.include_router(dashboard_router)
