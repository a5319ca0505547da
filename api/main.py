"""
WashX — FastAPI Backend
Laundry order management: customers, staff, pricing catalog, slots, orders, manifests.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from db.database import engine, Base, SessionLocal
from routers import orders, customers, staff, catalog, slots, reference, dashboard, reports
from services.errors import WashError
from services.seed import seed_reference_data

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events."""
    # Startup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    if settings.seed_on_startup:
        async with SessionLocal() as session:
            await seed_reference_data(session)
    logger.info("WashX API starting...")
    yield
    # Shutdown
    await engine.dispose()
    logger.info("WashX API shut down.")


app = FastAPI(
    title="WashX Laundry API",
    description="Order management backend for a laundry pickup and delivery service",
    version="1.0.0",
    lifespan=lifespan,
)

# ── CORS ───────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Errors ─────────────────────────────────────────────────
@app.exception_handler(WashError)
async def wash_error_handler(request: Request, exc: WashError):
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


# ── Routers ────────────────────────────────────────────────
app.include_router(reference.router, prefix="/api", tags=["Reference Data"])
app.include_router(customers.router, prefix="/api/customers", tags=["Customers"])
app.include_router(staff.router, prefix="/api/staff", tags=["Staff"])
app.include_router(catalog.router, prefix="/api/services", tags=["Services"])
app.include_router(slots.router, prefix="/api/slots", tags=["Slots"])
app.include_router(orders.router, prefix="/api/orders", tags=["Orders"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["Dashboard"])
app.include_router(reports.router, prefix="/api/reports", tags=["Manifests"])


@app.get("/health")
async def health_check():
    return {"status": "healthy", "service": "WashX API"}
