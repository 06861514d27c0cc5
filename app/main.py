from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
import logging

# Import database components
from app.database.database import async_engine, AsyncSessionLocal, create_tables

# Import accounting store
from app.modules.accounting.store import AccountingStore

# Import routers
from app.modules.accounting.router import router as accounting_router
from app.modules.company.router import company_router
from app.modules.dashboard.router import router as dashboard_router
from app.modules.invoices.router import router as invoices_router
from app.modules.ledger.router import router as ledger_router
from app.modules.locations.router import router as locations_router
from app.modules.parties.router import router as parties_router

from app.core.config import settings

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

# FastAPI app
app = FastAPI(
    title="GST Ledger API",
    description="GST invoicing, party directory and party ledger for small businesses",
    version="1.0.0",
    docs_url="/docs" if settings.ENVIRONMENT != "production" else None,
    redoc_url="/redoc" if settings.ENVIRONMENT != "production" else None
)

# Add middleware
app.add_middleware(GZipMiddleware, minimum_size=1000)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Add your frontend URLs
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(locations_router)  # Public reference data
app.include_router(company_router)
app.include_router(parties_router)
app.include_router(invoices_router)
app.include_router(ledger_router)
app.include_router(dashboard_router)
app.include_router(accounting_router)


@app.get("/")
async def read_root():
    return {
        "message": "GST Ledger API is running",
        "version": "1.0.0",
        "environment": settings.ENVIRONMENT
    }


@app.get("/health")
async def health_check():
    store = getattr(app.state, "accounting_store", None)
    return {
        "status": "healthy" if store is not None and store.last_error is None else "degraded",
        "environment": settings.ENVIRONMENT,
        "loading": store.loading if store is not None else True
    }


@app.on_event("startup")
async def startup_event():
    logger.info("GST Ledger API starting up...")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Debug mode: {settings.DEBUG}")

    # No migrations in this service; create missing tables when allowed
    if settings.CREATE_TABLES_ON_STARTUP:
        try:
            await create_tables(async_engine)
        except Exception as e:
            logger.warning(f"Table creation skipped or failed: {e}")

    store = AccountingStore(AsyncSessionLocal)
    await store.load_all()
    if store.last_error:
        logger.error(f"Accounting data not loaded: {store.last_error}")
    app.state.accounting_store = store


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("GST Ledger API shutting down...")
    await async_engine.dispose()
