"""Main FastAPI application."""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from visitswap.api import auth, credits, sites, visits
from visitswap.config import settings
from visitswap.database import LedgerStore
from visitswap.utils.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the ledger store for the lifetime of the process."""
    store = LedgerStore(settings.database_url, echo=settings.environment == "development").open()
    if settings.auto_create_tables:
        store.create_all()
    app.state.store = store
    logger.info(f"VisitSwap API started ({settings.environment})")
    try:
        yield
    finally:
        store.close()


app = FastAPI(
    title="VisitSwap API",
    description="Reciprocal site-visit exchange with a credit ledger",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router)
app.include_router(sites.router)
app.include_router(visits.router)
app.include_router(credits.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "VisitSwap API",
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
