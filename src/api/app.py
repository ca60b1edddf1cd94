"""FastAPI application serving the rent ledger."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.ledger import router as ledger_router
from src.services.config import get_settings
from src.services.locale_service import get_locale_info

logger = logging.getLogger(__name__)

settings = get_settings()

app = FastAPI(
    title=settings.api_title,
    description="Rent ledger reconciliation for the property-management dashboard",
    version=settings.api_version,
)

# Dashboard frontend is served from another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ledger_router)


@app.get("/health")
async def health_check() -> dict:
    """Health check endpoint for monitoring."""
    return {"status": "ok"}


@app.get("/api/locale")
async def locale_info() -> dict:
    """Locale, currency code and symbol used for formatted reports."""
    return get_locale_info()


__all__ = ["app"]
