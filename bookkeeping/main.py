"""
Double-Entry Ledger: FastAPI application.

This is the entry point for the application.
All routers are registered here.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from bookkeeping.config import configure_logging, get_settings
from bookkeeping.exceptions import StoreError
from bookkeeping.api.health import router as health_router
from bookkeeping.api.accounts import router as accounts_router
from bookkeeping.api.transactions import router as transactions_router
from bookkeeping.api.reports import router as reports_router

settings = get_settings()
configure_logging(settings)

logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="A double-entry bookkeeping ledger with financial reports",
)


@app.exception_handler(StoreError)
def store_error_handler(request: Request, exc: StoreError):
    # Details were logged where the failure happened
    return JSONResponse(status_code=500, content={"detail": exc.message})


# Register routers
app.include_router(health_router)
app.include_router(accounts_router)
app.include_router(transactions_router)
app.include_router(reports_router)


def run() -> None:
    """Serve the API with uvicorn on HOST:PORT."""
    import uvicorn

    logger.info("Starting %s on %s:%s",
                settings.APP_NAME, settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
