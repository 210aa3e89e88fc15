import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import jewelbook.models  # ensure models are registered
from jewelbook.core.config import CORS_ORIGINS
from jewelbook.core.errors import LedgerError, ledger_error_handler
from jewelbook.core.logging_config import setup_logging
from jewelbook.utils.database import engine, Base

from jewelbook.routers import (
    analytics_router,
    company_router,
    customers_router,
    expenses_router,
    items_router,
    payments_router,
    purchases_router,
    sales_router,
)

logger = logging.getLogger("jewelbook")

app = FastAPI(title="JewelBook Ledger API", version="1.0")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Errors
app.add_exception_handler(LedgerError, ledger_error_handler)

# Routers
app.include_router(customers_router.router)
app.include_router(items_router.router)
app.include_router(sales_router.router)
app.include_router(purchases_router.router)
app.include_router(payments_router.router)
app.include_router(expenses_router.router)
app.include_router(company_router.router)
app.include_router(analytics_router.router)


@app.on_event("startup")
def on_startup():
    setup_logging("api")
    # no migrations tool yet; tables are created on boot
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready")


@app.get("/")
def root():
    return {"message": "JewelBook backend is running!!"}
