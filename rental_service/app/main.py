# app/main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import Base, rental_engine
from shared.helpers.exception_handler import setup_exception_handlers
from shared.wrappers.response_wrapper import JsonResponseMiddleware

from .models.parties import owners, tenants
from .models.properties import properties
from .models.contracts import (
    contracts, payments, deleted_payments, contract_renewals, contract_templates)
from .router.parties import owners_router, tenants_router
from .router.properties import properties_router
from .router.contracts import (
    contract_documents_router,
    contract_renewals_router,
    contract_templates_router,
    contracts_router,
    deleted_payments_router,
    payments_router,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
)

# Create tables
Base.metadata.create_all(bind=rental_engine)

app = FastAPI(title="Rental Service API")

origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# JSON envelope, HTML/PDF responses pass through
app.add_middleware(JsonResponseMiddleware)

setup_exception_handlers(app)

# Routers
app.include_router(owners_router.router)
app.include_router(tenants_router.router)
app.include_router(properties_router.router)
# document routes before the generic /api/contracts/{id} ones
app.include_router(contract_documents_router.router)
app.include_router(contracts_router.router)
app.include_router(payments_router.router)
app.include_router(deleted_payments_router.router)
app.include_router(contract_renewals_router.router)
app.include_router(contract_templates_router.router)


@app.get("/api/health")
def health():
    return {"status": "healthy"}
