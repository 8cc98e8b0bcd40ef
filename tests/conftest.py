import json
import os
from datetime import date
from decimal import Decimal

# settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DATE_COMPENSATION_DAYS"] = "1"
os.environ["CIVIL_TIMEZONE"] = "America/Sao_Paulo"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from shared.core.auth import create_access_token
from shared.core.database import Base, RentalSessionLocal, rental_engine
from rental_service.app.main import app
from rental_service.app.models.parties.owners import Owner
from rental_service.app.models.parties.tenants import Tenant
from rental_service.app.models.properties.properties import Property
from rental_service.app.models.contracts.contracts import Contract
from rental_service.app.models.contracts.contract_templates import ContractTemplate
from rental_service.app.crud.contracts.contracts_crud import generate_payments

ADDRESS = {
    "zipCode": "01000-000",
    "street": "Rua A",
    "number": "10",
    "neighborhood": "Centro",
    "city": "São Paulo",
    "state": "SP",
}


@pytest.fixture(autouse=True)
def reset_tables():
    Base.metadata.drop_all(bind=rental_engine)
    Base.metadata.create_all(bind=rental_engine)
    yield


@pytest.fixture
def db():
    session = RentalSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def admin_headers():
    token = create_access_token(
        {"user_id": "1", "name": "Admin", "role": "admin"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user_headers():
    token = create_access_token(
        {"user_id": "2", "name": "Operador", "role": "user"})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def contract(db):
    """One active contract with owner, tenant (with guarantor) and property."""
    owner = Owner(
        name="Ana Silva", document="111.222.333-44", rg="12.345-6",
        email="ana@example.com", phone="(11) 91234-5678",
        nationality="brasileira", profession="professora",
        marital_status="solteira", address=json.dumps(ADDRESS),
    )
    tenant = Tenant(
        name="Bruno Costa", document="555.666.777-88",
        email="bruno@example.com", phone="(11) 99876-5432",
        address=json.dumps(ADDRESS),
        guarantor=json.dumps({"name": "Carla Souza",
                              "document": "999.888.777-66"}),
    )
    db.add_all([owner, tenant])
    db.flush()

    prop = Property(
        owner_id=owner.id, name="Apto 12", type="apartamento",
        address=json.dumps(ADDRESS), rent_value=Decimal("1000.00"),
        bedrooms=2, bathrooms=1, area=60, available_for_rent=False,
    )
    db.add(prop)
    db.flush()

    row = Contract(
        owner_id=owner.id, tenant_id=tenant.id, property_id=prop.id,
        start_date=date(2024, 3, 15), end_date=date(2025, 3, 15),
        duration=12, rent_value=Decimal("1000.00"),
        first_payment_date=date(2024, 4, 10), status="ativo",
    )
    db.add(row)
    db.flush()
    generate_payments(db, row)
    db.commit()
    db.refresh(row)
    return row


@pytest.fixture
def residential_template(db):
    template = ContractTemplate(
        name="Residencial",
        type="residential",
        content="<p>Locador: {{owner.name}}, CPF: {{owner.document}}{{owner.rg}}</p>"
                "<p>Locatário: {{tenant.name}}</p>"
                "<p>Fiador: {{guarantor.name}}</p>{{PAGINA}}",
        is_active=True,
    )
    db.add(template)
    db.commit()
    db.refresh(template)
    return template
