import logging
import random
from datetime import date
from decimal import Decimal

from dateutil.relativedelta import relativedelta
from faker import Faker
from sqlalchemy.orm import Session

from shared.core.database import Base, RentalSessionLocal, rental_engine
from shared.helpers.address_helper import encode_address
from rental_service.app.enum.rental_enum import ContractStatus, PropertyType, TemplateType
from rental_service.app.models.parties.owners import Owner
from rental_service.app.models.parties.tenants import Tenant
from rental_service.app.models.properties.properties import Property
from rental_service.app.models.contracts.contracts import Contract
from rental_service.app.models.contracts.payments import Payment
from rental_service.app.models.contracts.contract_renewals import ContractRenewal
from rental_service.app.models.contracts.contract_templates import ContractTemplate
from rental_service.app.crud.contracts.contracts_crud import generate_payments

logger = logging.getLogger(__name__)

fake = Faker("pt_BR")

RESIDENTIAL_TEMPLATE = """<h2 class="ql-align-center">CONTRATO DE LOCAÇÃO RESIDENCIAL Nº {{contract.number}}</h2>
<p class="ql-align-justify"><strong>LOCADOR:</strong> {{owner.name}}, {{owner.nationality}}, {{owner.maritalStatus}}, {{owner.profession}}, CPF: {{owner.document}} {{owner.rg}} {{owner.spouseName}}, {{owner.address}}.</p>
<p class="ql-align-justify"><strong>LOCATÁRIO:</strong> {{tenant.name}}, {{tenant.nationality}}, {{tenant.maritalStatus}}, {{tenant.profession}}, CPF: {{tenant.document}} {{tenant.rg}} {{tenant.spouseName}}, {{tenant.address}}, telefone {{tenant.phone}}, e-mail {{tenant.email}}.</p>
<p class="ql-align-justify"><strong>FIADOR:</strong> {{guarantor.name}} {{guarantor.document}} {{guarantor.rg}} {{guarantor.phone}} {{guarantor.email}} {{guarantor.address}}</p>
<p class="ql-align-justify"><strong>CLÁUSULA 1ª - DO OBJETO:</strong> O imóvel de tipo {{property.type}}, {{property.address}}, com {{property.bedrooms}} quarto(s), {{property.bathrooms}} banheiro(s) e {{property.area}} m², destinado exclusivamente a fins residenciais.</p>
<p class="ql-align-justify"><strong>CLÁUSULA 2ª - DO PRAZO:</strong> A locação terá prazo de {{contract.duration}} meses, com início em {{contract.startDate}} e término em {{contract.endDate}}.</p>
<p class="ql-align-justify"><strong>CLÁUSULA 3ª - DO ALUGUEL:</strong> O aluguel mensal é de {{contract.rentValue}} ({{contract.rentValueInWords}}), com vencimento todo dia {{contract.paymentDay}}, sendo o primeiro pagamento em {{contract.firstPaymentDate}}. Caução: {{contract.depositValue}}.</p>
<p class="ql-align-justify"><strong>CLÁUSULA 4ª - DAS CONTAS:</strong> Água: {{property.waterCompany}} (matrícula {{property.waterAccountNumber}}). Energia: {{property.electricityCompany}} (instalação {{property.electricityAccountNumber}}).</p>
<p class="ql-align-justify">{{contract.observations}}</p>
<p class="ql-align-center">{{DATA_LONGA}}</p>
<p class="ql-align-center">______________________________<br>{{owner.name}}<br>LOCADOR</p>
<p class="ql-align-center">______________________________<br>{{tenant.name}}<br>LOCATÁRIO</p>
{{PAGINA}}"""

COMMERCIAL_TEMPLATE = """<h2 class="ql-align-center">CONTRATO DE LOCAÇÃO COMERCIAL Nº {{contract.number}}</h2>
<p class="ql-align-justify"><strong>LOCADOR:</strong> {{owner.name}}, CPF: {{owner.document}} {{owner.rg}}, {{owner.address}}.</p>
<p class="ql-align-justify"><strong>LOCATÁRIO:</strong> {{tenant.name}}, CPF: {{tenant.document}} {{tenant.rg}}, {{tenant.address}}.</p>
<p class="ql-align-justify"><strong>CLÁUSULA 1ª - DO OBJETO:</strong> {{property.name}}, {{property.address}}, {{property.description}}, destinado a fins comerciais.</p>
<p class="ql-align-justify"><strong>CLÁUSULA 2ª - DO PRAZO:</strong> {{contract.duration}} meses, de {{contract.startDate}} a {{contract.endDate}}.</p>
<p class="ql-align-justify"><strong>CLÁUSULA 3ª - DO ALUGUEL:</strong> {{contract.rentValue}} ({{contract.rentValueInWords}}) por mês, vencendo no dia {{contract.paymentDay}}.</p>
<p class="ql-align-justify">Renovação do contrato {{contract.originalContractId}} referente ao período {{contract.originalPeriod}}.</p>
<p class="ql-align-center">{{DATA_LONGA}}</p>
{{PAGINA}}"""

DEFAULT_TEMPLATES = [
    ("Contrato Residencial Padrão", TemplateType.residential.value, RESIDENTIAL_TEMPLATE),
    ("Contrato Comercial Padrão", TemplateType.commercial.value, COMMERCIAL_TEMPLATE),
]


def fake_phone():
    return f"({random.randint(11, 99)}) 9{random.randint(1000, 9999)}-{random.randint(1000, 9999)}"


def fake_address():
    return {
        "zipCode": fake.postcode(),
        "street": fake.street_name(),
        "number": fake.building_number(),
        "complement": random.choice([None, f"Apto {random.randint(1, 300)}"]),
        "neighborhood": fake.bairro(),
        "city": fake.city(),
        "state": fake.estado_sigla(),
    }


def fake_party_fields():
    married = random.choice([True, False])
    return {
        "name": fake.name(),
        "document": fake.cpf(),
        "rg": random.choice([None, fake.rg()]),
        "email": fake.email(),
        "phone": fake_phone(),
        "nationality": "brasileiro(a)",
        "profession": fake.job(),
        "marital_status": "casado(a)" if married else "solteiro(a)",
        "spouse_name": fake.name() if married else None,
        "address": encode_address(fake_address()),
    }


def seed_default_templates(db: Session):
    if db.query(ContractTemplate).count():
        return
    for name, type, content in DEFAULT_TEMPLATES:
        db.add(ContractTemplate(name=name, type=type,
               content=content, is_active=True))
    db.flush()


def seed_data(owners_count: int = 5, contracts_count: int = 10):
    db: Session = RentalSessionLocal()
    try:
        seed_default_templates(db)

        owners = []
        for _ in range(owners_count):
            owner = Owner(**fake_party_fields())
            db.add(owner)
            owners.append(owner)
        db.flush()

        properties = []
        for owner in owners:
            for _ in range(2):
                prop = Property(
                    owner_id=owner.id,
                    name=f"{random.choice(['Residencial', 'Edifício', 'Casa'])} {fake.last_name()}",
                    type=random.choice(list(PropertyType)).value,
                    address=encode_address(fake_address()),
                    rent_value=Decimal(random.randrange(800, 6000, 50)),
                    bedrooms=random.randint(1, 4),
                    bathrooms=random.randint(1, 3),
                    area=random.randint(35, 250),
                    description=fake.sentence(nb_words=8),
                    available_for_rent=True,
                    water_company="SABESP",
                    water_account_number=str(random.randint(10**7, 10**8)),
                    electricity_company="ENEL",
                    electricity_account_number=str(random.randint(10**7, 10**8)),
                )
                db.add(prop)
                properties.append(prop)
        db.flush()

        for prop in random.sample(properties, k=min(contracts_count, len(properties))):
            fields = fake_party_fields()
            guarantor = fake_party_fields()
            guarantor["maritalStatus"] = guarantor.pop("marital_status")
            guarantor["spouseName"] = guarantor.pop("spouse_name")
            guarantor["address"] = fake_address()
            fields["guarantor"] = encode_address(
                random.choice([None, guarantor]))
            tenant = Tenant(**fields)
            db.add(tenant)
            db.flush()

            start = date(2025, random.randint(1, 12), 1)
            duration = random.choice([12, 24, 30])
            contract = Contract(
                owner_id=prop.owner_id,
                tenant_id=tenant.id,
                property_id=prop.id,
                start_date=start,
                end_date=start + relativedelta(months=duration),
                duration=duration,
                rent_value=prop.rent_value,
                deposit_value=prop.rent_value * 3,
                payment_day=random.choice([None, 5, 10]),
                first_payment_date=date(start.year, start.month, 10),
                status=ContractStatus.ativo.value,
            )
            db.add(contract)
            db.flush()
            generate_payments(db, contract)
            prop.available_for_rent = False

        db.commit()
        logger.info("Database seeded with %s owners and %s properties",
                    len(owners), len(properties))

    except Exception:
        db.rollback()
        logger.exception("Error seeding data")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    Base.metadata.create_all(bind=rental_engine)
    seed_data()
