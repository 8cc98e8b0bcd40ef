"""
Tag vocabulary and substitution primitives for contract templates.

Templates only know the placeholders listed in TemplateTag. Matching is
literal, global and case-sensitive; a primitive inserts its value
verbatim and never expands tags inside it.
"""
import re
from enum import Enum
from typing import Any, List

TAG_PATTERN = re.compile(r"\{\{([^{}]+)\}\}")


class TemplateTag(str, Enum):
    OWNER_NAME = "owner.name"
    OWNER_DOCUMENT = "owner.document"
    OWNER_RG = "owner.rg"
    OWNER_ADDRESS = "owner.address"
    OWNER_PHONE = "owner.phone"
    OWNER_EMAIL = "owner.email"
    OWNER_NATIONALITY = "owner.nationality"
    OWNER_PROFESSION = "owner.profession"
    OWNER_MARITAL_STATUS = "owner.maritalStatus"
    OWNER_SPOUSE_NAME = "owner.spouseName"

    TENANT_NAME = "tenant.name"
    TENANT_DOCUMENT = "tenant.document"
    TENANT_RG = "tenant.rg"
    TENANT_ADDRESS = "tenant.address"
    TENANT_PHONE = "tenant.phone"
    TENANT_EMAIL = "tenant.email"
    TENANT_NATIONALITY = "tenant.nationality"
    TENANT_PROFESSION = "tenant.profession"
    TENANT_MARITAL_STATUS = "tenant.maritalStatus"
    TENANT_SPOUSE_NAME = "tenant.spouseName"

    GUARANTOR_NAME = "guarantor.name"
    GUARANTOR_DOCUMENT = "guarantor.document"
    GUARANTOR_RG = "guarantor.rg"
    GUARANTOR_ADDRESS = "guarantor.address"
    GUARANTOR_PHONE = "guarantor.phone"
    GUARANTOR_EMAIL = "guarantor.email"
    GUARANTOR_NATIONALITY = "guarantor.nationality"
    GUARANTOR_PROFESSION = "guarantor.profession"
    GUARANTOR_MARITAL_STATUS = "guarantor.maritalStatus"
    GUARANTOR_SPOUSE_NAME = "guarantor.spouseName"

    PROPERTY_NAME = "property.name"
    PROPERTY_ADDRESS = "property.address"
    PROPERTY_AREA = "property.area"
    PROPERTY_DESCRIPTION = "property.description"
    PROPERTY_TYPE = "property.type"
    PROPERTY_BEDROOMS = "property.bedrooms"
    PROPERTY_BATHROOMS = "property.bathrooms"
    PROPERTY_WATER_COMPANY = "property.waterCompany"
    PROPERTY_WATER_ACCOUNT_NUMBER = "property.waterAccountNumber"
    PROPERTY_ELECTRICITY_COMPANY = "property.electricityCompany"
    PROPERTY_ELECTRICITY_ACCOUNT_NUMBER = "property.electricityAccountNumber"

    CONTRACT_DURATION = "contract.duration"
    CONTRACT_START_DATE = "contract.startDate"
    CONTRACT_END_DATE = "contract.endDate"
    CONTRACT_RENT_VALUE = "contract.rentValue"
    CONTRACT_NUMBER = "contract.number"
    CONTRACT_STATUS = "contract.status"
    CONTRACT_OBSERVATIONS = "contract.observations"
    CONTRACT_PAYMENT_DAY = "contract.paymentDay"
    CONTRACT_ID = "contract.id"
    CONTRACT_TYPE = "contract.type"
    CONTRACT_ORIGINAL_CONTRACT_ID = "contract.originalContractId"
    CONTRACT_ORIGINAL_START_DATE = "contract.originalStartDate"
    CONTRACT_ORIGINAL_END_DATE = "contract.originalEndDate"
    CONTRACT_ORIGINAL_PERIOD = "contract.originalPeriod"
    CONTRACT_RENT_VALUE_IN_WORDS = "contract.rentValueInWords"
    CONTRACT_FIRST_PAYMENT_DATE = "contract.firstPaymentDate"
    CONTRACT_DEPOSIT_VALUE = "contract.depositValue"

    DATA_LONGA = "DATA_LONGA"
    DATA_ATUAL = "DATA_ATUAL"
    HORA = "HORA"
    PAGINA = "PAGINA"

    @property
    def placeholder(self) -> str:
        return "{{" + self.value + "}}"


KNOWN_TAGS = frozenset(t.value for t in TemplateTag)

RENEWAL_TAGS = (
    TemplateTag.CONTRACT_ORIGINAL_CONTRACT_ID,
    TemplateTag.CONTRACT_ORIGINAL_START_DATE,
    TemplateTag.CONTRACT_ORIGINAL_END_DATE,
    TemplateTag.CONTRACT_ORIGINAL_PERIOD,
)

RG_TAGS = (TemplateTag.OWNER_RG, TemplateTag.TENANT_RG, TemplateTag.GUARANTOR_RG)


def placeholder(tag: Any) -> str:
    name = tag.value if isinstance(tag, TemplateTag) else str(tag)
    return "{{" + name + "}}"


def as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def find_tags(content: str) -> List[str]:
    return TAG_PATTERN.findall(content or "")


def find_unknown_tags(content: str) -> List[str]:
    """Placeholders not in the vocabulary, in order of first appearance."""
    unknown = []
    for name in find_tags(content):
        if name not in KNOWN_TAGS and name not in unknown:
            unknown.append(name)
    return unknown


def substitute_plain(text: str, tag: Any, value: Any) -> str:
    return text.replace(placeholder(tag), as_text(value))


def substitute_conditional(text: str, label: str, tag: Any, value: Any) -> str:
    """
    Replace every {{tag}} with "label value" when there is a value,
    otherwise drop the tag so the label never shows alone.
    """
    if value:
        return text.replace(placeholder(tag), f"{label} {value}")
    return text.replace(placeholder(tag), "")


def substitute_labelled(text: str, label: str, tag: Any, value: Any) -> str:
    """
    Resolve the "label {{tag}}" form written in the template itself.

    "CPF: {{owner.document}}" keeps its label when there is a document and
    disappears entirely when there is none. Bare {{tag}} occurrences are
    left for the plain pass.
    """
    pattern = re.compile(re.escape(label) + r"[ \t]*" +
                         re.escape(placeholder(tag)))
    replacement = f"{label} {value}" if value else ""
    return pattern.sub(lambda _: replacement, text)


def remove_family(text: str, family: str) -> str:
    """Drop every {{family.*}} placeholder in one pass."""
    return re.sub(r"\{\{" + re.escape(family) + r"\.[^}]+\}\}", "", text)
