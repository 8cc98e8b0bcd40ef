from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, Field

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel
from ...enum.rental_enum import TemplateType


class ContractTemplateBase(EmptyStringModel):
    name: Optional[str] = Field(None, min_length=3)
    type: Optional[TemplateType] = None
    content: Optional[str] = Field(None, min_length=10, max_length=10_000_000)


class ContractTemplateCreate(ContractTemplateBase):
    name: str = Field(min_length=3)
    type: TemplateType = TemplateType.residential
    content: str = Field(min_length=10, max_length=10_000_000)


class ContractTemplateUpdate(ContractTemplateBase):
    id: int


class ContractTemplateOut(BaseModel):
    id: int
    name: str
    type: str
    content: str
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ContractTemplateListResponse(BaseModel):
    templates: List[ContractTemplateOut]
    total: int


class TemplateTagOut(BaseModel):
    tag: str
    placeholder: str
