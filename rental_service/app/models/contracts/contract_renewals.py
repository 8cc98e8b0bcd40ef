# app/models/contracts/contract_renewals.py
from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from shared.core.database import Base


class ContractRenewal(Base):
    __tablename__ = "contract_renewals"

    id = Column(Integer, primary_key=True, autoincrement=True)
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=False)
    original_contract_id = Column(
        Integer, ForeignKey("contracts.id"), nullable=False)
    renewal_date = Column(Date, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    new_rent_value = Column(Numeric(12, 2), nullable=False)
    adjustment_index = Column(String(16), nullable=False, default="IGP-M")
    observations = Column(Text)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    contract = relationship("Contract", foreign_keys=[contract_id])
    original_contract = relationship(
        "Contract", foreign_keys=[original_contract_id])
