# app/models/contracts/contracts.py
from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from shared.core.database import Base


class Contract(Base):
    __tablename__ = "contracts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, ForeignKey("owners.id"), nullable=False)
    tenant_id = Column(Integer, ForeignKey("tenants.id"), nullable=False)
    property_id = Column(Integer, ForeignKey(
        "properties.id"), nullable=False)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    duration = Column(Integer, nullable=False)  # months
    rent_value = Column(Numeric(12, 2), nullable=False)
    deposit_value = Column(Numeric(12, 2), nullable=True)
    payment_day = Column(Integer, nullable=True)
    first_payment_date = Column(Date, nullable=False)
    status = Column(String(16), nullable=False, default="ativo")
    observations = Column(Text)

    is_renewal = Column(Boolean, default=False)
    original_contract_id = Column(
        Integer, ForeignKey("contracts.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # relationships
    owner = relationship("Owner", back_populates="contracts")
    tenant = relationship("Tenant", back_populates="contracts")
    property = relationship("Property", back_populates="contracts")
    payments = relationship(
        "Payment", back_populates="contract", cascade="all, delete")
    original_contract = relationship("Contract", remote_side=[id])
