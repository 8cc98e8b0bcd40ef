# app/models/contracts/payments.py
from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from shared.core.database import Base


class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=False)
    due_date = Column(Date, nullable=False)
    value = Column(Numeric(12, 2), nullable=False)
    is_paid = Column(Boolean, default=False)
    payment_date = Column(Date)
    interest_amount = Column(Numeric(12, 2), default=0)
    late_payment_fee = Column(Numeric(12, 2), default=0)
    payment_method = Column(String(32))  # PIX, dinheiro, ...
    receipt_number = Column(String(64))
    observations = Column(Text)
    installment_number = Column(Integer, default=0)
    is_restored = Column(Boolean, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    contract = relationship("Contract", back_populates="payments")
