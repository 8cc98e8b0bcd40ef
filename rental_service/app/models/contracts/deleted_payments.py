# app/models/contracts/deleted_payments.py
from sqlalchemy import Boolean, Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.sql import func
from shared.core.database import Base


class DeletedPayment(Base):
    """Copy of an installment taken when it is deleted, kept for restore."""
    __tablename__ = "deleted_payments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    original_id = Column(Integer)
    contract_id = Column(Integer, ForeignKey("contracts.id"), nullable=False)
    due_date = Column(Date, nullable=False)
    value = Column(Numeric(12, 2), nullable=False)
    is_paid = Column(Boolean, default=False)
    payment_date = Column(Date)
    interest_amount = Column(Numeric(12, 2), default=0)
    late_payment_fee = Column(Numeric(12, 2), default=0)
    payment_method = Column(String(32))
    receipt_number = Column(String(64))
    observations = Column(Text)
    installment_number = Column(Integer, default=0)
    deleted_by = Column(String(64))  # user_id from the token
    deleted_at = Column(DateTime(timezone=True), server_default=func.now())
    original_created_at = Column(DateTime(timezone=True))
    was_restored = Column(Boolean, default=False)
