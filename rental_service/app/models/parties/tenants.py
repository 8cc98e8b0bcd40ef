# app/models/parties/tenants.py
from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from shared.core.database import Base


class Tenant(Base):
    __tablename__ = "tenants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    document = Column(String(32), nullable=False, unique=True)  # CPF/CNPJ
    rg = Column(String(32))
    email = Column(String(200), nullable=False)
    phone = Column(String(32), nullable=False)
    nationality = Column(String(64))
    profession = Column(String(120))
    marital_status = Column(String(32))
    spouse_name = Column(String(200))
    address = Column(Text, nullable=False)  # JSON text
    guarantor = Column(Text)  # JSON text, optional
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    contracts = relationship("Contract", back_populates="tenant")
