# app/models/properties/properties.py
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from shared.core.database import Base


class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, autoincrement=True)
    owner_id = Column(Integer, ForeignKey("owners.id"), nullable=False)
    name = Column(String(200))
    type = Column(String(32), nullable=False)  # apartamento | casa | comercial | terreno
    address = Column(Text, nullable=False)  # JSON text
    rent_value = Column(Numeric(12, 2), nullable=False)
    bedrooms = Column(Integer)
    bathrooms = Column(Integer)
    area = Column(Integer)
    description = Column(Text)
    available_for_rent = Column(Boolean, default=True)
    water_company = Column(String(120))
    water_account_number = Column(String(64))
    electricity_company = Column(String(120))
    electricity_account_number = Column(String(64))
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    owner = relationship("Owner", back_populates="properties")
    contracts = relationship("Contract", back_populates="property")
