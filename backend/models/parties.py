from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import TimestampMixin


class Party(Base, TimestampMixin):
    __tablename__ = "parties"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), index=True, nullable=False)
    name = Column(String, nullable=False)
    email = Column(String, nullable=True)
    phone = Column(String, nullable=True)
    address_line1 = Column(Text, nullable=True)
    address_line2 = Column(Text, nullable=True)
    city_pincode = Column(String, nullable=True)
    state = Column(String, nullable=True)  # Buyer jurisdiction unless the invoice names a place of supply
    state_code = Column(String, nullable=True)
    gstin = Column(String, nullable=True)
    is_customer = Column(Boolean, default=True, nullable=False)

    # Relationships
    invoices = relationship("Invoice", back_populates="customer")
