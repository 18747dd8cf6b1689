from sqlalchemy import Column, Integer, String, Text
from database import Base
from models.audit_mixin import TimestampMixin


class Company(Base, TimestampMixin):
    __tablename__ = "companies"

    id = Column(Integer, primary_key=True, index=True)
    company_name = Column(String, unique=True, nullable=False)
    address_line1 = Column(Text, nullable=True)
    address_line2 = Column(Text, nullable=True)
    city_pincode = Column(String, nullable=True)
    state = Column(String, nullable=True)  # Seller jurisdiction for the GST split
    state_code = Column(String, nullable=True)
    gstin = Column(String, unique=True, nullable=True)
    phone = Column(String, nullable=True)
    email = Column(String, nullable=True)
    bank_name = Column(String, nullable=True)
    bank_account_no = Column(String, nullable=True)
    bank_ifsc_code = Column(String, nullable=True)
