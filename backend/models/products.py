from sqlalchemy import Column, Integer, String, Text, Numeric, Boolean, ForeignKey, UniqueConstraint
from database import Base
from models.audit_mixin import TimestampMixin


class Product(Base, TimestampMixin):
    __tablename__ = "products"
    __table_args__ = (
        UniqueConstraint('company_id', 'product_name', name='_company_product_name_uc'),
        UniqueConstraint('company_id', 'sku', name='_company_product_sku_uc'),
    )

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), index=True, nullable=False)
    product_name = Column(String, nullable=False)
    sku = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    cost_price = Column(Numeric(14, 2), default=0, nullable=False)
    sale_price = Column(Numeric(14, 2), default=0, nullable=False)
    # Running total, only ever changed through services.stock_levels.adjust_stock
    current_stock = Column(Numeric(14, 3), default=0, nullable=False)
    unit_of_measure = Column(String, default="pcs", nullable=True)
    hsn_acs_code = Column(String, nullable=True)
    low_stock_threshold = Column(Numeric(14, 3), default=0, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
