from sqlalchemy import Column, Integer, String, Numeric, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database import Base


class StockUnit(Base):
    __tablename__ = "stock_units"
    __table_args__ = (UniqueConstraint('company_id', 'name', name='_company_stock_unit_name_uc'),)

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), index=True, nullable=False)
    name = Column(String, nullable=False)  # e.g., "pcs", "kg", "mtrs"


class StockWarehouse(Base):
    __tablename__ = "stock_warehouses"
    __table_args__ = (UniqueConstraint('company_id', 'name', name='_company_stock_warehouse_name_uc'),)

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), index=True, nullable=False)
    name = Column(String, nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)


class StockItem(Base):
    __tablename__ = "stock_items"
    __table_args__ = (UniqueConstraint('company_id', 'name', name='_company_stock_item_name_uc'),)

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), index=True, nullable=False)
    name = Column(String, nullable=False)
    unit_id = Column(Integer, ForeignKey("stock_units.id", ondelete="RESTRICT"), nullable=False)
    gst_rate = Column(Numeric(5, 2), default=0, nullable=False)
    # Current quantity is never stored: opening_qty + sum of voucher inventory quantities
    opening_qty = Column(Numeric(14, 3), default=0, nullable=False)
    opening_rate = Column(Numeric(14, 2), default=0, nullable=False)

    # Relationships
    unit = relationship("StockUnit")
