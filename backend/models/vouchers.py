from sqlalchemy import Column, Integer, String, Text, Date, Numeric, ForeignKey, Enum, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from database import Base
import enum
from models.audit_mixin import TimestampMixin


class VoucherType(enum.Enum):
    SALES = "Sales"
    PURCHASE = "Purchase"
    JOURNAL = "Journal"
    PAYMENT = "Payment"
    RECEIPT = "Receipt"
    CONTRA = "Contra"
    CREDIT_NOTE = "Credit Note"
    DEBIT_NOTE = "Debit Note"


# Voucher types whose inventory lines move stock out of the business
OUTWARD_VOUCHER_TYPES = {VoucherType.SALES}


class Voucher(Base, TimestampMixin):
    __tablename__ = "vouchers"
    __table_args__ = (
        UniqueConstraint('company_id', 'voucher_number', 'voucher_type', name='_company_voucher_number_type_uc'),
    )

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), index=True, nullable=False)
    date = Column(Date, nullable=False, index=True)
    voucher_number = Column(String, nullable=False)
    voucher_type = Column(Enum(VoucherType, values_callable=lambda e: [m.value for m in e]), nullable=False)
    narration = Column(Text, nullable=True)
    total_amount = Column(Numeric(14, 2), nullable=False)

    # Relationships
    entries = relationship("VoucherEntry", back_populates="voucher", cascade="all, delete-orphan")
    inventory_entries = relationship("VoucherInventoryEntry", back_populates="voucher", cascade="all, delete-orphan")


class VoucherEntry(Base):
    __tablename__ = "voucher_entries"

    id = Column(Integer, primary_key=True, index=True)
    voucher_id = Column(Integer, ForeignKey("vouchers.id", ondelete="CASCADE"), nullable=False, index=True)
    ledger_id = Column(Integer, ForeignKey("ledgers.id", ondelete="RESTRICT"), nullable=False, index=True)
    debit = Column(Numeric(14, 2), CheckConstraint('debit >= 0'), nullable=False, default=0)
    credit = Column(Numeric(14, 2), CheckConstraint('credit >= 0'), nullable=False, default=0)

    # Relationships
    voucher = relationship("Voucher", back_populates="entries")
    ledger = relationship("Ledger")

    @property
    def ledger_name(self):
        return self.ledger.name if self.ledger else None


class VoucherInventoryEntry(Base):
    __tablename__ = "voucher_inventory_entries"

    id = Column(Integer, primary_key=True, index=True)
    voucher_id = Column(Integer, ForeignKey("vouchers.id", ondelete="CASCADE"), nullable=False, index=True)
    item_id = Column(Integer, ForeignKey("stock_items.id", ondelete="RESTRICT"), nullable=False, index=True)
    warehouse_id = Column(Integer, ForeignKey("stock_warehouses.id", ondelete="SET NULL"), nullable=True)
    quantity = Column(Numeric(14, 3), nullable=False)  # Negative = outward (sale), positive = inward
    rate = Column(Numeric(14, 2), nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)

    # Relationships
    voucher = relationship("Voucher", back_populates="inventory_entries")
    item = relationship("StockItem")
    warehouse = relationship("StockWarehouse")
