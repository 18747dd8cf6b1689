from sqlalchemy import Column, Integer, String, Numeric, Boolean, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from database import Base
import enum
from models.audit_mixin import TimestampMixin


class LedgerNature(enum.Enum):
    ASSET = "Asset"
    LIABILITY = "Liability"
    INCOME = "Income"
    EXPENSE = "Expense"


class LedgerGroup(Base, TimestampMixin):
    __tablename__ = "ledger_groups"
    __table_args__ = (UniqueConstraint('company_id', 'name', name='_company_ledger_group_name_uc'),)

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), index=True, nullable=False)
    name = Column(String, nullable=False)
    parent_id = Column(Integer, ForeignKey("ledger_groups.id", ondelete="CASCADE"), nullable=True)
    nature = Column(Enum(LedgerNature, values_callable=lambda e: [m.value for m in e]), nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)

    # Relationships
    parent = relationship("LedgerGroup", remote_side=[id])
    ledgers = relationship("Ledger", back_populates="group")


class Ledger(Base, TimestampMixin):
    __tablename__ = "ledgers"
    __table_args__ = (UniqueConstraint('company_id', 'name', name='_company_ledger_name_uc'),)

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), index=True, nullable=False)
    name = Column(String, nullable=False)
    group_id = Column(Integer, ForeignKey("ledger_groups.id", ondelete="RESTRICT"), nullable=False)
    opening_balance = Column(Numeric(14, 2), default=0, nullable=False)
    is_dr = Column(Boolean, default=True, nullable=False)  # Opening balance polarity
    gstin = Column(String, nullable=True)
    state = Column(String, nullable=True)
    is_default = Column(Boolean, default=False, nullable=False)

    # Relationships
    group = relationship("LedgerGroup", back_populates="ledgers")

    @property
    def group_name(self):
        return self.group.name if self.group else None
