from sqlalchemy import Column, Integer, String, Text, Numeric, Date, ForeignKey
from sqlalchemy.orm import relationship
from database import Base
from models.audit_mixin import TimestampMixin


class Transaction(Base, TimestampMixin):
    """Financial movement against a customer or lender.

    Rows with ``related_invoice_id`` set are derived from that invoice: they are
    deleted and regenerated on every invoice edit and are never edited by hand.
    """
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), index=True, nullable=False)
    customer_id = Column(Integer, ForeignKey("parties.id", ondelete="SET NULL"), nullable=True)
    lender_id = Column(Integer, nullable=True)
    amount = Column(Numeric(16, 4), nullable=False)  # Positive increases what is owed to the business
    description = Column(Text, nullable=True)
    category = Column(String, nullable=True, index=True)
    date = Column(Date, nullable=False)
    related_invoice_id = Column(Integer, ForeignKey("invoices.id", ondelete="SET NULL"), nullable=True, index=True)

    # Relationships
    line_items = relationship("TransactionLineItem", back_populates="transaction", cascade="all, delete-orphan")
    related_invoice = relationship("Invoice")

    @property
    def related_invoice_number(self):
        return self.related_invoice.invoice_number if self.related_invoice else None


class TransactionLineItem(Base):
    __tablename__ = "transaction_line_items"

    id = Column(Integer, primary_key=True, index=True)
    transaction_id = Column(Integer, ForeignKey("transactions.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    quantity = Column(Numeric(14, 3), nullable=False)  # Signed invoice quantity; reverting adds it back to stock
    unit_sale_price = Column(Numeric(16, 4), nullable=True)

    # Relationships
    transaction = relationship("Transaction", back_populates="line_items")
    product = relationship("Product")
