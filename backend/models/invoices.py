from sqlalchemy import Column, Integer, String, Text, Numeric, Date, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from database import Base
import enum
from models.audit_mixin import TimestampMixin


class InvoiceType(enum.Enum):
    TAX_INVOICE = "TAX_INVOICE"
    BILL_OF_SUPPLY = "BILL_OF_SUPPLY"
    SALES_RETURN = "SALES_RETURN"


class InvoiceStatus(enum.Enum):
    DRAFT = "Draft"
    UNPAID = "Unpaid"
    PARTIALLY_PAID = "Partially Paid"
    PAID = "Paid"
    VOID = "Void"


class Invoice(Base, TimestampMixin):
    __tablename__ = "invoices"
    __table_args__ = (UniqueConstraint('company_id', 'invoice_number', name='_company_invoice_number_uc'),)

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), index=True, nullable=False)
    customer_id = Column(Integer, ForeignKey("parties.id", ondelete="RESTRICT"), nullable=False)
    invoice_number = Column(String, nullable=False, index=True)
    invoice_type = Column(Enum(InvoiceType), default=InvoiceType.TAX_INVOICE, nullable=False)
    invoice_date = Column(Date, nullable=False)
    due_date = Column(Date, nullable=False)
    status = Column(Enum(InvoiceStatus, values_callable=lambda e: [m.value for m in e]), default=InvoiceStatus.DRAFT, nullable=False)
    notes = Column(Text, nullable=True)

    # Totals are recomputed from line items on every create/update, never edited directly
    amount_before_tax = Column(Numeric(16, 4), default=0, nullable=False)
    total_cgst_amount = Column(Numeric(16, 4), default=0, nullable=False)
    total_sgst_amount = Column(Numeric(16, 4), default=0, nullable=False)
    total_igst_amount = Column(Numeric(16, 4), default=0, nullable=False)
    party_bill_returns_amount = Column(Numeric(16, 4), default=0, nullable=False)
    total_amount = Column(Numeric(16, 4), default=0, nullable=False)
    paid_amount = Column(Numeric(16, 4), default=0, nullable=False)  # Cumulative

    reverse_charge = Column(String, default="No", nullable=True)
    transportation_mode = Column(String, nullable=True)
    vehicle_number = Column(String, nullable=True)
    date_of_supply = Column(Date, nullable=True)
    place_of_supply_state = Column(String, nullable=True)
    place_of_supply_state_code = Column(String, nullable=True)
    bundles_count = Column(Integer, nullable=True)

    # Consignee snapshot at the time of invoicing
    consignee_name = Column(String, nullable=True)
    consignee_address_line1 = Column(Text, nullable=True)
    consignee_address_line2 = Column(Text, nullable=True)
    consignee_city_pincode = Column(String, nullable=True)
    consignee_state = Column(String, nullable=True)
    consignee_gstin = Column(String, nullable=True)
    consignee_state_code = Column(String, nullable=True)

    amount_in_words = Column(Text, nullable=True)
    original_invoice_number = Column(String, nullable=True)  # Set on credit notes

    # Relationships
    customer = relationship("Party", back_populates="invoices")
    line_items = relationship("InvoiceLineItem", back_populates="invoice", cascade="all, delete-orphan")

    @property
    def customer_name(self):
        return self.customer.name if self.customer else None


class InvoiceLineItem(Base):
    __tablename__ = "invoice_line_items"

    id = Column(Integer, primary_key=True, index=True)
    invoice_id = Column(Integer, ForeignKey("invoices.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"), nullable=True)  # Free-text lines have none
    description = Column(Text, nullable=False)
    hsn_acs_code = Column(String, nullable=True)
    unit_of_measure = Column(String, nullable=True)
    quantity = Column(Numeric(14, 3), nullable=False)  # Signed: negative on credit notes
    unit_price = Column(Numeric(16, 4), nullable=False)
    discount_amount = Column(Numeric(16, 4), default=0, nullable=False)
    taxable_value = Column(Numeric(16, 4), nullable=False)
    cgst_rate = Column(Numeric(5, 2), default=0, nullable=False)
    cgst_amount = Column(Numeric(16, 4), default=0, nullable=False)
    sgst_rate = Column(Numeric(5, 2), default=0, nullable=False)
    sgst_amount = Column(Numeric(16, 4), default=0, nullable=False)
    igst_rate = Column(Numeric(5, 2), default=0, nullable=False)
    igst_amount = Column(Numeric(16, 4), default=0, nullable=False)
    line_total = Column(Numeric(16, 4), nullable=False)

    # Relationships
    invoice = relationship("Invoice", back_populates="line_items")
    product = relationship("Product")
