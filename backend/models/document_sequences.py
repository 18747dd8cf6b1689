from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint
from database import Base
from models.audit_mixin import TimestampMixin


class DocumentSequence(Base, TimestampMixin):
    """Per-company, per-prefix counter for document numbers (e.g. ``CN-202501-``).

    The row is locked and incremented inside the caller's transaction, so two
    concurrent credit notes for the same company cannot draw the same number.
    """
    __tablename__ = "document_sequences"
    __table_args__ = (UniqueConstraint('company_id', 'prefix', name='_company_document_prefix_uc'),)

    id = Column(Integer, primary_key=True, index=True)
    company_id = Column(Integer, ForeignKey("companies.id", ondelete="CASCADE"), index=True, nullable=False)
    prefix = Column(String, nullable=False)
    last_value = Column(Integer, default=0, nullable=False)
    width = Column(Integer, default=4, nullable=False)
