from sqlalchemy import Column, DateTime, String
from datetime import datetime
import pytz

IST = pytz.timezone('Asia/Kolkata')


def now_ist():
    return datetime.now(IST)


class TimestampMixin:
    """Mixin that provides created/updated timestamps and user info.

    Ledger and invoice rows are hard-deleted (derived transactions are deleted and
    regenerated on every invoice edit), so there are no soft-delete columns here.
    """
    # DateTime(timezone=True) ensures the timezone info is persisted in the database.
    created_at = Column(DateTime(timezone=True), default=now_ist)
    updated_at = Column(DateTime(timezone=True), onupdate=now_ist)
    created_by = Column(String, nullable=True)
    updated_by = Column(String, nullable=True)
