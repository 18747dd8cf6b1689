from decimal import Decimal
from sqlalchemy import func
from sqlalchemy.orm import Session
from models.stock_items import StockItem, StockUnit
from models.vouchers import VoucherInventoryEntry


def get_stock_items_with_quantity(db: Session, company_id: int):
    """Stock items with current quantity derived as opening_qty + sum of voucher inventory quantities."""
    movements = db.query(
        VoucherInventoryEntry.item_id.label("item_id"),
        func.sum(VoucherInventoryEntry.quantity).label("moved_qty"),
    ).group_by(VoucherInventoryEntry.item_id).subquery()

    rows = db.query(StockItem, StockUnit.name, movements.c.moved_qty).join(
        StockUnit, StockItem.unit_id == StockUnit.id
    ).outerjoin(
        movements, movements.c.item_id == StockItem.id
    ).filter(StockItem.company_id == company_id).order_by(StockItem.name).all()

    items = []
    for item, unit_name, moved_qty in rows:
        opening_qty = item.opening_qty if item.opening_qty is not None else Decimal("0")
        moved = Decimal(str(moved_qty)) if moved_qty is not None else Decimal("0")
        items.append({
            "id": item.id,
            "name": item.name,
            "unit_id": item.unit_id,
            "unit_name": unit_name,
            "gst_rate": item.gst_rate,
            "opening_qty": opening_qty,
            "opening_rate": item.opening_rate,
            "current_stock": opening_qty + moved,
        })
    return items
