import logging

from sqlalchemy.orm import Session

from models.notifications import Notification
from models.products import Product

logger = logging.getLogger("notifications")


def low_stock_message(product_name: str, current_stock) -> str:
    return f"Low stock alert for {product_name}. Current stock: {current_stock}."


def evaluate_low_stock(db: Session, company_id: int, product_id: int) -> bool:
    """Raise an unread warning when a product is at or below its threshold.

    Runs in a savepoint and never fails the caller: any error is logged and
    only the savepoint is rolled back. Returns True when a notification was added.
    """
    savepoint = db.begin_nested()
    try:
        row = db.query(
            Product.product_name,
            Product.current_stock,
            Product.low_stock_threshold,
        ).filter(Product.id == product_id, Product.company_id == company_id).first()
        if row is None:
            savepoint.commit()
            return False

        product_name, current_stock, threshold = row
        if not threshold or threshold <= 0 or current_stock > threshold:
            savepoint.commit()
            return False

        message = low_stock_message(product_name, current_stock)
        already_unread = db.query(Notification.id).filter(
            Notification.company_id == company_id,
            Notification.message == message,
            Notification.is_read.is_(False),
        ).first()
        if already_unread:
            savepoint.commit()
            return False

        db.add(Notification(
            company_id=company_id,
            message=message,
            type="warning",
            link=f"/inventory#product-{product_id}",
        ))
        db.flush()
        savepoint.commit()
        logger.info(f"Low stock notification raised for product {product_id} (company {company_id})")
        return True
    except Exception:
        savepoint.rollback()
        logger.exception(f"Low stock check failed for product {product_id}; invoice processing continues")
        return False
