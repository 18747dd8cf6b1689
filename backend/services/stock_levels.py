"""
Running stock of products.

``current_stock`` is changed only by a single ``UPDATE ... SET current_stock =
current_stock + :delta`` so concurrent invoices touching the same product add
up instead of overwriting each other.
"""

import logging
from decimal import Decimal

from sqlalchemy.orm import Session

from exceptions import MissingReferenceError
from models.products import Product

logger = logging.getLogger("stock_levels")


def adjust_stock(db: Session, company_id: int, product_id: int, delta: Decimal) -> None:
    """Add ``delta`` (negative to take stock out) to the product's running stock. Does not commit."""
    updated = db.query(Product).filter(
        Product.id == product_id,
        Product.company_id == company_id,
    ).update(
        {Product.current_stock: Product.current_stock + Decimal(delta)},
        synchronize_session=False,
    )
    if updated == 0:
        raise MissingReferenceError("Product", product_id)
    logger.debug(f"Stock of product {product_id} (company {company_id}) adjusted by {delta}")


def get_current_stock(db: Session, company_id: int, product_id: int) -> Decimal:
    stock = db.query(Product.current_stock).filter(
        Product.id == product_id,
        Product.company_id == company_id,
    ).scalar()
    if stock is None:
        raise MissingReferenceError("Product", product_id)
    return stock
