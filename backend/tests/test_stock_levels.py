"""
Stock Level and Low Stock Notification Tests
"""

from decimal import Decimal

import pytest

from exceptions import MissingReferenceError
from models.notifications import Notification
from services import notifications
from services.notifications import evaluate_low_stock, low_stock_message
from services.stock_levels import adjust_stock, get_current_stock


class TestAdjustStock:

    def test_delta_is_added(self, db, company, product):
        adjust_stock(db, company.id, product.id, Decimal("-3"))
        adjust_stock(db, company.id, product.id, Decimal("1.5"))
        db.commit()

        assert get_current_stock(db, company.id, product.id) == Decimal("8.5")

    def test_stock_may_go_negative(self, db, company, product):
        adjust_stock(db, company.id, product.id, Decimal("-12"))

        assert get_current_stock(db, company.id, product.id) == Decimal("-2")

    def test_unknown_product(self, db, company):
        with pytest.raises(MissingReferenceError) as exc_info:
            adjust_stock(db, company.id, 777, Decimal("1"))

        assert exc_info.value.entity == "Product"

    def test_product_of_another_company(self, db, other_company, product):
        with pytest.raises(MissingReferenceError):
            adjust_stock(db, other_company.id, product.id, Decimal("1"))

        with pytest.raises(MissingReferenceError):
            get_current_stock(db, other_company.id, product.id)


class TestLowStockNotification:

    def test_no_threshold_never_notifies(self, db, company, make_product):
        product = make_product(stock="0", threshold="0")

        assert evaluate_low_stock(db, company.id, product.id) is False
        assert db.query(Notification).count() == 0

    def test_above_threshold(self, db, company, make_product):
        product = make_product(stock="10", threshold="5")

        assert evaluate_low_stock(db, company.id, product.id) is False

    def test_at_threshold_notifies(self, db, company, make_product):
        product = make_product(stock="5", threshold="5")

        assert evaluate_low_stock(db, company.id, product.id) is True
        db.commit()

        notification = db.query(Notification).one()
        assert notification.company_id == company.id
        assert notification.type == "warning"
        assert notification.link == f"/inventory#product-{product.id}"
        assert notification.is_read is False

    def test_unread_duplicate_is_not_repeated(self, db, company, make_product):
        product = make_product(stock="2", threshold="5")

        assert evaluate_low_stock(db, company.id, product.id) is True
        assert evaluate_low_stock(db, company.id, product.id) is False
        assert db.query(Notification).count() == 1

    def test_read_notification_allows_a_new_one(self, db, company, make_product):
        product = make_product(stock="2", threshold="5")
        evaluate_low_stock(db, company.id, product.id)
        db.query(Notification).update({Notification.is_read: True})

        assert evaluate_low_stock(db, company.id, product.id) is True
        assert db.query(Notification).count() == 2

    def test_failure_is_swallowed_and_outer_work_survives(self, db, company, make_product, monkeypatch):
        product = make_product(stock="2", threshold="5")

        def _boom(*args, **kwargs):
            raise RuntimeError("message template broken")

        monkeypatch.setattr(notifications, "low_stock_message", _boom)
        adjust_stock(db, company.id, product.id, Decimal("-1"))

        assert evaluate_low_stock(db, company.id, product.id) is False
        db.commit()

        assert get_current_stock(db, company.id, product.id) == Decimal("1")
        assert db.query(Notification).count() == 0

    def test_message(self):
        assert low_stock_message("Cement", Decimal("3")) == "Low stock alert for Cement. Current stock: 3."
