"""
Ledger Group and Ledger Tests
"""

import pytest

from crud import ledgers as crud_ledgers
from exceptions import MissingReferenceError
from models.ledgers import LedgerNature
from schemas.ledgers import LedgerCreate, LedgerGroupCreate, LedgerGroupUpdate

TEST_USER = {"sub": "user-1", "username": "pytest_user"}


def _group(db, company, name, nature=LedgerNature.ASSET, parent=None):
    return crud_ledgers.create_ledger_group(
        db, LedgerGroupCreate(name=name, nature=nature, parent_id=parent.id if parent else None), company.id, TEST_USER
    )


class TestLedgerGroups:

    def test_tree_nests_children(self, db, company):
        assets = _group(db, company, "Assets")
        current = _group(db, company, "Current Assets", parent=assets)
        _group(db, company, "Bank Accounts", parent=current)
        _group(db, company, "Income", nature=LedgerNature.INCOME)

        tree = crud_ledgers.get_ledger_group_tree(db, company.id)

        assert [node["name"] for node in tree] == ["Assets", "Income"]
        assert tree[0]["children"][0]["name"] == "Current Assets"
        assert tree[0]["children"][0]["children"][0]["name"] == "Bank Accounts"

    def test_created_by_is_recorded(self, db, company):
        group = _group(db, company, "Assets")

        assert group.created_by == "pytest_user"

    def test_unknown_parent(self, db, company):
        with pytest.raises(MissingReferenceError):
            crud_ledgers.create_ledger_group(
                db, LedgerGroupCreate(name="Orphan", nature=LedgerNature.ASSET, parent_id=999), company.id, TEST_USER
            )

    def test_groups_are_per_company(self, db, company, other_company):
        _group(db, company, "Assets")

        assert crud_ledgers.get_ledger_group_tree(db, other_company.id) == []

    def test_move_under_descendant_is_rejected(self, db, company):
        assets = _group(db, company, "Assets")
        current = _group(db, company, "Current Assets", parent=assets)
        bank = _group(db, company, "Bank Accounts", parent=current)

        with pytest.raises(ValueError):
            crud_ledgers.update_ledger_group(db, assets.id, LedgerGroupUpdate(parent_id=bank.id), company.id, TEST_USER)

        with pytest.raises(ValueError):
            crud_ledgers.update_ledger_group(db, assets.id, LedgerGroupUpdate(parent_id=assets.id), company.id, TEST_USER)

    def test_move_and_rename(self, db, company):
        assets = _group(db, company, "Assets")
        misc = _group(db, company, "Misc")

        updated = crud_ledgers.update_ledger_group(
            db, misc.id, LedgerGroupUpdate(name="Deposits", parent_id=assets.id), company.id, TEST_USER
        )

        assert updated.name == "Deposits"
        assert updated.parent_id == assets.id

    def test_update_missing_group(self, db, company):
        assert crud_ledgers.update_ledger_group(db, 404, LedgerGroupUpdate(name="x"), company.id, TEST_USER) is None


class TestLedgers:

    def test_create_and_list_with_group_name(self, db, company):
        group = _group(db, company, "Cash-in-Hand")
        crud_ledgers.create_ledger(db, LedgerCreate(name="Petty Cash", group_id=group.id), company.id, TEST_USER)

        (ledger,) = crud_ledgers.get_ledgers(db, company.id)

        assert ledger.name == "Petty Cash"
        assert ledger.group_name == "Cash-in-Hand"

    def test_group_must_belong_to_company(self, db, company, other_company):
        group = _group(db, company, "Cash-in-Hand")

        with pytest.raises(MissingReferenceError):
            crud_ledgers.create_ledger(db, LedgerCreate(name="Petty Cash", group_id=group.id), other_company.id, TEST_USER)
