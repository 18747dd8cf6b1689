"""baseline ledger and invoicing schema

Revision ID: a1c3e5f70b21
Revises:
Create Date: 2025-11-03 10:12:41.318205

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'a1c3e5f70b21'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


ledger_nature = sa.Enum('Asset', 'Liability', 'Income', 'Expense', name='ledgernature')
voucher_type = sa.Enum(
    'Sales', 'Purchase', 'Journal', 'Payment', 'Receipt', 'Contra', 'Credit Note', 'Debit Note',
    name='vouchertype',
)
invoice_type = sa.Enum('TAX_INVOICE', 'BILL_OF_SUPPLY', 'SALES_RETURN', name='invoicetype')
invoice_status = sa.Enum('Draft', 'Unpaid', 'Partially Paid', 'Paid', 'Void', name='invoicestatus')


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_by', sa.String(), nullable=True),
        sa.Column('updated_by', sa.String(), nullable=True),
    ]


def _company_fk():
    return sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=False)


def upgrade() -> None:
    op.create_table(
        'companies',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('company_name', sa.String(), nullable=False, unique=True),
        sa.Column('address_line1', sa.Text(), nullable=True),
        sa.Column('address_line2', sa.Text(), nullable=True),
        sa.Column('city_pincode', sa.String(), nullable=True),
        sa.Column('state', sa.String(), nullable=True),
        sa.Column('state_code', sa.String(), nullable=True),
        sa.Column('gstin', sa.String(), nullable=True, unique=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('bank_name', sa.String(), nullable=True),
        sa.Column('bank_account_no', sa.String(), nullable=True),
        sa.Column('bank_ifsc_code', sa.String(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        'parties',
        sa.Column('id', sa.Integer(), primary_key=True),
        _company_fk(),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('address_line1', sa.Text(), nullable=True),
        sa.Column('address_line2', sa.Text(), nullable=True),
        sa.Column('city_pincode', sa.String(), nullable=True),
        sa.Column('state', sa.String(), nullable=True),
        sa.Column('state_code', sa.String(), nullable=True),
        sa.Column('gstin', sa.String(), nullable=True),
        sa.Column('is_customer', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index('ix_parties_company_id', 'parties', ['company_id'])

    op.create_table(
        'ledger_groups',
        sa.Column('id', sa.Integer(), primary_key=True),
        _company_fk(),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('parent_id', sa.Integer(), sa.ForeignKey('ledger_groups.id', ondelete='CASCADE'), nullable=True),
        sa.Column('nature', ledger_nature, nullable=False),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.UniqueConstraint('company_id', 'name', name='_company_ledger_group_name_uc'),
    )
    op.create_index('ix_ledger_groups_company_id', 'ledger_groups', ['company_id'])

    op.create_table(
        'ledgers',
        sa.Column('id', sa.Integer(), primary_key=True),
        _company_fk(),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('group_id', sa.Integer(), sa.ForeignKey('ledger_groups.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('opening_balance', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.Column('is_dr', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('gstin', sa.String(), nullable=True),
        sa.Column('state', sa.String(), nullable=True),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.UniqueConstraint('company_id', 'name', name='_company_ledger_name_uc'),
    )
    op.create_index('ix_ledgers_company_id', 'ledgers', ['company_id'])

    op.create_table(
        'stock_units',
        sa.Column('id', sa.Integer(), primary_key=True),
        _company_fk(),
        sa.Column('name', sa.String(), nullable=False),
        sa.UniqueConstraint('company_id', 'name', name='_company_stock_unit_name_uc'),
    )

    op.create_table(
        'stock_warehouses',
        sa.Column('id', sa.Integer(), primary_key=True),
        _company_fk(),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.UniqueConstraint('company_id', 'name', name='_company_stock_warehouse_name_uc'),
    )

    op.create_table(
        'stock_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        _company_fk(),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('unit_id', sa.Integer(), sa.ForeignKey('stock_units.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('gst_rate', sa.Numeric(5, 2), nullable=False, server_default='0'),
        sa.Column('opening_qty', sa.Numeric(14, 3), nullable=False, server_default='0'),
        sa.Column('opening_rate', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.UniqueConstraint('company_id', 'name', name='_company_stock_item_name_uc'),
    )

    op.create_table(
        'vouchers',
        sa.Column('id', sa.Integer(), primary_key=True),
        _company_fk(),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('voucher_number', sa.String(), nullable=False),
        sa.Column('voucher_type', voucher_type, nullable=False),
        sa.Column('narration', sa.Text(), nullable=True),
        sa.Column('total_amount', sa.Numeric(14, 2), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('company_id', 'voucher_number', 'voucher_type', name='_company_voucher_number_type_uc'),
    )
    op.create_index('ix_vouchers_company_id', 'vouchers', ['company_id'])
    op.create_index('ix_vouchers_date', 'vouchers', ['date'])

    op.create_table(
        'voucher_entries',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('voucher_id', sa.Integer(), sa.ForeignKey('vouchers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('ledger_id', sa.Integer(), sa.ForeignKey('ledgers.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('debit', sa.Numeric(14, 2), sa.CheckConstraint('debit >= 0'), nullable=False, server_default='0'),
        sa.Column('credit', sa.Numeric(14, 2), sa.CheckConstraint('credit >= 0'), nullable=False, server_default='0'),
    )
    op.create_index('ix_voucher_entries_voucher_id', 'voucher_entries', ['voucher_id'])
    op.create_index('ix_voucher_entries_ledger_id', 'voucher_entries', ['ledger_id'])

    op.create_table(
        'voucher_inventory_entries',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('voucher_id', sa.Integer(), sa.ForeignKey('vouchers.id', ondelete='CASCADE'), nullable=False),
        sa.Column('item_id', sa.Integer(), sa.ForeignKey('stock_items.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('warehouse_id', sa.Integer(), sa.ForeignKey('stock_warehouses.id', ondelete='SET NULL'), nullable=True),
        sa.Column('quantity', sa.Numeric(14, 3), nullable=False),
        sa.Column('rate', sa.Numeric(14, 2), nullable=False),
        sa.Column('amount', sa.Numeric(14, 2), nullable=False),
    )
    op.create_index('ix_voucher_inventory_entries_voucher_id', 'voucher_inventory_entries', ['voucher_id'])
    op.create_index('ix_voucher_inventory_entries_item_id', 'voucher_inventory_entries', ['item_id'])

    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True),
        _company_fk(),
        sa.Column('product_name', sa.String(), nullable=False),
        sa.Column('sku', sa.String(), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('cost_price', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.Column('sale_price', sa.Numeric(14, 2), nullable=False, server_default='0'),
        sa.Column('current_stock', sa.Numeric(14, 3), nullable=False, server_default='0'),
        sa.Column('unit_of_measure', sa.String(), nullable=True, server_default='pcs'),
        sa.Column('hsn_acs_code', sa.String(), nullable=True),
        sa.Column('low_stock_threshold', sa.Numeric(14, 3), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.UniqueConstraint('company_id', 'product_name', name='_company_product_name_uc'),
        sa.UniqueConstraint('company_id', 'sku', name='_company_product_sku_uc'),
    )
    op.create_index('ix_products_company_id', 'products', ['company_id'])

    op.create_table(
        'invoices',
        sa.Column('id', sa.Integer(), primary_key=True),
        _company_fk(),
        sa.Column('customer_id', sa.Integer(), sa.ForeignKey('parties.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('invoice_number', sa.String(), nullable=False),
        sa.Column('invoice_type', invoice_type, nullable=False),
        sa.Column('invoice_date', sa.Date(), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('status', invoice_status, nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('amount_before_tax', sa.Numeric(16, 4), nullable=False, server_default='0'),
        sa.Column('total_cgst_amount', sa.Numeric(16, 4), nullable=False, server_default='0'),
        sa.Column('total_sgst_amount', sa.Numeric(16, 4), nullable=False, server_default='0'),
        sa.Column('total_igst_amount', sa.Numeric(16, 4), nullable=False, server_default='0'),
        sa.Column('party_bill_returns_amount', sa.Numeric(16, 4), nullable=False, server_default='0'),
        sa.Column('total_amount', sa.Numeric(16, 4), nullable=False, server_default='0'),
        sa.Column('paid_amount', sa.Numeric(16, 4), nullable=False, server_default='0'),
        sa.Column('reverse_charge', sa.String(), nullable=True),
        sa.Column('transportation_mode', sa.String(), nullable=True),
        sa.Column('vehicle_number', sa.String(), nullable=True),
        sa.Column('date_of_supply', sa.Date(), nullable=True),
        sa.Column('place_of_supply_state', sa.String(), nullable=True),
        sa.Column('place_of_supply_state_code', sa.String(), nullable=True),
        sa.Column('bundles_count', sa.Integer(), nullable=True),
        sa.Column('consignee_name', sa.String(), nullable=True),
        sa.Column('consignee_address_line1', sa.Text(), nullable=True),
        sa.Column('consignee_address_line2', sa.Text(), nullable=True),
        sa.Column('consignee_city_pincode', sa.String(), nullable=True),
        sa.Column('consignee_state', sa.String(), nullable=True),
        sa.Column('consignee_gstin', sa.String(), nullable=True),
        sa.Column('consignee_state_code', sa.String(), nullable=True),
        sa.Column('amount_in_words', sa.Text(), nullable=True),
        sa.Column('original_invoice_number', sa.String(), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint('company_id', 'invoice_number', name='_company_invoice_number_uc'),
    )
    op.create_index('ix_invoices_company_id', 'invoices', ['company_id'])
    op.create_index('ix_invoices_invoice_number', 'invoices', ['invoice_number'])

    op.create_table(
        'invoice_line_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('invoice_id', sa.Integer(), sa.ForeignKey('invoices.id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id', ondelete='SET NULL'), nullable=True),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('hsn_acs_code', sa.String(), nullable=True),
        sa.Column('unit_of_measure', sa.String(), nullable=True),
        sa.Column('quantity', sa.Numeric(14, 3), nullable=False),
        sa.Column('unit_price', sa.Numeric(16, 4), nullable=False),
        sa.Column('discount_amount', sa.Numeric(16, 4), nullable=False, server_default='0'),
        sa.Column('taxable_value', sa.Numeric(16, 4), nullable=False),
        sa.Column('cgst_rate', sa.Numeric(5, 2), nullable=False, server_default='0'),
        sa.Column('cgst_amount', sa.Numeric(16, 4), nullable=False, server_default='0'),
        sa.Column('sgst_rate', sa.Numeric(5, 2), nullable=False, server_default='0'),
        sa.Column('sgst_amount', sa.Numeric(16, 4), nullable=False, server_default='0'),
        sa.Column('igst_rate', sa.Numeric(5, 2), nullable=False, server_default='0'),
        sa.Column('igst_amount', sa.Numeric(16, 4), nullable=False, server_default='0'),
        sa.Column('line_total', sa.Numeric(16, 4), nullable=False),
    )
    op.create_index('ix_invoice_line_items_invoice_id', 'invoice_line_items', ['invoice_id'])

    op.create_table(
        'transactions',
        sa.Column('id', sa.Integer(), primary_key=True),
        _company_fk(),
        sa.Column('customer_id', sa.Integer(), sa.ForeignKey('parties.id', ondelete='SET NULL'), nullable=True),
        sa.Column('lender_id', sa.Integer(), nullable=True),
        sa.Column('amount', sa.Numeric(16, 4), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('related_invoice_id', sa.Integer(), sa.ForeignKey('invoices.id', ondelete='SET NULL'), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_transactions_company_id', 'transactions', ['company_id'])
    op.create_index('ix_transactions_category', 'transactions', ['category'])
    op.create_index('ix_transactions_related_invoice_id', 'transactions', ['related_invoice_id'])

    op.create_table(
        'transaction_line_items',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('transaction_id', sa.Integer(), sa.ForeignKey('transactions.id', ondelete='CASCADE'), nullable=False),
        sa.Column('product_id', sa.Integer(), sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('quantity', sa.Numeric(14, 3), nullable=False),
        sa.Column('unit_sale_price', sa.Numeric(16, 4), nullable=True),
    )
    op.create_index('ix_transaction_line_items_transaction_id', 'transaction_line_items', ['transaction_id'])

    op.create_table(
        'document_sequences',
        sa.Column('id', sa.Integer(), primary_key=True),
        _company_fk(),
        sa.Column('prefix', sa.String(), nullable=False),
        sa.Column('last_value', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('width', sa.Integer(), nullable=False, server_default='4'),
        *_timestamps(),
        sa.UniqueConstraint('company_id', 'prefix', name='_company_document_prefix_uc'),
    )

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('company_id', sa.Integer(), sa.ForeignKey('companies.id', ondelete='CASCADE'), nullable=True),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('type', sa.String(), nullable=False, server_default='info'),
        sa.Column('link', sa.String(), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_notifications_company_id', 'notifications', ['company_id'])


def downgrade() -> None:
    for table in (
        'notifications',
        'document_sequences',
        'transaction_line_items',
        'transactions',
        'invoice_line_items',
        'invoices',
        'products',
        'voucher_inventory_entries',
        'voucher_entries',
        'vouchers',
        'stock_items',
        'stock_warehouses',
        'stock_units',
        'ledgers',
        'ledger_groups',
        'parties',
        'companies',
    ):
        op.drop_table(table)

    bind = op.get_bind()
    for enum_type in (invoice_status, invoice_type, voucher_type, ledger_nature):
        enum_type.drop(bind, checkfirst=True)
