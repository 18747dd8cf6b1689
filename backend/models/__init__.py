from models.company import Company
from models.parties import Party
from models.ledgers import LedgerGroup, Ledger, LedgerNature
from models.stock_items import StockUnit, StockWarehouse, StockItem
from models.vouchers import Voucher, VoucherEntry, VoucherInventoryEntry, VoucherType
from models.products import Product
from models.invoices import Invoice, InvoiceLineItem, InvoiceType, InvoiceStatus
from models.transactions import Transaction, TransactionLineItem
from models.document_sequences import DocumentSequence
from models.notifications import Notification

__all__ = ['Company', 'DocumentSequence', 'Invoice', 'InvoiceLineItem', 'InvoiceStatus', 'InvoiceType', 'Ledger', 'LedgerGroup', 'LedgerNature', 'Notification', 'Party', 'Product', 'StockItem', 'StockUnit', 'StockWarehouse', 'Transaction', 'TransactionLineItem', 'Voucher', 'VoucherEntry', 'VoucherInventoryEntry', 'VoucherType',]
