# Automatically load all models so metadata knows them
from jewelbook.models.company_settings_model import CompanySettings
from jewelbook.models.customer_model import Customer
from jewelbook.models.expense_model import Expense
from jewelbook.models.invoice_sequence_model import InvoiceSequence
from jewelbook.models.item_model import Item
from jewelbook.models.payment_model import Payment
from jewelbook.models.purchase_model import Purchase
from jewelbook.models.sale_model import Sale
