# jewelbook/repositories/transaction_repositories.py

from jewelbook.models.payment_model import Payment
from jewelbook.models.purchase_model import Purchase
from jewelbook.models.sale_model import Sale
from jewelbook.repositories.base import DatedRepository


class SaleRepository(DatedRepository):
    model = Sale
    label = "Sale"


class PurchaseRepository(DatedRepository):
    model = Purchase
    label = "Purchase"


class PaymentRepository(DatedRepository):
    model = Payment
    label = "Payment"

