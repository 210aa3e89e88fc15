from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy import update

from jewelbook.core.errors import NotFound, PartialMutationFailure, ValidationFailure
from jewelbook.models.customer_model import Customer
from jewelbook.models.invoice_sequence_model import InvoiceSequence
from jewelbook.models.sale_model import Sale
from jewelbook.repositories.customer_repository import CustomerRepository
from jewelbook.repositories.transaction_repositories import PaymentRepository, SaleRepository
from jewelbook.services import ledger_service
from jewelbook.services.invoice_service import next_invoice_number, tenant_fragment
from jewelbook.services.ledger_service import TransactionKind


def _balances(db, customer):
    db.refresh(customer)
    return Decimal(customer.closing_amount), Decimal(customer.closing_fine)


class TestSale:
    def test_create_derives_fields_and_posts_delta(self, db, tenant_a, customer, sale_payload):
        sale = ledger_service.create_transaction(db, tenant_a, "sale", sale_payload(customer.id))

        assert sale.total_ghat == Decimal("5.000")
        assert sale.fine == Decimal("30.150")
        assert sale.amount == Decimal("500.00")
        assert sale.invoice_no == "S-ACME-000001"
        assert _balances(db, customer) == (Decimal("1500.00"), Decimal("40.150"))

    def test_delete_restores_balances(self, db, tenant_a, customer, sale_payload):
        sale = ledger_service.create_transaction(db, tenant_a, "sale", sale_payload(customer.id))

        result = ledger_service.delete_transaction(db, tenant_a, "sale", sale.id)

        assert result == {"message": "Sale deleted successfully", "invoice_no": "S-ACME-000001"}
        assert _balances(db, customer) == (Decimal("1000.00"), Decimal("10.000"))
        assert db.query(Sale).count() == 0

    def test_unknown_customer(self, db, tenant_a, sale_payload):
        with pytest.raises(NotFound):
            ledger_service.create_transaction(db, tenant_a, "sale", sale_payload(999))
        assert db.query(Sale).count() == 0

    def test_delete_missing_record(self, db, tenant_a, customer):
        with pytest.raises(NotFound):
            ledger_service.delete_transaction(db, tenant_a, "sale", 12345)

    def test_unknown_kind_rejected(self, db, tenant_a, customer, sale_payload):
        with pytest.raises(ValueError):
            ledger_service.create_transaction(db, tenant_a, "gift", sale_payload(customer.id))


class TestPurchase:
    def test_purchase_reduces_balances(self, db, tenant_a, customer, purchase_payload):
        purchase = ledger_service.create_transaction(
            db, tenant_a, TransactionKind.PURCHASE, purchase_payload(customer.id)
        )

        assert purchase.invoice_no == "P-ACME-000001"
        assert purchase.fine == Decimal("1980.000")
        assert purchase.amount == Decimal("600.00")
        assert _balances(db, customer) == (Decimal("400.00"), Decimal("-1970.000"))
        assert customer.fine_side == "CR"

    def test_purchase_delete_round_trip(self, db, tenant_a, customer, purchase_payload):
        purchase = ledger_service.create_transaction(db, tenant_a, "purchase", purchase_payload(customer.id))
        ledger_service.delete_transaction(db, tenant_a, "purchase", purchase.id)

        assert _balances(db, customer) == (Decimal("1000.00"), Decimal("10.000"))


class TestPayment:
    def test_receipt_increases_balance(self, db, tenant_a, customer, payment_payload):
        receipt = ledger_service.create_transaction(
            db, tenant_a, "payment", payment_payload(customer.id, "receipt")
        )

        assert receipt.invoice_no == "PAY-ACME-000001"
        assert _balances(db, customer) == (Decimal("1200.00"), Decimal("10.000"))

    def test_payment_decreases_balance(self, db, tenant_a, customer, payment_payload):
        ledger_service.create_transaction(db, tenant_a, "payment", payment_payload(customer.id, "payment"))

        assert _balances(db, customer) == (Decimal("800.00"), Decimal("10.000"))

    def test_fine_payment_moves_fine_balance(self, db, tenant_a, customer, payment_payload):
        payload = payment_payload(
            customer.id,
            "payment",
            payment_type="fine",
            amount=None,
            gross=Decimal("10"),
            purity=Decimal("50"),
        )
        payment = ledger_service.create_transaction(db, tenant_a, "payment", payload)

        assert payment.fine == Decimal("5.000")
        assert payment.amount == Decimal("0.00")
        assert _balances(db, customer) == (Decimal("1000.00"), Decimal("5.000"))

    def test_rate_cut_fine_is_not_posted(self, db, tenant_a, customer, payment_payload):
        payload = payment_payload(
            customer.id,
            "receipt",
            payment_type="rate_cut_fine",
            gross=Decimal("10"),
            purity=Decimal("100"),
            rate=Decimal("70000"),
            amount=Decimal("0"),
        )
        receipt = ledger_service.create_transaction(db, tenant_a, "payment", payload)

        assert receipt.rate_cut_fine == Decimal("700.00")
        assert _balances(db, customer) == (Decimal("1000.00"), Decimal("20.000"))

    def test_delete_receipt(self, db, tenant_a, customer, payment_payload):
        receipt = ledger_service.create_transaction(
            db, tenant_a, "payment", payment_payload(customer.id, "receipt")
        )
        result = ledger_service.delete_transaction(db, tenant_a, "payment", receipt.id)

        assert result["message"] == "Payment deleted successfully"
        assert _balances(db, customer) == (Decimal("1000.00"), Decimal("10.000"))


class TestMixedSequence:
    def test_closing_always_equals_opening_plus_live_deltas(
            self, db, tenant_a, customer, sale_payload, purchase_payload, payment_payload
    ):
        sale = ledger_service.create_transaction(db, tenant_a, "sale", sale_payload(customer.id))
        ledger_service.create_transaction(db, tenant_a, "purchase", purchase_payload(customer.id))
        ledger_service.create_transaction(db, tenant_a, "payment", payment_payload(customer.id, "receipt"))
        ledger_service.create_transaction(db, tenant_a, "payment", payment_payload(customer.id, "payment"))
        ledger_service.delete_transaction(db, tenant_a, "sale", sale.id)

        check = ledger_service.verify_customer_balance(db, tenant_a, customer.id)

        assert check["consistent"] is True
        assert check["stored_amount"] == Decimal("400.00")
        assert check["stored_fine"] == Decimal("-1970.000")

    def test_receipt_and_payment_after_sale(self, db, tenant_a, customer, sale_payload, payment_payload):
        ledger_service.create_transaction(db, tenant_a, "sale", sale_payload(customer.id))

        receipt = ledger_service.create_transaction(db, tenant_a, "payment", payment_payload(customer.id, "receipt"))
        assert _balances(db, customer)[0] == Decimal("1700.00")

        ledger_service.delete_transaction(db, tenant_a, "payment", receipt.id)
        ledger_service.create_transaction(db, tenant_a, "payment", payment_payload(customer.id, "payment"))
        assert _balances(db, customer)[0] == Decimal("1300.00")

    def test_delete_then_recreate_is_neutral(self, db, tenant_a, customer, sale_payload):
        first = ledger_service.create_transaction(db, tenant_a, "sale", sale_payload(customer.id))
        before = _balances(db, customer)

        ledger_service.delete_transaction(db, tenant_a, "sale", first.id)
        ledger_service.create_transaction(db, tenant_a, "sale", sale_payload(customer.id))

        assert _balances(db, customer) == before


class TestRemarks:
    def test_remarks_update_leaves_balances_alone(self, db, tenant_a, customer, sale_payload):
        sale = ledger_service.create_transaction(db, tenant_a, "sale", sale_payload(customer.id))

        updated = ledger_service.update_remarks(db, tenant_a, "sale", sale.id, "handed over at counter")

        assert updated.remarks == "handed over at counter"
        assert updated.amount == Decimal("500.00")
        assert _balances(db, customer) == (Decimal("1500.00"), Decimal("40.150"))


class TestPartialFailure:
    def test_failed_balance_write_rolls_back_record_and_invoice(
            self, db, tenant_a, customer, sale_payload, monkeypatch
    ):
        monkeypatch.setattr(CustomerRepository, "apply_balance_delta", lambda self, *a, **kw: 0)

        with pytest.raises(PartialMutationFailure) as exc_info:
            ledger_service.create_transaction(db, tenant_a, "sale", sale_payload(customer.id))

        assert exc_info.value.rolled_back is True
        assert db.query(Sale).count() == 0
        assert _balances(db, customer) == (Decimal("1000.00"), Decimal("10.000"))

        monkeypatch.undo()
        sale = ledger_service.create_transaction(db, tenant_a, "sale", sale_payload(customer.id))
        assert sale.invoice_no == "S-ACME-000001"

    def test_failed_balance_write_on_delete_keeps_record(
            self, db, tenant_a, customer, sale_payload, monkeypatch
    ):
        sale = ledger_service.create_transaction(db, tenant_a, "sale", sale_payload(customer.id))
        monkeypatch.setattr(CustomerRepository, "apply_balance_delta", lambda self, *a, **kw: 0)

        with pytest.raises(PartialMutationFailure):
            ledger_service.delete_transaction(db, tenant_a, "sale", sale.id)

        assert SaleRepository(db, tenant_a).get(sale.id).invoice_no == "S-ACME-000001"
        assert _balances(db, customer) == (Decimal("1500.00"), Decimal("40.150"))


class TestInvoiceNumbers:
    def test_tenant_fragment(self):
        assert tenant_fragment("acme-jewellers") == "ACME"
        assert tenant_fragment("a.b") == "AB"
        assert tenant_fragment("---") == "X"

    def test_numbers_increase_per_kind(self, db, tenant_a, customer, sale_payload, payment_payload):
        first = ledger_service.create_transaction(db, tenant_a, "sale", sale_payload(customer.id))
        receipt = ledger_service.create_transaction(db, tenant_a, "payment", payment_payload(customer.id))
        second = ledger_service.create_transaction(db, tenant_a, "sale", sale_payload(customer.id))

        assert first.invoice_no == "S-ACME-000001"
        assert second.invoice_no == "S-ACME-000002"
        assert receipt.invoice_no == "PAY-ACME-000001"

    def test_numbers_not_reused_after_delete(self, db, tenant_a, customer, sale_payload):
        first = ledger_service.create_transaction(db, tenant_a, "sale", sale_payload(customer.id))
        ledger_service.delete_transaction(db, tenant_a, "sale", first.id)
        second = ledger_service.create_transaction(db, tenant_a, "sale", sale_payload(customer.id))

        assert second.invoice_no == "S-ACME-000002"

    def test_counters_are_per_tenant(self, db, tenant_a, tenant_b):
        assert next_invoice_number(db, tenant_a, "sale") == "S-ACME-000001"
        assert next_invoice_number(db, tenant_b, "sale") == "S-BRIG-000001"
        assert next_invoice_number(db, tenant_a, "sale") == "S-ACME-000002"
        db.commit()

        rows = db.query(InvoiceSequence).filter(InvoiceSequence.kind == "sale").count()
        assert rows == 2

    def test_unknown_kind(self, db, tenant_a):
        with pytest.raises(ValidationFailure):
            next_invoice_number(db, tenant_a, "gift")


class TestStatement:
    def test_running_balance(self, db, tenant_a, customer, sale_payload, payment_payload):
        ledger_service.create_transaction(
            db, tenant_a, "payment", payment_payload(customer.id, "receipt", date=date(2026, 3, 15))
        )
        ledger_service.create_transaction(db, tenant_a, "sale", sale_payload(customer.id))

        statement = ledger_service.customer_statement(db, tenant_a, customer.id)

        assert [e["kind"] for e in statement["entries"]] == ["sale", "payment"]
        assert [e["balance_amount"] for e in statement["entries"]] == [Decimal("1500.00"), Decimal("1700.00")]
        assert statement["closing_amount"] == Decimal("1700.00")
        assert statement["closing_fine"] == Decimal("40.150")
        assert statement["entries"][0]["description"] == "Silver chain"
        assert statement["entries"][1]["description"] == "receipt"

    def test_empty_statement(self, db, tenant_a, customer):
        statement = ledger_service.customer_statement(db, tenant_a, customer.id)

        assert statement["entries"] == []
        assert statement["closing_amount"] == Decimal("1000.00")


class TestVerify:
    def test_drift_is_reported(self, db, tenant_a, customer, sale_payload, caplog):
        ledger_service.create_transaction(db, tenant_a, "sale", sale_payload(customer.id))
        db.execute(
            update(Customer)
            .where(Customer.id == customer.id)
            .values(closing_amount=Customer.closing_amount + Decimal("5"))
        )
        db.commit()

        check = ledger_service.verify_customer_balance(db, tenant_a, customer.id)

        assert check["consistent"] is False
        assert check["drift_amount"] == Decimal("5.00")
        assert check["drift_fine"] == Decimal("0.000")
        assert "Balance drift" in caplog.text

    def test_payments_listing_filters(self, db, tenant_a, customer, payment_payload):
        ledger_service.create_transaction(db, tenant_a, "payment", payment_payload(customer.id, "receipt"))
        ledger_service.create_transaction(db, tenant_a, "payment", payment_payload(customer.id, "payment"))

        receipts = PaymentRepository(db, tenant_a).list(transaction_type="receipt")

        assert [p.transaction_type for p in receipts] == ["receipt"]
