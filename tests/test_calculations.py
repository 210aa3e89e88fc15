from decimal import Decimal

import pytest

from jewelbook.utils.calculations import (
    balance_side,
    compute_bullion_amount,
    compute_bullion_fine,
    compute_payment_fine,
    compute_rate_cut_fine,
    compute_total_ghat,
    derive_bullion_fields,
    money,
    weight,
)


class TestRounding:
    def test_money_half_up_two_places(self):
        assert money("10.005") == Decimal("10.01")
        assert money(None) == Decimal("0.00")

    def test_weight_half_up_three_places(self):
        assert weight("1.0005") == Decimal("1.001")
        assert weight(2) == Decimal("2.000")

    def test_float_input_goes_through_str(self):
        # Decimal(0.1) would carry binary noise
        assert money(0.1) == Decimal("0.10")


class TestBullionLine:
    def test_total_ghat(self):
        assert compute_total_ghat(1000, 5) == Decimal("5.000")

    def test_total_ghat_missing_inputs_is_zero(self):
        assert compute_total_ghat(None, 5) == Decimal("0.000")

    def test_fine_uses_net_plus_ghat(self):
        assert compute_bullion_fine(1000, Decimal("5"), 2, 1) == Decimal("30.150")

    def test_amount_by_weight(self):
        assert compute_bullion_amount(1000, 500) == Decimal("500.00")

    def test_amount_by_pieces_ignores_weight(self):
        assert compute_bullion_amount(1000, 250, pics=4) == Decimal("1000.00")

    def test_zero_pieces_falls_back_to_weight(self):
        assert compute_bullion_amount(1000, 500, pics=0) == Decimal("500.00")

    def test_derive_all_fields(self):
        fields = derive_bullion_fields(
            net_weight=Decimal("1000"),
            ghat_per_kg=Decimal("5"),
            touch=Decimal("2"),
            wastage=Decimal("1"),
            rate=Decimal("500"),
        )
        assert fields == {
            "total_ghat": Decimal("5.000"),
            "fine": Decimal("30.150"),
            "amount": Decimal("500.00"),
        }


class TestPaymentFine:
    def test_fine_from_gross_and_purity(self):
        assert compute_payment_fine(Decimal("120"), Decimal("91.6")) == Decimal("109.920")

    def test_fine_without_gross_is_zero(self):
        assert compute_payment_fine(None, Decimal("91.6")) == Decimal("0.000")

    def test_rate_cut_fine(self):
        assert compute_rate_cut_fine(Decimal("30.150"), Decimal("70000")) == Decimal("2110.50")


class TestBalanceSide:
    @pytest.mark.parametrize(
        "value,side",
        [(Decimal("1500"), "DR"), (Decimal("0"), "DR"), (Decimal("-0.01"), "CR")],
    )
    def test_side(self, value, side):
        assert balance_side(value) == side
