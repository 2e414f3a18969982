from decimal import Decimal

import pytest

from core.exceptions import ValidationError
from fila import fees


@pytest.mark.django_db
class TestFeeRate:
    def test_cash_and_pix_are_free(self, fee_table):
        assert fees.fee_rate_for("cash", 1) == Decimal("0")
        assert fees.fee_rate_for("pix", 1) == Decimal("0")

    @pytest.mark.parametrize("installments, expected", [(1, "0.035"), (2, "0.045"), (3, "0.055")])
    def test_credit_by_installments(self, fee_table, installments, expected):
        assert fees.fee_rate_for("credit_card", installments) == Decimal(expected)

    def test_debit(self, fee_table):
        assert fees.fee_rate_for("debit_card", 1) == Decimal("0.025")

    def test_table_created_from_settings_defaults(self, settings):
        settings.PAYMENT_FEE_DEFAULTS = {
            "commission_rate": Decimal("0.10"),
            "credit_card_fee": Decimal("0.03"),
            "credit_card_fee_2x": Decimal("0.04"),
            "credit_card_fee_3x": Decimal("0.05"),
            "debit_card_fee": Decimal("0.02"),
        }
        assert fees.fee_rate_for("debit_card", 1) == Decimal("0.02")


@pytest.mark.parametrize(
    "method, installments",
    [("boleto", 1), ("credit_card", 0), ("credit_card", 4), ("pix", 2), ("debit_card", 3)],
)
def test_invalid_payment(method, installments):
    with pytest.raises(ValidationError):
        fees.validate_payment(method, installments)


@pytest.mark.django_db
class TestCompute:
    def test_credit_2x_on_100(self, fee_table):
        b = fees.compute(Decimal("100.00"), "credit_card", 2)
        assert b.fee_rate == Decimal("0.045")
        assert b.fee_amount == Decimal("4.50")
        assert b.net_amount == Decimal("95.50")

    def test_fee_rounded_half_up(self, fee_table):
        # 45 * 0.035 = 1.575
        assert fees.compute(Decimal("45.00"), "credit_card", 1).fee_amount == Decimal("1.58")

    def test_cash_keeps_gross(self, fee_table):
        b = fees.compute(Decimal("65.00"), "cash")
        assert (b.fee_amount, b.net_amount) == (Decimal("0.00"), Decimal("65.00"))

    def test_net_plus_fee_is_gross(self, fee_table):
        b = fees.compute(Decimal("123.45"), "debit_card")
        assert b.net_amount + b.fee_amount == b.gross_total
