# fila/fees.py
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from barbearias.models import PaymentSettings
from core.exceptions import ValidationError
from historico.models import PaymentMethod

CENT = Decimal("0.01")
MAX_INSTALLMENTS = 3


@dataclass(frozen=True)
class FeeBreakdown:
    gross_total: Decimal
    fee_rate: Decimal
    fee_amount: Decimal
    net_amount: Decimal


def validate_payment(payment_method: str, installments: int) -> None:
    if payment_method not in PaymentMethod.values:
        raise ValidationError("Forma de pagamento inválida.", payment_method=payment_method)
    if payment_method == PaymentMethod.CREDIT_CARD:
        if not 1 <= installments <= MAX_INSTALLMENTS:
            raise ValidationError(f"Parcelamento no crédito vai de 1 a {MAX_INSTALLMENTS}x.")
    elif installments != 1:
        raise ValidationError("Parcelamento só é permitido no cartão de crédito.")


def fee_rate_for(payment_method: str, installments: int, table: PaymentSettings | None = None) -> Decimal:
    validate_payment(payment_method, installments)
    if payment_method in (PaymentMethod.CASH, PaymentMethod.PIX):
        return Decimal("0")

    table = table or PaymentSettings.current()
    if payment_method == PaymentMethod.DEBIT_CARD:
        return table.debit_card_fee
    return {
        1: table.credit_card_fee,
        2: table.credit_card_fee_2x,
        3: table.credit_card_fee_3x,
    }[installments]


def compute(gross_total: Decimal, payment_method: str, installments: int = 1,
            table: PaymentSettings | None = None) -> FeeBreakdown:
    """
    Taxa sobre o bruto. O arredondamento para centavos acontece uma única vez,
    aqui, e não por linha do atendimento.
    """
    rate = fee_rate_for(payment_method, installments, table)
    fee = (gross_total * rate).quantize(CENT, rounding=ROUND_HALF_UP)
    return FeeBreakdown(
        gross_total=gross_total,
        fee_rate=rate,
        fee_amount=fee,
        net_amount=gross_total - fee,
    )
