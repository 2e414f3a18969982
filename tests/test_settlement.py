from decimal import Decimal

import pytest

from core.exceptions import InsufficientStockError, InvalidStateError, ValidationError
from fila import ledger, settlement
from fila.models import EntryStatus, QueueEntry
from historico.models import History
from produtos.models import Item

pytestmark = pytest.mark.django_db


@pytest.fixture(autouse=True)
def _fee_table(fee_table):
    return fee_table


class TestComplete:
    def test_history_totals_and_fees(self, make_customer, barber, corte, barba, pomada):
        entry = ledger.enqueue(make_customer("Ana").pk, barber.pk, [corte.pk])
        # 40 + 30 = 70 no crédito 1x (3,5%)
        h = settlement.complete(
            entry.pk, final_products=[{"item_id": pomada.pk, "quantity": 1}],
            payment_method="credit_card", installments=1,
        )
        assert h.gross_total == Decimal("70.00")
        assert h.fee_amount == Decimal("2.45")
        assert h.net_amount == Decimal("67.55")
        assert h.customer_name == "Ana"
        assert h.barber_name == barber.name
        assert h.recomputed_gross() == h.gross_total

    def test_credit_2x_fee(self, make_customer, barber, corte, barba):
        entry = ledger.enqueue(make_customer().pk, barber.pk, [corte.pk])
        h = settlement.complete(
            entry.pk, payment_method="credit_card", installments=2,
            extra_services=[{"service_id": barba.pk, "quantity": 2}, barba.pk],
        )
        # 40 + 3 * 25 = 115 ; 115 * 0.045 = 5.175 -> 5.18
        assert h.gross_total == Decimal("115.00")
        assert h.fee_amount == Decimal("5.18")
        assert h.services.filter(is_extra=True).count() == 3

    def test_exact_100_on_credit_2x(self, make_customer, barber):
        from servicos.models import Service
        svc = Service.objects.create(name="Combo", price=Decimal("100.00"), average_time=60)
        entry = ledger.enqueue(make_customer().pk, barber.pk, [svc.pk])
        h = settlement.complete(entry.pk, payment_method="credit_card", installments=2)
        assert (h.fee_amount, h.net_amount) == (Decimal("4.50"), Decimal("95.50"))

    def test_uses_price_quoted_at_enqueue(self, make_customer, barber, corte):
        entry = ledger.enqueue(make_customer().pk, barber.pk, [corte.pk])
        corte.price = Decimal("60.00")
        corte.save()
        h = settlement.complete(entry.pk, payment_method="cash")
        assert h.gross_total == Decimal("40.00")

    def test_final_services_override(self, make_customer, barber, corte, barba):
        entry = ledger.enqueue(make_customer().pk, barber.pk, [corte.pk, barba.pk])
        h = settlement.complete(entry.pk, final_services=[barba.pk], payment_method="pix")
        assert h.gross_total == Decimal("25.00")
        assert [s.service_name for s in h.services.all()] == ["Barba"]

    def test_entry_leaves_queue_and_gap_closes(self, enqueue, barber):
        a, b = enqueue(), enqueue()
        settlement.complete(a.pk, payment_method="cash")
        a.refresh_from_db()
        b.refresh_from_db()
        assert a.status == EntryStatus.COMPLETED
        assert a.position is None and a.finished_at is not None
        assert b.position == 1

    def test_stock_is_decremented(self, enqueue, pomada):
        entry = enqueue()
        settlement.complete(
            entry.pk, payment_method="cash",
            final_products=[{"item_id": pomada.pk, "quantity": 2}, {"item_id": pomada.pk, "quantity": 1}],
        )
        pomada.refresh_from_db()
        assert pomada.qtd == 2
        line = History.objects.get().items.get()
        assert (line.quantity, line.total_price) == (3, Decimal("90.00"))

    def test_insufficient_stock_rolls_back_everything(self, enqueue, pomada):
        shampoo = Item.objects.create(name="Shampoo", value=Decimal("20.00"), qtd=10)
        entry = enqueue()
        with pytest.raises(InsufficientStockError):
            settlement.complete(
                entry.pk, payment_method="cash",
                final_products=[
                    {"item_id": shampoo.pk, "quantity": 2},
                    {"item_id": pomada.pk, "quantity": 6},
                ],
            )
        shampoo.refresh_from_db()
        pomada.refresh_from_db()
        entry.refresh_from_db()
        assert (shampoo.qtd, pomada.qtd) == (10, 5)
        assert entry.status == EntryStatus.WAITING
        assert not History.objects.exists()

    def test_exactly_once(self, enqueue, pomada):
        entry = enqueue()
        settlement.complete(entry.pk, payment_method="cash", final_products=[{"item_id": pomada.pk, "quantity": 1}])
        with pytest.raises(InvalidStateError, match="já concluído"):
            settlement.complete(entry.pk, payment_method="cash", final_products=[{"item_id": pomada.pk, "quantity": 1}])
        pomada.refresh_from_db()
        assert pomada.qtd == 4
        assert History.objects.count() == 1

    def test_cancelled_entry(self, enqueue):
        entry = enqueue()
        ledger.cancel(entry.pk)
        with pytest.raises(InvalidStateError):
            settlement.complete(entry.pk, payment_method="cash")

    def test_unknown_entry(self, barber):
        with pytest.raises(InvalidStateError):
            settlement.complete(9999, payment_method="cash")

    def test_invalid_payment_checked_first(self, enqueue):
        entry = enqueue()
        with pytest.raises(ValidationError):
            settlement.complete(entry.pk, payment_method="pix", installments=2)
        entry.refresh_from_db()
        assert entry.status == EntryStatus.WAITING

    def test_unknown_product(self, enqueue):
        with pytest.raises(ValidationError):
            settlement.complete(enqueue().pk, payment_method="cash", final_products=[{"item_id": 9999, "quantity": 1}])

    def test_repeated_final_service_rejected(self, enqueue, corte):
        entry = enqueue()
        with pytest.raises(ValidationError, match="repetido"):
            settlement.complete(entry.pk, final_services=[corte.pk, corte.pk], payment_method="cash")
        entry.refresh_from_db()
        assert entry.status == EntryStatus.WAITING
        assert not History.objects.exists()

    def test_requires_some_service(self, enqueue):
        with pytest.raises(ValidationError):
            settlement.complete(enqueue().pk, final_services=[], payment_method="cash")

    def test_non_positive_quantity(self, enqueue, pomada):
        with pytest.raises(ValidationError):
            settlement.complete(enqueue().pk, payment_method="cash", final_products=[{"item_id": pomada.pk, "quantity": 0}])

    def test_history_linked_to_entry(self, enqueue):
        entry = enqueue()
        h = settlement.complete(entry.pk, payment_method="cash")
        assert QueueEntry.objects.get(pk=entry.pk).history == h

    def test_notifies_completion(self, enqueue, notifier):
        entry = enqueue()
        settlement.complete(entry.pk, payment_method="cash", notifier=notifier)
        assert notifier.events == [("atendimento_concluido", entry.pk)]
