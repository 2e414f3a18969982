from decimal import Decimal

import pytest
from rest_framework.test import APIClient

from barbearias.models import Barber, PaymentSettings
from clientes.models import Customer
from fila import ledger
from fila.notifications import QueueNotifier
from produtos.models import Item
from servicos.models import Service


class RecordingNotifier(QueueNotifier):
    def __init__(self):
        self.events = []

    def notify(self, entry, *, evento, mensagem="", extra=None):
        self.events.append((evento, entry.pk))


@pytest.fixture
def api():
    return APIClient()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def fee_table(db):
    return PaymentSettings.objects.create(
        commission_rate=Decimal("0.15"),
        credit_card_fee=Decimal("0.035"),
        credit_card_fee_2x=Decimal("0.045"),
        credit_card_fee_3x=Decimal("0.055"),
        debit_card_fee=Decimal("0.025"),
    )


@pytest.fixture
def barber(db):
    return Barber.objects.create(name="João")


@pytest.fixture
def other_barber(db):
    return Barber.objects.create(name="Pedro")


@pytest.fixture
def corte(db):
    return Service.objects.create(name="Corte", price=Decimal("40.00"), average_time=30)


@pytest.fixture
def barba(db):
    return Service.objects.create(name="Barba", price=Decimal("25.00"), average_time=20)


@pytest.fixture
def pomada(db):
    return Item.objects.create(name="Pomada", value=Decimal("30.00"), qtd=5)


@pytest.fixture
def make_customer(db):
    seq = iter(range(1, 1000))

    def _make(name=None):
        n = next(seq)
        return Customer.objects.create(name=name or f"Cliente {n}", phone=f"551199900{n:04d}")

    return _make


@pytest.fixture
def enqueue(make_customer, barber, corte):
    """Coloca um cliente novo na fila do `barber` (ou do barbeiro informado)."""

    def _enqueue(target=None, services=None):
        customer = make_customer()
        return ledger.enqueue(customer.pk, (target or barber).pk, [s.pk for s in (services or [corte])])

    return _enqueue
