from io import StringIO

import pytest
from django.core.management import call_command

from clientes.models import Customer
from core import catalog
from core.contacts import find_or_create_customer, normalize_msisdn_br
from core.exceptions import InsufficientStockError, InvalidStateError, NotFoundError, ValidationError
from fila.models import EntryStatus, QueueEntry


@pytest.mark.parametrize("raw, expected", [
    ("(11) 98765-4321", "5511987654321"),
    ("+55 11 98765-4321", "5511987654321"),
    ("005511987654321", "5511987654321"),
    ("1134567890", "551134567890"),
    ("12345", None),
    ("", None),
])
def test_normalize_msisdn_br(raw, expected):
    assert normalize_msisdn_br(raw) == expected


@pytest.mark.django_db
class TestFindOrCreateCustomer:
    def test_exact_match(self):
        c = Customer.objects.create(name="Léo", phone="5511987654321")
        assert find_or_create_customer("Outro", "11987654321") == c

    def test_creates_when_missing(self):
        c = find_or_create_customer("Léo", "")
        assert c.phone is None
        assert c.name == "Léo"


@pytest.mark.django_db
class TestStock:
    def test_decrement(self, pomada):
        catalog.decrement_stock(pomada.pk, 5)
        pomada.refresh_from_db()
        assert pomada.qtd == 0

    def test_decrement_below_zero(self, pomada):
        with pytest.raises(InsufficientStockError):
            catalog.decrement_stock(pomada.pk, 6)

    def test_decrement_unknown_item(self):
        with pytest.raises(NotFoundError):
            catalog.decrement_stock(9999, 1)

    def test_decrement_zero(self, pomada):
        with pytest.raises(ValidationError):
            catalog.decrement_stock(pomada.pk, 0)

    def test_adjust_up(self, pomada):
        assert catalog.adjust_stock(pomada.pk, 3).qtd == 8


@pytest.mark.django_db
class TestStatusGuard:
    def test_created_as_waiting(self, make_customer, barber):
        e = QueueEntry.objects.create(customer=make_customer(), barber=barber,
                                      status=EntryStatus.COMPLETED, position=1)
        assert e.status == EntryStatus.WAITING

    def test_terminal_status_is_final(self, enqueue):
        e = enqueue()
        QueueEntry.objects.filter(pk=e.pk).update(status=EntryStatus.CANCELLED, position=None)
        e.refresh_from_db()
        e.status, e.position = EntryStatus.WAITING, 1
        with pytest.raises(InvalidStateError):
            e.save()


@pytest.mark.django_db
def test_reindex_command(enqueue, barber):
    a, b = enqueue(), enqueue()
    QueueEntry.objects.filter(pk=b.pk).update(position=5)
    out = StringIO()
    call_command("reindexar_fila", "--barber", str(barber.pk), stdout=out)
    b.refresh_from_db()
    assert b.position == 2
    assert "Posições corrigidas: 1" in out.getvalue()
