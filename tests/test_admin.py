import pytest
from django.urls import reverse

from barbearias.models import BarberStatus
from fila.models import EntryStatus

pytestmark = pytest.mark.django_db


def _barber_form(barber, **changes):
    data = {
        "name": barber.name,
        "phone": barber.phone,
        "status": barber.status,
        "queue_status": barber.queue_status,
        "commission_rate": str(barber.commission_rate),
    }
    data.update(changes)
    return data


class TestBarberAdmin:
    def test_deactivating_in_form_cancels_queue(self, admin_client, enqueue, barber):
        a, b = enqueue(), enqueue()
        url = reverse("admin:barbearias_barber_change", args=[barber.pk])
        r = admin_client.post(url, _barber_form(barber, status="inactive"))
        assert r.status_code == 302

        barber.refresh_from_db()
        assert barber.status == BarberStatus.INACTIVE
        for entry in (a, b):
            entry.refresh_from_db()
            assert entry.status == EntryStatus.CANCELLED
            assert entry.position is None

    def test_other_changes_keep_queue(self, admin_client, enqueue, barber):
        a = enqueue()
        url = reverse("admin:barbearias_barber_change", args=[barber.pk])
        r = admin_client.post(url, _barber_form(barber, name="João Silva"))
        assert r.status_code == 302
        a.refresh_from_db()
        assert a.status == EntryStatus.WAITING

    def test_bulk_deactivate_action(self, admin_client, enqueue, barber):
        a = enqueue()
        url = reverse("admin:barbearias_barber_changelist")
        r = admin_client.post(url, {"action": "desativar", "_selected_action": [barber.pk]})
        assert r.status_code == 302
        a.refresh_from_db()
        assert a.status == EntryStatus.CANCELLED
