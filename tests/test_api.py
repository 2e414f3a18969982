from decimal import Decimal

import pytest

from barbearias.models import BarberStatus
from fila import ledger
from fila.models import EntryStatus, QueueEntry
from produtos.models import Item

pytestmark = pytest.mark.django_db


@pytest.fixture(autouse=True)
def _fee_table(fee_table):
    return fee_table


class TestQueueEndpoints:
    def test_enqueue_and_snapshot(self, api, make_customer, barber, corte, barba):
        c = make_customer()
        r = api.post("/api/fila/", {"customer_id": c.pk, "barber_id": barber.pk,
                                    "service_ids": [corte.pk, barba.pk]}, format="json")
        assert r.status_code == 201
        assert r.data["position"] == 1
        assert [s["service_id"] for s in r.data["services"]] == [corte.pk, barba.pk]

        r = api.get("/api/fila/", {"barber_id": barber.pk})
        assert r.status_code == 200
        assert r.data[0]["estimated_wait_minutes"] == 0
        assert r.data[0]["total_minutes"] == 50
        assert r.data[0]["total_price"] == "65.00"

    def test_duplicate_enqueue_is_409(self, api, make_customer, barber, corte):
        c = make_customer()
        body = {"customer_id": c.pk, "barber_id": barber.pk, "service_ids": [corte.pk]}
        assert api.post("/api/fila/", body, format="json").status_code == 201
        r = api.post("/api/fila/", body, format="json")
        assert r.status_code == 409
        assert r.data["error"] == "conflito"

    def test_inactive_barber_is_400(self, api, make_customer, barber, corte):
        barber.status = BarberStatus.INACTIVE
        barber.save()
        r = api.post("/api/fila/", {"customer_id": make_customer().pk, "barber_id": barber.pk,
                                    "service_ids": [corte.pk]}, format="json")
        assert r.status_code == 400
        assert r.data["error"] == "validacao"

    def test_snapshot_unknown_barber_is_404(self, api):
        assert api.get("/api/fila/", {"barber_id": 9999}).status_code == 404

    def test_walk_in(self, api, barber, corte):
        r = api.post("/api/fila/walk-in/", {"name": "Rui", "phone": "11 91234-5678",
                                            "barber_id": barber.pk, "service_ids": [corte.pk]}, format="json")
        assert r.status_code == 201
        assert r.data["customer_name"] == "Rui"

    def test_customer_status(self, api, enqueue, make_customer):
        enqueue()
        b = enqueue()
        r = api.get("/api/fila/status/", {"customer_id": b.customer_id})
        assert r.data["in_queue"] is True
        assert r.data["people_ahead"] == 1
        r = api.get("/api/fila/status/", {"customer_id": make_customer().pk})
        assert r.data == {"in_queue": False}

    def test_move(self, api, enqueue):
        a, b = enqueue(), enqueue()
        assert api.post(f"/api/fila/{b.pk}/mover/", {"direction": "up"}, format="json").status_code == 204
        b.refresh_from_db()
        assert b.position == 1
        r = api.post(f"/api/fila/{b.pk}/mover/", {"direction": "up"}, format="json")
        assert r.status_code == 400

    def test_cancel(self, api, enqueue):
        a = enqueue()
        assert api.post(f"/api/fila/{a.pk}/cancelar/").status_code == 204
        assert api.post(f"/api/fila/{a.pk}/cancelar/").status_code == 204
        assert api.post("/api/fila/9999/cancelar/").status_code == 404

    def test_remove_service(self, api, make_customer, barber, corte, barba):
        entry = ledger.enqueue(make_customer().pk, barber.pk, [corte.pk, barba.pk])
        r = api.post(f"/api/fila/{entry.pk}/remover-servico/", {"service_id": barba.pk}, format="json")
        assert r.status_code == 200
        assert [s["service_id"] for s in r.data["services"]] == [corte.pk]


class TestCompleteEndpoint:
    def test_complete(self, api, enqueue, pomada):
        entry = enqueue()
        r = api.post(f"/api/fila/{entry.pk}/concluir/", {
            "payment_method": "debit_card",
            "final_products": [{"item_id": pomada.pk, "quantity": 2}],
        }, format="json")
        assert r.status_code == 201
        # 40 + 60 = 100 no débito (2,5%)
        assert r.data["gross_total"] == "100.00"
        assert r.data["fee_amount"] == "2.50"
        assert r.data["net_amount"] == "97.50"
        assert len(r.data["items"]) == 1

        again = api.post(f"/api/fila/{entry.pk}/concluir/", {"payment_method": "cash"}, format="json")
        assert again.status_code == 409
        assert again.data["error"] == "estado_invalido"

    def test_insufficient_stock_is_422(self, api, enqueue, pomada):
        entry = enqueue()
        r = api.post(f"/api/fila/{entry.pk}/concluir/", {
            "payment_method": "cash",
            "final_products": [{"item_id": pomada.pk, "quantity": 50}],
        }, format="json")
        assert r.status_code == 422
        assert r.data["error"] == "estoque_insuficiente"
        assert QueueEntry.objects.get(pk=entry.pk).status == EntryStatus.WAITING

    def test_repeated_final_service_is_400(self, api, enqueue, corte):
        entry = enqueue()
        r = api.post(f"/api/fila/{entry.pk}/concluir/",
                     {"payment_method": "cash", "final_services": [corte.pk, corte.pk]}, format="json")
        assert r.status_code == 400
        assert QueueEntry.objects.get(pk=entry.pk).status == EntryStatus.WAITING

    def test_bad_payment_is_400(self, api, enqueue):
        entry = enqueue()
        r = api.post(f"/api/fila/{entry.pk}/concluir/", {"payment_method": "boleto"}, format="json")
        assert r.status_code == 400

    def test_history_listing(self, api, enqueue, barber):
        entry = enqueue()
        api.post(f"/api/fila/{entry.pk}/concluir/", {"payment_method": "pix"}, format="json")
        r = api.get("/api/historico/", {"barber_id": barber.pk})
        assert r.status_code == 200
        assert len(r.data) == 1
        assert r.data[0]["queue_entry_id"] == entry.pk

    @pytest.mark.parametrize("param", ["barber_id", "customer_id"])
    def test_history_bad_id_filter_is_400(self, api, param):
        r = api.get("/api/historico/", {param: "abc"})
        assert r.status_code == 400
        assert r.data["error"] == "validacao"


class TestBarberEndpoints:
    def test_deactivate_cancels_queue(self, api, enqueue, barber):
        a = enqueue()
        r = api.post(f"/api/barbeiros/{barber.pk}/desativar/")
        assert r.status_code == 200
        assert r.data["cancelled_entries"] == [a.pk]
        assert r.data["barber"]["status"] == "inactive"

    def test_update_to_inactive_goes_through_ledger(self, api, enqueue, barber):
        a = enqueue()
        r = api.patch(f"/api/barbeiros/{barber.pk}/", {"status": "inactive"}, format="json")
        assert r.status_code == 200
        assert r.data["status"] == "inactive"
        a.refresh_from_db()
        assert a.status == EntryStatus.CANCELLED

    def test_close_queue_keeps_entries(self, api, enqueue, barber):
        a = enqueue()
        r = api.post(f"/api/barbeiros/{barber.pk}/fechar-fila/")
        assert r.data["barber"]["queue_status"] == "closed"
        assert r.data["barber"]["waiting_count"] == 1
        a.refresh_from_db()
        assert a.status == EntryStatus.WAITING

    def test_payment_settings(self, api):
        r = api.put("/api/configuracoes/taxas/", {"debit_card_fee": "0.0300"}, format="json")
        assert r.status_code == 200
        assert Decimal(r.data["debit_card_fee"]) == Decimal("0.03")
        assert r.data["pix_fee"] == "0.0000"


class TestCatalogEndpoints:
    def test_stock_adjust(self, api, pomada):
        r = api.post(f"/api/produtos/{pomada.pk}/ajustar-estoque/", {"delta": -2}, format="json")
        assert r.status_code == 200
        assert r.data["item"]["qtd"] == 3
        r = api.post(f"/api/produtos/{pomada.pk}/ajustar-estoque/", {"delta": -10}, format="json")
        assert r.status_code == 422
        assert Item.objects.get(pk=pomada.pk).qtd == 3

    def test_delete_service_in_queue_is_409(self, api, enqueue, corte):
        enqueue()
        r = api.delete(f"/api/servicos/{corte.pk}/")
        assert r.status_code == 409

    def test_customer_phone_normalized(self, api):
        r = api.post("/api/clientes/", {"name": "Lia", "phone": "(21) 99876-5432"}, format="json")
        assert r.status_code == 201
        assert r.data["phone"] == "5521998765432"
