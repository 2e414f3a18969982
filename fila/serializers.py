# fila/serializers.py
from __future__ import annotations
from rest_framework import serializers

from historico.models import PaymentMethod
from .ledger import DIRECTIONS
from .models import QueueEntry, QueueService


# ---------- entrada (requests) ----------

class EnqueueSerializer(serializers.Serializer):
    customer_id = serializers.IntegerField()
    barber_id   = serializers.IntegerField()
    service_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)


class WalkInSerializer(serializers.Serializer):
    name        = serializers.CharField(max_length=120, required=False, allow_blank=True, default="")
    phone       = serializers.CharField(max_length=20, required=False, allow_blank=True, default="")
    barber_id   = serializers.IntegerField()
    service_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)


class MoveSerializer(serializers.Serializer):
    direction = serializers.ChoiceField(choices=DIRECTIONS)


class RemoveServiceSerializer(serializers.Serializer):
    service_id = serializers.IntegerField()


class ProductLineSerializer(serializers.Serializer):
    item_id  = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1)


class ExtraServiceLineSerializer(serializers.Serializer):
    service_id = serializers.IntegerField()
    quantity   = serializers.IntegerField(min_value=1, default=1)


class CompleteSerializer(serializers.Serializer):
    # ausente = cobra todos os serviços que estão na entrada
    final_services = serializers.ListField(child=serializers.IntegerField(), required=False, allow_null=True)
    final_products = ProductLineSerializer(many=True, required=False, default=list)
    extra_services = ExtraServiceLineSerializer(many=True, required=False, default=list)
    payment_method = serializers.ChoiceField(choices=PaymentMethod.choices)
    installments   = serializers.IntegerField(min_value=1, default=1)

    def validate_final_services(self, value):
        if value is not None and len(set(value)) != len(value):
            raise serializers.ValidationError("Serviço repetido na conclusão.")
        return value


# ---------- saída (responses) ----------

class QueueServiceSerializer(serializers.ModelSerializer):
    class Meta:
        model = QueueService
        fields = ["service_id", "service_name", "price", "average_time"]


class QueueEntrySerializer(serializers.ModelSerializer):
    customer_name = serializers.CharField(source="customer.name", read_only=True)
    barber_name   = serializers.CharField(source="barber.name", read_only=True)
    services      = QueueServiceSerializer(source="queue_services", many=True, read_only=True)

    class Meta:
        model = QueueEntry
        fields = [
            "id", "customer_id", "customer_name", "barber_id", "barber_name",
            "status", "position", "services", "created_at", "updated_at", "finished_at",
        ]


class QueuePositionSerializer(serializers.Serializer):
    """Linha do snapshot da fila (ver `ledger.snapshot`)."""

    def to_representation(self, row):
        data = QueueEntrySerializer(row.entry).data
        data["position"] = row.position
        data["estimated_wait_minutes"] = row.estimated_wait_minutes
        data["total_minutes"] = row.total_minutes
        data["total_price"] = f"{row.total_price:.2f}"
        return data


def customer_status_payload(status) -> dict:
    """Resposta do "estou na fila?" do cliente (ver `ledger.status_for_customer`)."""
    if status is None:
        return {"in_queue": False}
    return {
        "in_queue": True,
        "entry": QueueEntrySerializer(status.entry).data,
        "position": status.position,
        "people_ahead": status.people_ahead,
        "total_people": status.total_people,
        "estimated_wait_minutes": status.estimated_wait_minutes,
    }
