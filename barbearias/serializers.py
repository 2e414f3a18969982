# barbearias/serializers.py
from __future__ import annotations

from rest_framework import serializers

from .models import Barber, PaymentSettings


class BarberSerializer(serializers.ModelSerializer):
    waiting_count = serializers.SerializerMethodField()

    class Meta:
        model = Barber
        fields = [
            "id", "name", "phone", "status", "queue_status", "commission_rate",
            "waiting_count", "created_at", "updated_at",
        ]
        read_only_fields = ["created_at", "updated_at"]

    def get_waiting_count(self, obj: Barber) -> int:
        from fila.models import EntryStatus
        return obj.queue_entries.filter(status=EntryStatus.WAITING).count()


class PaymentSettingsSerializer(serializers.ModelSerializer):
    # dinheiro/pix ficam fixos em zero; só informativo na resposta
    cash_fee = serializers.SerializerMethodField()
    pix_fee = serializers.SerializerMethodField()

    class Meta:
        model = PaymentSettings
        fields = [
            "commission_rate", "credit_card_fee", "credit_card_fee_2x", "credit_card_fee_3x",
            "debit_card_fee", "cash_fee", "pix_fee", "updated_at",
        ]
        read_only_fields = ["updated_at"]

    def get_cash_fee(self, obj) -> str:
        return "0.0000"

    def get_pix_fee(self, obj) -> str:
        return "0.0000"
