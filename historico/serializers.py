# historico/serializers.py
from rest_framework import serializers

from .models import History, HistoryItem, HistoryService


class HistoryServiceSerializer(serializers.ModelSerializer):
    class Meta:
        model = HistoryService
        fields = ["service_id", "service_name", "price", "is_extra"]


class HistoryItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = HistoryItem
        fields = ["item_id", "item_name", "quantity", "unit_price", "total_price"]


class HistorySerializer(serializers.ModelSerializer):
    services = HistoryServiceSerializer(many=True, read_only=True)
    items = HistoryItemSerializer(many=True, read_only=True)

    class Meta:
        model = History
        fields = [
            "id", "queue_entry_id", "customer_id", "customer_name", "barber_id", "barber_name",
            "payment_method", "installments", "gross_total", "fee_rate", "fee_amount", "net_amount",
            "services", "items", "created_at",
        ]
