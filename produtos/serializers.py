# produtos/serializers.py
from rest_framework import serializers

from .models import Item


class ItemSerializer(serializers.ModelSerializer):
    class Meta:
        model = Item
        fields = ["id", "name", "value", "qtd", "active", "created_at", "updated_at"]
        read_only_fields = ["created_at", "updated_at"]

    def validate_name(self, value: str) -> str:
        nome = (value or "").strip()
        if len(nome) < 2:
            raise serializers.ValidationError("O nome do item deve ter pelo menos 2 caracteres.")
        return nome


class StockAdjustmentSerializer(serializers.Serializer):
    delta = serializers.IntegerField()

    def validate_delta(self, value: int) -> int:
        if value == 0:
            raise serializers.ValidationError("Informe um ajuste diferente de zero.")
        return value
