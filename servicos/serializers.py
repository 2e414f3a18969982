# servicos/serializers.py
from rest_framework import serializers

from .models import Service


class ServiceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Service
        fields = ["id", "name", "price", "average_time", "description", "active", "created_at", "updated_at"]
        read_only_fields = ["created_at", "updated_at"]

    def validate_name(self, value: str) -> str:
        nome = (value or "").strip()
        if len(nome) < 2:
            raise serializers.ValidationError("O nome do serviço deve ter pelo menos 2 caracteres.")
        return nome
