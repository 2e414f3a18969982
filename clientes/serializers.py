# clientes/serializers.py
from __future__ import annotations

from rest_framework import serializers

from core.contacts import normalize_phone
from .models import Customer


class CustomerSerializer(serializers.ModelSerializer):
    class Meta:
        model = Customer
        fields = ["id", "name", "phone", "email", "notes", "created_at", "updated_at"]
        read_only_fields = ["created_at", "updated_at"]

    def validate_name(self, value: str) -> str:
        nome = (value or "").strip()
        if len(nome) < 2:
            raise serializers.ValidationError("O nome deve ter pelo menos 2 caracteres.")
        return nome

    def validate_phone(self, value):
        if not value:
            return None
        tel = normalize_phone(value)
        if not tel:
            raise serializers.ValidationError("Telefone inválido.")
        qs = Customer.objects.filter(phone=tel)
        if self.instance is not None:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise serializers.ValidationError("Já existe cliente com este telefone.")
        return tel
