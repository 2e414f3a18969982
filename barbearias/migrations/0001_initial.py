from decimal import Decimal

import django.core.validators
from django.db import migrations, models


def _rate():
    return [
        django.core.validators.MinValueValidator(Decimal("0")),
        django.core.validators.MaxValueValidator(Decimal("1")),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Barber",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=120)),
                ("phone", models.CharField(blank=True, max_length=32)),
                ("status", models.CharField(choices=[("active", "Ativo"), ("inactive", "Inativo")], default="active", max_length=10)),
                ("queue_status", models.CharField(choices=[("open", "Aberta"), ("closed", "Fechada")], default="open", max_length=10)),
                ("commission_rate", models.DecimalField(decimal_places=4, default=Decimal("0.15"), max_digits=5, validators=_rate())),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
                "indexes": [models.Index(fields=["status", "queue_status"], name="barber_status_queue_idx")],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("commission_rate__gte", 0), ("commission_rate__lte", 1)),
                        name="barber_commission_between_0_1",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="PaymentSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("commission_rate", models.DecimalField(decimal_places=4, max_digits=5, validators=_rate())),
                ("credit_card_fee", models.DecimalField(decimal_places=4, max_digits=5, validators=_rate())),
                ("credit_card_fee_2x", models.DecimalField(decimal_places=4, max_digits=5, validators=_rate())),
                ("credit_card_fee_3x", models.DecimalField(decimal_places=4, max_digits=5, validators=_rate())),
                ("debit_card_fee", models.DecimalField(decimal_places=4, max_digits=5, validators=_rate())),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Configuração de taxas",
                "verbose_name_plural": "Configurações de taxas",
            },
        ),
    ]
