# servicos/migrations/0002_seed_iniciais.py
from django.db import migrations
from decimal import Decimal

BASE = [
    # nome, minutos, preço
    ("Corte masculino",          30, Decimal("45.00")),
    ("Corte degradê (fade)",     40, Decimal("55.00")),
    ("Barba tradicional",        25, Decimal("35.00")),
    ("Combo: corte + barba",     60, Decimal("85.00")),
    ("Corte infantil",           25, Decimal("40.00")),
    ("Sobrancelha (navalha)",    10, Decimal("20.00")),
    ("Pigmentação barba/cabelo", 30, Decimal("60.00")),
]


def seed(apps, schema_editor):
    Service = apps.get_model("servicos", "Service")
    for nome, minutos, preco in BASE:
        Service.objects.update_or_create(
            name=nome,
            defaults={"average_time": minutos, "price": preco, "active": True},
        )


def unseed(apps, schema_editor):
    Service = apps.get_model("servicos", "Service")
    Service.objects.filter(name__in=[nome for nome, _, _ in BASE]).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("servicos", "0001_initial"),
    ]
    operations = [
        migrations.RunPython(seed, unseed),
    ]
