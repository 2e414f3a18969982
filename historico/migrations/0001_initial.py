import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("barbearias", "0001_initial"),
        ("clientes", "0001_initial"),
        ("fila", "0001_initial"),
        ("produtos", "0001_initial"),
        ("servicos", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="History",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("customer_name", models.CharField(blank=True, max_length=120)),
                ("barber_name", models.CharField(blank=True, max_length=120)),
                ("payment_method", models.CharField(choices=[("cash", "Dinheiro"), ("pix", "PIX"), ("debit_card", "Cartão de débito"), ("credit_card", "Cartão de crédito")], max_length=12)),
                ("installments", models.PositiveSmallIntegerField(default=1)),
                ("gross_total", models.DecimalField(decimal_places=2, max_digits=10)),
                ("fee_rate", models.DecimalField(decimal_places=4, max_digits=5)),
                ("fee_amount", models.DecimalField(decimal_places=2, max_digits=10)),
                ("net_amount", models.DecimalField(decimal_places=2, max_digits=10)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("barber", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="history", to="barbearias.barber")),
                ("customer", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="history", to="clientes.customer")),
                ("queue_entry", models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="history", to="fila.queueentry")),
            ],
            options={
                "verbose_name": "Atendimento",
                "verbose_name_plural": "Histórico",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["barber", "created_at"], name="history_barber_created_idx"),
                    models.Index(fields=["customer", "created_at"], name="history_customer_created_idx"),
                    models.Index(fields=["payment_method"], name="history_payment_method_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="HistoryService",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("service_name", models.CharField(max_length=120)),
                ("price", models.DecimalField(decimal_places=2, max_digits=8)),
                ("is_extra", models.BooleanField(default=False)),
                ("history", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="services", to="historico.history")),
                ("service", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="history_lines", to="servicos.service")),
            ],
            options={"ordering": ["pk"]},
        ),
        migrations.CreateModel(
            name="HistoryItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("item_name", models.CharField(max_length=120)),
                ("quantity", models.PositiveIntegerField()),
                ("unit_price", models.DecimalField(decimal_places=2, max_digits=8)),
                ("total_price", models.DecimalField(decimal_places=2, max_digits=10)),
                ("history", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="items", to="historico.history")),
                ("item", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="history_lines", to="produtos.item")),
            ],
            options={"ordering": ["pk"]},
        ),
    ]
