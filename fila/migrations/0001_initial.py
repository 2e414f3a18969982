import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("barbearias", "0001_initial"),
        ("clientes", "0001_initial"),
        ("servicos", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="QueueEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("status", models.CharField(choices=[("waiting", "Aguardando"), ("completed", "Concluído"), ("cancelled", "Cancelado")], default="waiting", max_length=10)),
                ("position", models.PositiveIntegerField(blank=True, null=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("finished_at", models.DateTimeField(blank=True, null=True)),
                ("barber", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="queue_entries", to="barbearias.barber")),
                ("customer", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="queue_entries", to="clientes.customer")),
            ],
            options={
                "verbose_name": "Entrada na fila",
                "verbose_name_plural": "Fila",
                "ordering": ["barber_id", "position", "created_at"],
                "indexes": [
                    models.Index(fields=["barber", "status", "position"], name="entry_barber_status_pos_idx"),
                    models.Index(fields=["customer", "status"], name="entry_customer_status_idx"),
                ],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("status", "waiting")),
                        fields=("customer",),
                        name="uniq_waiting_entry_per_customer",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            models.Q(("status", "waiting"), _negated=True),
                            ("position__isnull", False),
                            _connector="OR",
                        ),
                        name="entry_waiting_has_position",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="QueueService",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("service_name", models.CharField(max_length=120)),
                ("price", models.DecimalField(decimal_places=2, max_digits=8)),
                ("average_time", models.PositiveIntegerField()),
                ("entry", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="queue_services", to="fila.queueentry")),
                ("service", models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name="queue_services", to="servicos.service")),
            ],
            options={
                "ordering": ["pk"],
                "constraints": [
                    models.UniqueConstraint(fields=("entry", "service"), name="uniq_service_per_entry"),
                ],
            },
        ),
    ]
