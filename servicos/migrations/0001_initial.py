from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Service",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=120, unique=True)),
                ("price", models.DecimalField(decimal_places=2, max_digits=8, validators=[django.core.validators.MinValueValidator(Decimal("0.01"))])),
                ("average_time", models.PositiveIntegerField(default=30, validators=[django.core.validators.MinValueValidator(1)])),
                ("description", models.TextField(blank=True, null=True)),
                ("active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
                "indexes": [models.Index(fields=["name"], name="service_name_idx")],
                "constraints": [
                    models.CheckConstraint(condition=models.Q(("price__gt", 0)), name="service_price_gt_0"),
                    models.CheckConstraint(condition=models.Q(("average_time__gt", 0)), name="service_average_time_gt_0"),
                ],
            },
        ),
    ]
