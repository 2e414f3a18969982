# servicos/models.py
from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q

class Service(models.Model):
    name = models.CharField(max_length=120, unique=True)
    price = models.DecimalField(
        max_digits=8, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))]
    )
    average_time = models.PositiveIntegerField(default=30, validators=[MinValueValidator(1)])  # minutos
    description = models.TextField(null=True, blank=True)
    active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [models.Index(fields=["name"], name="service_name_idx")]
        constraints = [
            models.CheckConstraint(name="service_price_gt_0", condition=Q(price__gt=0)),
            models.CheckConstraint(name="service_average_time_gt_0", condition=Q(average_time__gt=0)),
        ]

    def __str__(self):
        return self.name
