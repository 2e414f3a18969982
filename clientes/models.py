# clientes/models.py
from django.db import models
from django.utils import timezone


class Customer(models.Model):
    name = models.CharField(max_length=120)
    phone = models.CharField(max_length=20, null=True, blank=True)
    email = models.EmailField(null=True, blank=True)
    notes = models.TextField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        indexes = [models.Index(fields=["name"], name="customer_name_idx")]
        ordering = ["name"]
        constraints = [
            models.UniqueConstraint(
                fields=["phone"],
                name="uniq_customer_phone",
                condition=~models.Q(phone__isnull=True) & ~models.Q(phone=""),
            ),
        ]

    def __str__(self):
        tel = f" ({self.phone})" if self.phone else ""
        return f"{self.name}{tel}"
