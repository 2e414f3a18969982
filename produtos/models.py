# produtos/models.py
from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Q


class Item(models.Model):
    """Produto de revenda (pomada, shampoo...). `qtd` é o estoque atual."""
    name = models.CharField(max_length=120)
    value = models.DecimalField(
        max_digits=8, decimal_places=2, validators=[MinValueValidator(Decimal("0.01"))]
    )
    qtd = models.PositiveIntegerField(default=0)
    active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(name="item_value_gt_0", condition=Q(value__gt=0)),
            # estoque nunca negativo, nem por update direto no banco
            models.CheckConstraint(name="item_qtd_gte_0", condition=Q(qtd__gte=0)),
        ]

    def __str__(self):
        return f"{self.name} ({self.qtd} un.)"
