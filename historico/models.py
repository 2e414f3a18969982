# historico/models.py
from __future__ import annotations
from decimal import Decimal
from django.db import models


class PaymentMethod(models.TextChoices):
    CASH        = "cash",        "Dinheiro"
    PIX         = "pix",         "PIX"
    DEBIT_CARD  = "debit_card",  "Cartão de débito"
    CREDIT_CARD = "credit_card", "Cartão de crédito"


class History(models.Model):
    """
    Atendimento concluído. Só é criado pelo checkout da fila e nunca alterado;
    é a fonte de verdade para faturamento e comissões.
    """
    queue_entry = models.OneToOneField(
        "fila.QueueEntry", on_delete=models.SET_NULL, null=True, blank=True, related_name="history"
    )
    customer = models.ForeignKey(
        "clientes.Customer", on_delete=models.SET_NULL, null=True, blank=True, related_name="history"
    )
    barber = models.ForeignKey(
        "barbearias.Barber", on_delete=models.SET_NULL, null=True, blank=True, related_name="history"
    )
    # snapshots
    customer_name = models.CharField(max_length=120, blank=True)
    barber_name = models.CharField(max_length=120, blank=True)

    payment_method = models.CharField(max_length=12, choices=PaymentMethod.choices)
    installments = models.PositiveSmallIntegerField(default=1)

    gross_total = models.DecimalField(max_digits=10, decimal_places=2)
    fee_rate    = models.DecimalField(max_digits=5, decimal_places=4)
    fee_amount  = models.DecimalField(max_digits=10, decimal_places=2)
    net_amount  = models.DecimalField(max_digits=10, decimal_places=2)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        verbose_name = "Atendimento"
        verbose_name_plural = "Histórico"
        indexes = [
            models.Index(fields=["barber", "created_at"], name="history_barber_created_idx"),
            models.Index(fields=["customer", "created_at"], name="history_customer_created_idx"),
            models.Index(fields=["payment_method"], name="history_payment_method_idx"),
        ]

    def __str__(self):
        return f"#{self.pk} {self.customer_name} com {self.barber_name} - R$ {self.gross_total}"

    def recomputed_gross(self) -> Decimal:
        """Soma das linhas persistidas; deve bater com `gross_total`."""
        services = sum((s.price for s in self.services.all()), Decimal("0.00"))
        items = sum((i.unit_price * i.quantity for i in self.items.all()), Decimal("0.00"))
        return services + items


class HistoryService(models.Model):
    history = models.ForeignKey(History, on_delete=models.CASCADE, related_name="services")
    service = models.ForeignKey(
        "servicos.Service", on_delete=models.SET_NULL, null=True, blank=True, related_name="history_lines"
    )
    service_name = models.CharField(max_length=120)
    price = models.DecimalField(max_digits=8, decimal_places=2)
    is_extra = models.BooleanField(default=False)

    class Meta:
        ordering = ["pk"]

    def __str__(self):
        extra = " (extra)" if self.is_extra else ""
        return f"{self.service_name}{extra}"


class HistoryItem(models.Model):
    history = models.ForeignKey(History, on_delete=models.CASCADE, related_name="items")
    item = models.ForeignKey(
        "produtos.Item", on_delete=models.SET_NULL, null=True, blank=True, related_name="history_lines"
    )
    item_name = models.CharField(max_length=120)
    quantity = models.PositiveIntegerField()
    unit_price = models.DecimalField(max_digits=8, decimal_places=2)
    total_price = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        ordering = ["pk"]

    def __str__(self):
        return f"{self.quantity}x {self.item_name}"
