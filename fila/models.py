# fila/models.py
from __future__ import annotations
from decimal import Decimal
from django.db import models
from django.db.models import Q


class EntryStatus(models.TextChoices):
    WAITING   = "waiting",   "Aguardando"
    COMPLETED = "completed", "Concluído"
    CANCELLED = "cancelled", "Cancelado"


TERMINAL_STATUSES = frozenset({EntryStatus.COMPLETED, EntryStatus.CANCELLED})


class QueueEntry(models.Model):
    """
    Cliente aguardando um barbeiro.
    `position` é o rank persistido dentro da fila do barbeiro (1..N entre as
    entradas `waiting`); vira NULL quando a entrada sai da fila.
    """
    customer = models.ForeignKey(
        "clientes.Customer", on_delete=models.PROTECT, related_name="queue_entries"
    )
    barber = models.ForeignKey(
        "barbearias.Barber", on_delete=models.PROTECT, related_name="queue_entries"
    )
    status = models.CharField(max_length=10, choices=EntryStatus.choices, default=EntryStatus.WAITING)
    position = models.PositiveIntegerField(null=True, blank=True)

    created_at  = models.DateTimeField(auto_now_add=True)
    updated_at  = models.DateTimeField(auto_now=True)
    finished_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["barber_id", "position", "created_at"]
        verbose_name = "Entrada na fila"
        verbose_name_plural = "Fila"
        indexes = [
            models.Index(fields=["barber", "status", "position"], name="entry_barber_status_pos_idx"),
            models.Index(fields=["customer", "status"], name="entry_customer_status_idx"),
        ]
        constraints = [
            # um cliente só pode estar esperando uma vez, em qualquer barbeiro
            models.UniqueConstraint(
                fields=["customer"],
                condition=Q(status="waiting"),
                name="uniq_waiting_entry_per_customer",
            ),
            models.CheckConstraint(
                name="entry_waiting_has_position",
                condition=~Q(status="waiting") | Q(position__isnull=False),
            ),
        ]

    def __str__(self):
        return f"[{self.status}] #{self.position or '-'} {self.customer} -> {self.barber}"

    # ---------- Helpers ----------
    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    def total_minutes(self) -> int:
        return sum(qs.average_time for qs in self.queue_services.all())

    def total_price(self) -> Decimal:
        return sum((qs.price for qs in self.queue_services.all()), Decimal("0.00"))


class QueueService(models.Model):
    """Serviço pedido na entrada, com preço/tempo congelados no momento da entrada."""
    entry = models.ForeignKey(QueueEntry, on_delete=models.CASCADE, related_name="queue_services")
    service = models.ForeignKey(
        "servicos.Service", on_delete=models.PROTECT, related_name="queue_services"
    )
    service_name = models.CharField(max_length=120)
    price = models.DecimalField(max_digits=8, decimal_places=2)
    average_time = models.PositiveIntegerField()

    class Meta:
        ordering = ["pk"]
        constraints = [
            models.UniqueConstraint(fields=["entry", "service"], name="uniq_service_per_entry"),
        ]

    def __str__(self):
        return f"{self.service_name} ({self.average_time} min)"
