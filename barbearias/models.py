from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q


class BarberStatus(models.TextChoices):
    ACTIVE = "active", "Ativo"
    INACTIVE = "inactive", "Inativo"


class QueueStatus(models.TextChoices):
    OPEN = "open", "Aberta"
    CLOSED = "closed", "Fechada"


_RATE_VALIDATORS = [MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("1"))]


class Barber(models.Model):
    name = models.CharField(max_length=120)
    phone = models.CharField(max_length=32, blank=True)
    status = models.CharField(max_length=10, choices=BarberStatus.choices, default=BarberStatus.ACTIVE)
    queue_status = models.CharField(max_length=10, choices=QueueStatus.choices, default=QueueStatus.OPEN)
    commission_rate = models.DecimalField(
        max_digits=5, decimal_places=4, default=Decimal("0.15"), validators=_RATE_VALIDATORS
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [models.Index(fields=["status", "queue_status"], name="barber_status_queue_idx")]
        constraints = [
            models.CheckConstraint(
                name="barber_commission_between_0_1",
                condition=Q(commission_rate__gte=0) & Q(commission_rate__lte=1),
            ),
        ]

    def __str__(self):
        return self.name

    @property
    def accepts_queue(self) -> bool:
        """Só barbeiro ativo e com fila aberta recebe novas entradas."""
        return self.status == BarberStatus.ACTIVE and self.queue_status == QueueStatus.OPEN


class PaymentSettings(models.Model):
    """
    Tabela de taxas por forma de pagamento (linha única).
    Dinheiro e PIX não têm taxa; débito é taxa fixa; crédito varia por parcelas.
    """
    commission_rate = models.DecimalField(max_digits=5, decimal_places=4, validators=_RATE_VALIDATORS)
    credit_card_fee = models.DecimalField(max_digits=5, decimal_places=4, validators=_RATE_VALIDATORS)
    credit_card_fee_2x = models.DecimalField(max_digits=5, decimal_places=4, validators=_RATE_VALIDATORS)
    credit_card_fee_3x = models.DecimalField(max_digits=5, decimal_places=4, validators=_RATE_VALIDATORS)
    debit_card_fee = models.DecimalField(max_digits=5, decimal_places=4, validators=_RATE_VALIDATORS)

    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Configuração de taxas"
        verbose_name_plural = "Configurações de taxas"

    def __str__(self):
        return f"Taxas (crédito {self.credit_card_fee}/{self.credit_card_fee_2x}/{self.credit_card_fee_3x}, débito {self.debit_card_fee})"

    @classmethod
    def current(cls) -> "PaymentSettings":
        """Retorna a configuração vigente, criando com os padrões do settings se ainda não existir."""
        obj = cls.objects.order_by("pk").first()
        if obj is None:
            obj = cls.objects.create(**settings.PAYMENT_FEE_DEFAULTS)
        return obj
