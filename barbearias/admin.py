# barbearias/admin.py
from django.contrib import admin, messages

from fila import ledger
from fila.notifications import get_notifier
from .models import Barber, BarberStatus, PaymentSettings, QueueStatus


@admin.register(Barber)
class BarberAdmin(admin.ModelAdmin):
    list_display = ("name", "phone", "status", "queue_status", "commission_rate", "updated_at")
    list_filter = ("status", "queue_status")
    search_fields = ("name", "phone")
    ordering = ("name",)
    readonly_fields = ("created_at", "updated_at")
    actions = ("abrir_fila", "fechar_fila", "desativar")

    def save_model(self, request, obj, form, change):
        # ativo -> inativo pelo formulário também cancela a fila do barbeiro
        if change and "status" in form.changed_data and obj.status == BarberStatus.INACTIVE:
            canceladas = ledger.deactivate_barber(obj.pk, notifier=get_notifier())
            if canceladas:
                self.message_user(
                    request, f"{len(canceladas)} entrada(s) da fila cancelada(s).", level=messages.WARNING
                )
        super().save_model(request, obj, form, change)

    def abrir_fila(self, request, queryset):
        n = queryset.update(queue_status=QueueStatus.OPEN)
        self.message_user(request, f"{n} fila(s) aberta(s).", level=messages.SUCCESS)
    abrir_fila.short_description = "Abrir fila dos selecionados"

    def fechar_fila(self, request, queryset):
        n = queryset.update(queue_status=QueueStatus.CLOSED)
        self.message_user(request, f"{n} fila(s) fechada(s).", level=messages.SUCCESS)
    fechar_fila.short_description = "Fechar fila dos selecionados"

    def desativar(self, request, queryset):
        # passa pelo ledger para cancelar quem estava esperando
        canceladas = 0
        for barber in queryset:
            canceladas += len(ledger.deactivate_barber(barber.pk, notifier=get_notifier()))
        self.message_user(
            request,
            f"{queryset.count()} barbeiro(s) desativado(s); {canceladas} entrada(s) cancelada(s).",
            level=messages.SUCCESS,
        )
    desativar.short_description = "Desativar (cancela a fila)"


@admin.register(PaymentSettings)
class PaymentSettingsAdmin(admin.ModelAdmin):
    list_display = ("credit_card_fee", "credit_card_fee_2x", "credit_card_fee_3x", "debit_card_fee",
                    "commission_rate", "updated_at")
    readonly_fields = ("updated_at",)

    def has_add_permission(self, request):
        return not PaymentSettings.objects.exists()
