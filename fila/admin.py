# fila/admin.py
from django.contrib import admin, messages

from core.exceptions import CoreError
from . import ledger
from .models import EntryStatus, QueueEntry, QueueService
from .notifications import get_notifier


class QueueServiceInline(admin.TabularInline):
    model = QueueService
    extra = 0
    can_delete = False
    readonly_fields = ("service", "service_name", "price", "average_time")


@admin.register(QueueEntry)
class QueueEntryAdmin(admin.ModelAdmin):
    list_display = ("id", "customer", "barber", "position", "status", "created_at")
    list_filter = ("status", "barber", ("created_at", admin.DateFieldListFilter))
    search_fields = ("customer__name", "customer__phone", "barber__name")
    ordering = ("barber", "position", "created_at")
    readonly_fields = ("customer", "barber", "status", "position", "created_at", "updated_at", "finished_at")
    inlines = [QueueServiceInline]
    actions = ("subir", "descer", "cancelar")

    # entradas nascem pela API (ledger.enqueue), não pelo admin
    def has_add_permission(self, request):
        return False

    def _aplicar(self, request, queryset, op, ok_msg):
        feitos = 0
        for entry in queryset.filter(status=EntryStatus.WAITING).order_by("position"):
            try:
                op(entry.pk)
                feitos += 1
            except CoreError as e:
                self.message_user(request, f"Entrada {entry.pk}: {e.message}", level=messages.WARNING)
        self.message_user(request, f"{feitos} {ok_msg}", level=messages.SUCCESS)

    def subir(self, request, queryset):
        self._aplicar(request, queryset, lambda pk: ledger.move(pk, ledger.UP, notifier=get_notifier()),
                      "entrada(s) movida(s) para cima.")
    subir.short_description = "Subir na fila"

    def descer(self, request, queryset):
        self._aplicar(request, queryset, lambda pk: ledger.move(pk, ledger.DOWN, notifier=get_notifier()),
                      "entrada(s) movida(s) para baixo.")
    descer.short_description = "Descer na fila"

    def cancelar(self, request, queryset):
        self._aplicar(request, queryset, lambda pk: ledger.cancel(pk, notifier=get_notifier()),
                      "entrada(s) cancelada(s).")
    cancelar.short_description = "Cancelar entradas"
