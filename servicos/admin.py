# servicos/admin.py
from django.contrib import admin, messages
from django.http import HttpResponse
import csv

from .models import Service


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ("name", "price", "average_time", "active", "updated_at")
    list_filter = ("active",)
    search_fields = ("name", "description")
    ordering = ("name",)
    list_per_page = 50

    # Edição rápida na listagem
    list_editable = ("price", "average_time", "active")

    readonly_fields = ("created_at", "updated_at")
    fieldsets = (
        (None, {"fields": ("name", "description")}),
        ("Preço e duração", {"fields": ("price", "average_time")}),
        ("Status", {"fields": ("active",)}),
        ("Auditoria", {"classes": ("collapse",), "fields": ("created_at", "updated_at")}),
    )

    actions = ("ativar", "desativar", "exportar_csv")

    def ativar(self, request, queryset):
        n = queryset.update(active=True)
        self.message_user(request, f"{n} serviço(s) ativado(s).", level=messages.SUCCESS)
    ativar.short_description = "Ativar selecionados"

    def desativar(self, request, queryset):
        n = queryset.update(active=False)
        self.message_user(request, f"{n} serviço(s) desativado(s).", level=messages.SUCCESS)
    desativar.short_description = "Desativar selecionados"

    def exportar_csv(self, request, queryset):
        response = HttpResponse(content_type="text/csv; charset=utf-8")
        response["Content-Disposition"] = 'attachment; filename="servicos_selecionados.csv"'
        writer = csv.writer(response, delimiter=";")
        writer.writerow(["nome", "tempo_medio_min", "preco", "ativo"])
        for s in queryset.order_by("name"):
            writer.writerow([s.name, s.average_time, f"{s.price:.2f}", 1 if s.active else 0])
        return response
    exportar_csv.short_description = "Exportar CSV (selecionados)"
