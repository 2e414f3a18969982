# produtos/admin.py
from django.contrib import admin, messages

from .models import Item


@admin.register(Item)
class ItemAdmin(admin.ModelAdmin):
    list_display = ("name", "value", "qtd", "active", "updated_at")
    list_filter = ("active",)
    search_fields = ("name",)
    ordering = ("name",)
    readonly_fields = ("created_at", "updated_at")
    actions = ("ativar", "desativar")

    def ativar(self, request, queryset):
        n = queryset.update(active=True)
        self.message_user(request, f"{n} produto(s) ativado(s).", level=messages.SUCCESS)
    ativar.short_description = "Ativar selecionados"

    def desativar(self, request, queryset):
        n = queryset.update(active=False)
        self.message_user(request, f"{n} produto(s) desativado(s).", level=messages.SUCCESS)
    desativar.short_description = "Desativar selecionados"
