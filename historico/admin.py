# historico/admin.py
from django.contrib import admin

from .models import History, HistoryItem, HistoryService


class HistoryServiceInline(admin.TabularInline):
    model = HistoryService
    extra = 0
    can_delete = False
    readonly_fields = ("service", "service_name", "price", "is_extra")


class HistoryItemInline(admin.TabularInline):
    model = HistoryItem
    extra = 0
    can_delete = False
    readonly_fields = ("item", "item_name", "quantity", "unit_price", "total_price")


@admin.register(History)
class HistoryAdmin(admin.ModelAdmin):
    list_display = ("id", "customer_name", "barber_name", "payment_method", "installments",
                    "gross_total", "fee_amount", "net_amount", "created_at")
    list_filter = ("payment_method", "barber", ("created_at", admin.DateFieldListFilter))
    search_fields = ("customer_name", "barber_name")
    date_hierarchy = "created_at"
    inlines = [HistoryServiceInline, HistoryItemInline]

    # histórico é append-only
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
