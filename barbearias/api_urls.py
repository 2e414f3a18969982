# barbearias/api_urls.py
from django.urls import path

from .api_views import (
    BarberDeactivateView,
    BarberDetailView,
    BarberListCreateView,
    BarberQueueToggleView,
    PaymentSettingsView,
)
from .models import QueueStatus

app_name = "api_barbearias"

urlpatterns = [
    path("barbeiros/", BarberListCreateView.as_view(), name="barber_list"),
    path("barbeiros/<int:pk>/", BarberDetailView.as_view(), name="barber_detail"),
    path("barbeiros/<int:pk>/desativar/", BarberDeactivateView.as_view(), name="barber_deactivate"),
    path("barbeiros/<int:pk>/abrir-fila/",
         BarberQueueToggleView.as_view(queue_status=QueueStatus.OPEN), name="barber_open_queue"),
    path("barbeiros/<int:pk>/fechar-fila/",
         BarberQueueToggleView.as_view(queue_status=QueueStatus.CLOSED), name="barber_close_queue"),
    path("configuracoes/taxas/", PaymentSettingsView.as_view(), name="payment_settings"),
]
