# fila/api_urls.py
from django.urls import path
from .api_views import (
    CancelView,
    CompleteView,
    CustomerStatusView,
    MoveView,
    QueueView,
    RemoveServiceView,
    WalkInView,
)

app_name = "api_fila"

urlpatterns = [
    path("", QueueView.as_view(), name="queue"),
    path("walk-in/", WalkInView.as_view(), name="walk_in"),
    path("status/", CustomerStatusView.as_view(), name="status"),

    # Ações
    path("<int:pk>/mover/", MoveView.as_view(), name="move"),
    path("<int:pk>/cancelar/", CancelView.as_view(), name="cancel"),
    path("<int:pk>/remover-servico/", RemoveServiceView.as_view(), name="remove_service"),
    path("<int:pk>/concluir/", CompleteView.as_view(), name="complete"),
]
