# historico/api_urls.py
from django.urls import path
from .api_views import HistoryDetailView, HistoryListView

app_name = "api_historico"

urlpatterns = [
    path("", HistoryListView.as_view(), name="list"),
    path("<int:pk>/", HistoryDetailView.as_view(), name="detail"),
]
