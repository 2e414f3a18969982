# produtos/api_urls.py
from django.urls import path
from .api_views import ItemDetailView, ItemListCreateView, ItemStockAdjustView

app_name = "api_produtos"

urlpatterns = [
    path("", ItemListCreateView.as_view(), name="list_create"),
    path("<int:pk>/", ItemDetailView.as_view(), name="detail"),
    path("<int:pk>/ajustar-estoque/", ItemStockAdjustView.as_view(), name="adjust_stock"),
]
