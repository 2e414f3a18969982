# clientes/api_urls.py
from django.urls import path
from .api_views import CustomerDetailView, CustomerListCreateView

app_name = "api_clientes"

urlpatterns = [
    path("", CustomerListCreateView.as_view(), name="list_create"),
    path("<int:pk>/", CustomerDetailView.as_view(), name="detail"),
]
