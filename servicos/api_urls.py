# servicos/api_urls.py
from django.urls import path
from .api_views import ServiceDetailView, ServiceListCreateView

app_name = "api_servicos"

urlpatterns = [
    path("", ServiceListCreateView.as_view(), name="list_create"),
    path("<int:pk>/", ServiceDetailView.as_view(), name="retrieve_update_destroy"),
]
