# servicos/api_views.py
from rest_framework import generics, permissions

from .models import Service
from .serializers import ServiceSerializer


class ServiceListCreateView(generics.ListCreateAPIView):
    permission_classes = [permissions.AllowAny]
    serializer_class = ServiceSerializer

    def get_queryset(self):
        qs = Service.objects.all()
        if self.request.query_params.get("inativos") != "1":
            qs = qs.filter(active=True)
        return qs


class ServiceDetailView(generics.RetrieveUpdateDestroyAPIView):
    """DELETE de serviço ainda presente numa fila responde 409 (ver core.exceptions)."""
    permission_classes = [permissions.AllowAny]
    serializer_class = ServiceSerializer
    queryset = Service.objects.all()
