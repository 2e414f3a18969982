# historico/api_views.py
from rest_framework import generics, permissions

from core.params import int_param
from .models import History
from .serializers import HistorySerializer


class HistoryListView(generics.ListAPIView):
    """Histórico é somente leitura: só o checkout da fila cria registros."""
    permission_classes = [permissions.AllowAny]
    serializer_class = HistorySerializer

    def get_queryset(self):
        qs = History.objects.prefetch_related("services", "items")
        params = self.request.query_params
        barber_id = int_param(self.request, "barber_id")
        if barber_id is not None:
            qs = qs.filter(barber_id=barber_id)
        customer_id = int_param(self.request, "customer_id")
        if customer_id is not None:
            qs = qs.filter(customer_id=customer_id)
        if params.get("payment_method"):
            qs = qs.filter(payment_method=params["payment_method"])
        return qs


class HistoryDetailView(generics.RetrieveAPIView):
    permission_classes = [permissions.AllowAny]
    serializer_class = HistorySerializer
    queryset = History.objects.prefetch_related("services", "items")
