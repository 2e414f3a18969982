# produtos/api_views.py
from rest_framework import generics, permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from core import catalog
from .models import Item
from .serializers import ItemSerializer, StockAdjustmentSerializer


class ItemListCreateView(generics.ListCreateAPIView):
    permission_classes = [permissions.AllowAny]
    serializer_class = ItemSerializer

    def get_queryset(self):
        qs = Item.objects.all()
        if self.request.query_params.get("inativos") != "1":
            qs = qs.filter(active=True)
        return qs


class ItemDetailView(generics.RetrieveUpdateDestroyAPIView):
    permission_classes = [permissions.AllowAny]
    serializer_class = ItemSerializer
    queryset = Item.objects.all()


class ItemStockAdjustView(APIView):
    """POST {"delta": 5} repõe; {"delta": -2} baixa (nunca abaixo de zero)."""
    permission_classes = [permissions.AllowAny]

    def post(self, request, pk: int, *args, **kwargs):
        ser = StockAdjustmentSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        item = catalog.adjust_stock(pk, ser.validated_data["delta"])
        return Response({"ok": True, "item": ItemSerializer(item).data})
