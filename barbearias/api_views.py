# barbearias/api_views.py
from __future__ import annotations

import logging

from django.shortcuts import get_object_or_404
from rest_framework import generics, permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from fila import ledger
from fila.notifications import get_notifier
from .models import Barber, BarberStatus, PaymentSettings, QueueStatus
from .serializers import BarberSerializer, PaymentSettingsSerializer

logger = logging.getLogger(__name__)


class BarberListCreateView(generics.ListCreateAPIView):
    permission_classes = [permissions.AllowAny]
    serializer_class = BarberSerializer

    def get_queryset(self):
        qs = Barber.objects.all()
        st = self.request.query_params.get("status")
        if st:
            qs = qs.filter(status=st)
        return qs


class BarberDetailView(generics.RetrieveUpdateDestroyAPIView):
    permission_classes = [permissions.AllowAny]
    serializer_class = BarberSerializer
    queryset = Barber.objects.all()

    def perform_update(self, serializer):
        barber = serializer.instance
        vai_desativar = (
            barber.status == BarberStatus.ACTIVE
            and serializer.validated_data.get("status") == BarberStatus.INACTIVE
        )
        if vai_desativar:
            # desativação passa pelo ledger (cancela a fila do barbeiro)
            ledger.deactivate_barber(barber.pk, notifier=get_notifier())
        serializer.save()


class BarberDeactivateView(APIView):
    """Desativa o barbeiro e cancela as entradas que ainda aguardavam atendimento."""
    permission_classes = [permissions.AllowAny]

    def post(self, request, pk: int, *args, **kwargs):
        cancelled = ledger.deactivate_barber(pk, notifier=get_notifier())
        barber = Barber.objects.get(pk=pk)
        return Response(
            {"ok": True, "barber": BarberSerializer(barber).data, "cancelled_entries": [e.pk for e in cancelled]},
            status=status.HTTP_200_OK,
        )


class BarberQueueToggleView(APIView):
    """Abre/fecha a fila. Fechar não mexe em quem já está esperando."""
    permission_classes = [permissions.AllowAny]
    queue_status = QueueStatus.OPEN

    def post(self, request, pk: int, *args, **kwargs):
        barber = get_object_or_404(Barber, pk=pk)
        barber.queue_status = self.queue_status
        barber.save(update_fields=["queue_status", "updated_at"])
        logger.info("[barbearias] fila do barbeiro %s agora %s", barber.pk, barber.queue_status)
        return Response({"ok": True, "barber": BarberSerializer(barber).data})


class PaymentSettingsView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, *args, **kwargs):
        return Response(PaymentSettingsSerializer(PaymentSettings.current()).data)

    def put(self, request, *args, **kwargs):
        ser = PaymentSettingsSerializer(PaymentSettings.current(), data=request.data, partial=True)
        ser.is_valid(raise_exception=True)
        ser.save()
        logger.info("[barbearias] tabela de taxas atualizada: %s", ser.validated_data)
        return Response(ser.data)
