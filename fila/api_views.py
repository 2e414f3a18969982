# fila/api_views.py
from __future__ import annotations

from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import ValidationError
from core.params import int_param
from historico.serializers import HistorySerializer
from . import ledger, settlement
from .models import QueueEntry
from .notifications import get_notifier
from .serializers import (
    CompleteSerializer,
    EnqueueSerializer,
    MoveSerializer,
    QueueEntrySerializer,
    QueuePositionSerializer,
    RemoveServiceSerializer,
    WalkInSerializer,
    customer_status_payload,
)


def _entry_response(entry: QueueEntry, http_status=status.HTTP_200_OK) -> Response:
    entry = QueueEntry.objects.select_related("customer", "barber").prefetch_related("queue_services").get(pk=entry.pk)
    return Response(QueueEntrySerializer(entry).data, status=http_status)


class QueueView(APIView):
    """
    GET  -> snapshot da fila (opcional ?barber_id=)
    POST -> coloca cliente na fila {customer_id, barber_id, service_ids}
    """
    permission_classes = [permissions.AllowAny]

    def get(self, request, *args, **kwargs):
        rows = ledger.snapshot(int_param(request, "barber_id"))
        return Response(QueuePositionSerializer(rows, many=True).data)

    def post(self, request, *args, **kwargs):
        ser = EnqueueSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        entry = ledger.enqueue(
            data["customer_id"], data["barber_id"], data["service_ids"], notifier=get_notifier()
        )
        return _entry_response(entry, status.HTTP_201_CREATED)


class WalkInView(APIView):
    """Cliente de balcão: cadastra (ou acha pelo telefone) e já coloca na fila."""
    permission_classes = [permissions.AllowAny]

    def post(self, request, *args, **kwargs):
        ser = WalkInSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        entry = ledger.enqueue_walk_in(
            data["name"], data["phone"], data["barber_id"], data["service_ids"], notifier=get_notifier()
        )
        return _entry_response(entry, status.HTTP_201_CREATED)


class CustomerStatusView(APIView):
    permission_classes = [permissions.AllowAny]

    def get(self, request, *args, **kwargs):
        customer_id = int_param(request, "customer_id")
        if customer_id is None:
            raise ValidationError("Informe customer_id.")
        return Response(customer_status_payload(ledger.status_for_customer(customer_id)))


class MoveView(APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request, pk: int, *args, **kwargs):
        ser = MoveSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        ledger.move(pk, ser.validated_data["direction"], notifier=get_notifier())
        return Response(status=status.HTTP_204_NO_CONTENT)


class CancelView(APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request, pk: int, *args, **kwargs):
        ledger.cancel(pk, notifier=get_notifier())
        return Response(status=status.HTTP_204_NO_CONTENT)


class RemoveServiceView(APIView):
    permission_classes = [permissions.AllowAny]

    def post(self, request, pk: int, *args, **kwargs):
        ser = RemoveServiceSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        entry = ledger.remove_service(pk, ser.validated_data["service_id"], notifier=get_notifier())
        return _entry_response(entry)


class CompleteView(APIView):
    """Checkout: fecha o atendimento e devolve o registro de histórico criado."""
    permission_classes = [permissions.AllowAny]

    def post(self, request, pk: int, *args, **kwargs):
        ser = CompleteSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        data = ser.validated_data
        history = settlement.complete(
            pk,
            final_services=data.get("final_services"),
            final_products=data["final_products"],
            payment_method=data["payment_method"],
            installments=data["installments"],
            extra_services=data["extra_services"],
            notifier=get_notifier(),
        )
        return Response(HistorySerializer(history).data, status=status.HTTP_201_CREATED)
