# fila/notifications.py
"""
Avisos de eventos da fila (entrada, reordenação, cancelamento, conclusão).

O notificador é montado uma vez no `FilaConfig.ready()` e passado para as
operações da fila/checkout. O envio acontece só depois do commit e qualquer
falha de rede fica no log: nunca desfaz nem trava a transação da fila.
"""
from __future__ import annotations

import logging
from typing import Mapping, Optional

import requests
from django.apps import apps
from django.db import transaction
from django.utils import timezone

logger = logging.getLogger(__name__)

HEADER_TOKEN = "X-Webhook-Token"


class QueueNotifier:
    """Interface: recebe eventos da fila. A implementação base não faz nada."""

    def notify(
        self,
        entry,
        *,
        evento: str,
        mensagem: str = "",
        extra: Optional[Mapping[str, object]] = None,
    ) -> None:
        return None


class NullQueueNotifier(QueueNotifier):
    pass


class WebhookQueueNotifier(QueueNotifier):
    """POST JSON para um webhook externo (ex.: n8n que repassa para o WhatsApp)."""

    def __init__(self, url: str, token: str = "", timeout: int = 8, session: requests.Session | None = None):
        self.url = url
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def build_payload(self, entry, *, evento: str, mensagem: str, extra=None) -> dict:
        customer = getattr(entry, "customer", None)
        barber = getattr(entry, "barber", None)
        payload = {
            "evento": evento,
            "timestamp": timezone.now().isoformat(),
            "entry_id": entry.pk,
            "status": entry.status,
            "position": entry.position,
            "customer_id": entry.customer_id,
            "nome": getattr(customer, "name", None),
            "telefone": getattr(customer, "phone", None),
            "barber_id": entry.barber_id,
            "barbeiro": getattr(barber, "name", None),
            "mensagem": mensagem,
        }
        if extra:
            payload.update(extra)
        return payload

    def notify(self, entry, *, evento: str, mensagem: str = "", extra=None) -> None:
        payload = self.build_payload(entry, evento=evento, mensagem=mensagem, extra=extra)
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers[HEADER_TOKEN] = self.token
        transaction.on_commit(lambda: self._send(payload, headers))

    def _send(self, payload: dict, headers: dict) -> None:
        try:
            resp = self.session.post(self.url, json=payload, headers=headers, timeout=self.timeout)
            resp.raise_for_status()
            logger.info("[fila] webhook %s OK (entrada=%s)", payload["evento"], payload["entry_id"])
        except requests.RequestException as e:
            # não vazar token nos logs
            logger.exception("[fila] webhook %s falhou (entrada=%s): %s", payload["evento"], payload["entry_id"], e)


def build_notifier(config) -> QueueNotifier:
    url = getattr(config, "QUEUE_WEBHOOK_URL", "")
    if not url:
        return NullQueueNotifier()
    return WebhookQueueNotifier(
        url,
        token=getattr(config, "QUEUE_WEBHOOK_TOKEN", ""),
        timeout=getattr(config, "QUEUE_WEBHOOK_TIMEOUT", 8),
    )


def get_notifier() -> QueueNotifier:
    """Notificador montado na inicialização do app `fila`."""
    return apps.get_app_config("fila").notifier
