# fila/signals.py
from __future__ import annotations

import logging
from django.db.models.signals import post_save, pre_save
from django.dispatch import receiver

from core.exceptions import InvalidStateError
from .models import TERMINAL_STATUSES, EntryStatus, QueueEntry

log = logging.getLogger(__name__)


@receiver(pre_save, sender=QueueEntry)
def queue_entry_pre_save(sender, instance: QueueEntry, **kwargs):
    """
    Regras para saves "por fora" do ledger (admin, shell):
    - Na criação: força status = waiting.
    - Status concluído/cancelado é final; qualquer troca a partir dele é recusada.
    - Loga transições.
    """
    if instance._state.adding:
        if instance.status != EntryStatus.WAITING:
            log.warning("[signals][pre_save] Forçando waiting na criação (recebido=%s)", instance.status)
            instance.status = EntryStatus.WAITING
        return

    old_status = sender.objects.filter(pk=instance.pk).values_list("status", flat=True).first()
    new_status = instance.status
    if old_status is None or old_status == new_status:
        return

    if old_status in TERMINAL_STATUSES:
        log.error(
            "[signals][pre_save] Transição recusada id=%s %s -> %s", instance.pk, old_status, new_status
        )
        raise InvalidStateError(
            f"Entrada já está {old_status}; não pode voltar para {new_status}.", entry_id=instance.pk
        )

    log.info("[signals][pre_save] Status mudando id=%s %s -> %s", instance.pk, old_status, new_status)


@receiver(post_save, sender=QueueEntry)
def queue_entry_post_save(sender, instance: QueueEntry, created: bool, **kwargs):
    if created:
        log.info(
            "[signals][post_save] Criada entrada id=%s barbeiro=%s posicao=%s",
            instance.pk, instance.barber_id, instance.position,
        )
        return
    log.debug("[signals][post_save] Persistida entrada id=%s status=%s", instance.pk, instance.status)
