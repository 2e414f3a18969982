# fila/ledger.py
"""
Fila de espera por barbeiro.

Toda operação que mexe nas posições roda dentro de `transaction.atomic` com a
linha do barbeiro travada (`select_for_update`), o que serializa entrada,
reordenação, cancelamento e conclusão na fila de um mesmo barbeiro. Com isso
as posições das entradas `waiting` ficam sempre 1..N, sem buracos nem repetição.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from django.db import IntegrityError, transaction
from django.db.models import F, Max
from django.utils import timezone

from barbearias.models import Barber, BarberStatus
from clientes.models import Customer
from core import catalog
from core.contacts import find_or_create_customer, normalize_msisdn_br
from core.exceptions import ConflictError, InvalidStateError, NotFoundError, ValidationError
from servicos.models import Service
from .models import EntryStatus, QueueEntry, QueueService
from .notifications import NullQueueNotifier, QueueNotifier

logger = logging.getLogger(__name__)

UP, DOWN = "up", "down"
DIRECTIONS = (UP, DOWN)

_NULL_NOTIFIER = NullQueueNotifier()


@dataclass(frozen=True)
class QueuePosition:
    entry: QueueEntry
    position: int
    estimated_wait_minutes: int

    @property
    def total_minutes(self) -> int:
        return self.entry.total_minutes()

    @property
    def total_price(self) -> Decimal:
        return self.entry.total_price()


@dataclass(frozen=True)
class CustomerQueueStatus:
    entry: QueueEntry
    position: int
    people_ahead: int
    total_people: int
    estimated_wait_minutes: int


# ---------- helpers ----------

def _waiting(barber_id):
    return QueueEntry.objects.filter(barber_id=barber_id, status=EntryStatus.WAITING)


def _get_entry(entry_id) -> QueueEntry:
    entry = QueueEntry.objects.filter(pk=entry_id).first()
    if entry is None:
        raise NotFoundError("Entrada da fila não encontrada.", entry_id=entry_id)
    return entry


def _lock_entry(entry_id) -> QueueEntry:
    """Busca a entrada, trava a fila do barbeiro dela e relê a entrada já sob a trava."""
    entry = _get_entry(entry_id)
    catalog.get_barber(entry.barber_id, for_update=True)
    return QueueEntry.objects.select_for_update().get(pk=entry.pk)


def _clean_service_ids(service_ids: Iterable | None) -> list:
    ids = list(service_ids or [])
    if not ids:
        raise ValidationError("Serviços são obrigatórios.")
    if len(set(ids)) != len(ids):
        raise ValidationError("Serviço repetido na mesma entrada.")
    return ids


def close_gap(barber_id, position: Optional[int]) -> int:
    """Sobe em uma posição quem estava atrás de `position` (entrada que saiu da fila)."""
    if position is None:
        return 0
    return _waiting(barber_id).filter(position__gt=position).update(position=F("position") - 1)


# ---------- operações ----------

def enqueue(customer_id, barber_id, service_ids, *, notifier: QueueNotifier | None = None) -> QueueEntry:
    """
    Coloca o cliente no fim da fila do barbeiro.
    - barbeiro precisa estar ativo e com fila aberta (ValidationError);
    - serviços precisam existir e estar ativos (ValidationError);
    - cliente não pode já estar aguardando em nenhuma fila (ConflictError).
    """
    notifier = notifier or _NULL_NOTIFIER
    ids = _clean_service_ids(service_ids)

    with transaction.atomic():
        barber = Barber.objects.select_for_update().filter(pk=barber_id).first()
        if barber is None or barber.status != BarberStatus.ACTIVE:
            raise ValidationError("Barbeiro não disponível.", barber_id=barber_id)
        if not barber.accepts_queue:
            raise ValidationError("A fila deste barbeiro está fechada no momento.", barber_id=barber_id)

        customer = Customer.objects.filter(pk=customer_id).first()
        if customer is None:
            raise NotFoundError("Cliente não encontrado.", customer_id=customer_id)

        if QueueEntry.objects.filter(customer=customer, status=EntryStatus.WAITING).exists():
            raise ConflictError("Cliente já está na fila.", customer_id=customer.pk)

        services = Service.objects.in_bulk(ids)
        if len(services) != len(ids) or not all(s.active for s in services.values()):
            raise ValidationError("Alguns serviços não foram encontrados.")

        last = _waiting(barber.pk).aggregate(m=Max("position"))["m"] or 0
        try:
            with transaction.atomic():
                entry = QueueEntry.objects.create(
                    customer=customer, barber=barber, status=EntryStatus.WAITING, position=last + 1,
                )
        except IntegrityError:
            # outra requisição colocou o mesmo cliente em outra fila ao mesmo tempo
            raise ConflictError("Cliente já está na fila.", customer_id=customer.pk)

        QueueService.objects.bulk_create([
            QueueService(
                entry=entry,
                service=services[sid],
                service_name=services[sid].name,
                price=services[sid].price,
                average_time=services[sid].average_time,
            )
            for sid in ids
        ])

        notifier.notify(entry, evento="entrada_adicionada", mensagem="Você entrou na fila.")

    logger.info(
        "[fila] entrada %s: cliente=%s barbeiro=%s posicao=%s servicos=%s",
        entry.pk, customer.pk, barber.pk, entry.position, ids,
    )
    return entry


def enqueue_walk_in(name: str, phone: str, barber_id, service_ids, *,
                    notifier: QueueNotifier | None = None) -> QueueEntry:
    """Cliente de balcão: resolve/cria o cadastro pelo telefone e coloca na fila."""
    if phone and not normalize_msisdn_br(phone):
        raise ValidationError("Telefone inválido.")
    if not (name or "").strip() and not phone:
        raise ValidationError("Informe nome ou telefone do cliente.")
    with transaction.atomic():
        customer = find_or_create_customer(nome=name, telefone=phone)
        return enqueue(customer.pk, barber_id, service_ids, notifier=notifier)


def move(entry_id, direction: str, *, notifier: QueueNotifier | None = None) -> QueueEntry:
    """Troca a posição da entrada com a vizinha de cima (`up`) ou de baixo (`down`)."""
    notifier = notifier or _NULL_NOTIFIER
    if direction not in DIRECTIONS:
        raise ValidationError("Direção deve ser 'up' ou 'down'.")

    with transaction.atomic():
        entry = _lock_entry(entry_id)
        if entry.status != EntryStatus.WAITING:
            raise InvalidStateError("Esta entrada não está na fila.", entry_id=entry.pk)

        others = _waiting(entry.barber_id)
        if direction == UP:
            neighbor = others.filter(position__lt=entry.position).order_by("-position").first()
        else:
            neighbor = others.filter(position__gt=entry.position).order_by("position").first()
        if neighbor is None:
            raise ValidationError("Não é possível mover nesta direção.", entry_id=entry.pk)

        QueueEntry.objects.filter(pk=entry.pk).update(position=neighbor.position)
        QueueEntry.objects.filter(pk=neighbor.pk).update(position=entry.position)
        entry.refresh_from_db()

        notifier.notify(entry, evento="fila_reordenada", mensagem="Sua posição na fila mudou.")

    logger.info("[fila] entrada %s movida %s -> posicao %s", entry.pk, direction, entry.position)
    return entry


def cancel(entry_id, *, notifier: QueueNotifier | None = None) -> QueueEntry:
    """
    Cancela a entrada e fecha o buraco na fila.
    Cancelar de novo uma entrada já cancelada não faz nada; entrada concluída
    não pode ser cancelada (InvalidStateError); id inexistente é NotFoundError.
    """
    notifier = notifier or _NULL_NOTIFIER

    with transaction.atomic():
        entry = _lock_entry(entry_id)
        if entry.status == EntryStatus.CANCELLED:
            return entry
        if entry.status != EntryStatus.WAITING:
            raise InvalidStateError("Atendimento já concluído; não pode ser cancelado.", entry_id=entry.pk)

        old_position = entry.position
        n = QueueEntry.objects.filter(pk=entry.pk, status=EntryStatus.WAITING).update(
            status=EntryStatus.CANCELLED, position=None, finished_at=timezone.now(),
        )
        if n == 0:
            raise InvalidStateError("Esta entrada não está na fila.", entry_id=entry.pk)
        close_gap(entry.barber_id, old_position)
        entry.refresh_from_db()

        notifier.notify(entry, evento="entrada_cancelada", mensagem="Sua entrada na fila foi cancelada.")

    logger.info("[fila] entrada %s cancelada (posicao anterior=%s)", entry.pk, old_position)
    return entry


def remove_service(entry_id, service_id, *, notifier: QueueNotifier | None = None) -> QueueEntry:
    """Tira um serviço da entrada antes do checkout. O último serviço não pode sair."""
    notifier = notifier or _NULL_NOTIFIER

    with transaction.atomic():
        entry = _lock_entry(entry_id)
        if entry.status != EntryStatus.WAITING:
            raise InvalidStateError("Esta entrada não está na fila.", entry_id=entry.pk)

        service = catalog.get_service(service_id)
        line = entry.queue_services.filter(service=service).first()
        if line is None:
            raise NotFoundError("Serviço não encontrado na fila.", service_id=service.pk)
        if entry.queue_services.count() <= 1:
            raise ValidationError("Não é possível remover o último serviço da fila.")
        line.delete()

        notifier.notify(entry, evento="servicos_atualizados", extra={"removido": line.service_name})

    logger.info("[fila] servico %s removido da entrada %s", service_id, entry.pk)
    return entry


def snapshot(barber_id=None) -> list[QueuePosition]:
    """
    Entradas aguardando, na ordem da fila (por barbeiro), com posição 1-based
    e espera estimada = soma do tempo médio de quem está na frente.
    """
    qs = (
        QueueEntry.objects.filter(status=EntryStatus.WAITING)
        .select_related("customer", "barber")
        .prefetch_related("queue_services")
        .order_by("barber_id", "position", "created_at")
    )
    if barber_id is not None:
        catalog.get_barber(barber_id)
        qs = qs.filter(barber_id=barber_id)

    rows: list[QueuePosition] = []
    current_barber, pos, wait = None, 0, 0
    for entry in qs:
        if entry.barber_id != current_barber:
            current_barber, pos, wait = entry.barber_id, 0, 0
        pos += 1
        rows.append(QueuePosition(entry=entry, position=pos, estimated_wait_minutes=wait))
        wait += entry.total_minutes()
    return rows


def status_for_customer(customer_id) -> CustomerQueueStatus | None:
    entry = QueueEntry.objects.filter(customer_id=customer_id, status=EntryStatus.WAITING).first()
    if entry is None:
        return None
    rows = snapshot(entry.barber_id)
    mine = next(r for r in rows if r.entry.pk == entry.pk)
    return CustomerQueueStatus(
        entry=mine.entry,
        position=mine.position,
        people_ahead=mine.position - 1,
        total_people=len(rows),
        estimated_wait_minutes=mine.estimated_wait_minutes,
    )


def deactivate_barber(barber_id, *, notifier: QueueNotifier | None = None) -> list[QueueEntry]:
    """
    Desativa o barbeiro e cancela, na mesma transação, todos que aguardavam por ele.
    Retorna as entradas canceladas.
    """
    notifier = notifier or _NULL_NOTIFIER

    with transaction.atomic():
        barber = catalog.get_barber(barber_id, for_update=True)
        entries = list(_waiting(barber.pk).select_related("customer", "barber"))
        now = timezone.now()
        _waiting(barber.pk).update(status=EntryStatus.CANCELLED, position=None, finished_at=now)

        if barber.status != BarberStatus.INACTIVE:
            barber.status = BarberStatus.INACTIVE
            barber.save(update_fields=["status", "updated_at"])

        for e in entries:
            e.status, e.position, e.finished_at = EntryStatus.CANCELLED, None, now
            notifier.notify(
                e, evento="entrada_cancelada",
                mensagem="O barbeiro não está mais atendendo hoje.",
                extra={"motivo": "barbeiro_desativado"},
            )

    logger.info("[fila] barbeiro %s desativado; %s entrada(s) cancelada(s)", barber.pk, len(entries))
    return entries


def reindex(barber_id) -> int:
    """Regrava as posições como 1..N na ordem atual. Retorna quantas mudaram."""
    changed = 0
    with transaction.atomic():
        catalog.get_barber(barber_id, for_update=True)
        for i, entry in enumerate(_waiting(barber_id).order_by("position", "created_at"), start=1):
            if entry.position != i:
                QueueEntry.objects.filter(pk=entry.pk).update(position=i)
                changed += 1
    if changed:
        logger.warning("[fila] barbeiro %s: %s posicao(oes) corrigida(s)", barber_id, changed)
    return changed
