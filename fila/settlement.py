# fila/settlement.py
"""
Checkout do atendimento: transforma uma entrada `waiting` em um registro de
Histórico, uma única vez, baixando o estoque dos produtos vendidos.

Baixa de estoque, criação do histórico e troca de status da entrada acontecem
na mesma transação: ou tudo persiste, ou nada.
"""
from __future__ import annotations

import logging
from collections import OrderedDict
from decimal import Decimal
from typing import Iterable, Mapping, Optional

from django.db import transaction
from django.utils import timezone

from core import catalog
from core.exceptions import InsufficientStockError, InvalidStateError, ValidationError
from historico.models import History, HistoryItem, HistoryService
from produtos.models import Item
from servicos.models import Service
from . import fees
from .ledger import close_gap
from .models import EntryStatus, QueueEntry
from .notifications import NullQueueNotifier, QueueNotifier

logger = logging.getLogger(__name__)

_NULL_NOTIFIER = NullQueueNotifier()


def _positive_int(value, campo: str) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{campo} inválida.")
    if n <= 0 or n != value:
        raise ValidationError(f"{campo} deve ser um inteiro maior que zero.")
    return n


def _merge_products(final_products: Iterable[Mapping] | None) -> "OrderedDict[int, int]":
    """[{item_id, quantity}, ...] -> {item_id: quantidade total} (mesmo item repetido é somado)."""
    merged: OrderedDict[int, int] = OrderedDict()
    for line in final_products or ():
        try:
            item_id = line["item_id"]
        except (KeyError, TypeError):
            raise ValidationError("Produto sem item_id.")
        qty = _positive_int(line.get("quantity", 1), "Quantidade")
        merged[item_id] = merged.get(item_id, 0) + qty
    return merged


def _expand_extras(extra_services: Iterable | None) -> list:
    """Aceita ids ou {service_id, quantity}; devolve um id por unidade cobrada."""
    ids = []
    for extra in extra_services or ():
        if isinstance(extra, Mapping):
            if "service_id" not in extra:
                raise ValidationError("Serviço extra sem service_id.")
            qty = _positive_int(extra.get("quantity", 1), "Quantidade")
            ids.extend([extra["service_id"]] * qty)
        else:
            ids.append(extra)
    return ids


def _unit_price(service: Service, quoted: Mapping) -> Decimal:
    """Preço cotado na entrada da fila, se houver; senão o preço de tabela."""
    price = quoted.get(service.pk)
    return price if price is not None else service.price


def complete(
    entry_id,
    final_services: Optional[Iterable] = None,
    final_products: Optional[Iterable[Mapping]] = (),
    payment_method: str = "",
    installments: int = 1,
    extra_services: Optional[Iterable] = (),
    *,
    notifier: QueueNotifier | None = None,
) -> History:
    """
    Conclui o atendimento da entrada `entry_id`.

    - `final_services`: ids dos serviços da fila que serão cobrados
      (None = todos os que estão na entrada);
    - `final_products`: [{item_id, quantity}] vendidos no atendimento;
    - `extra_services`: serviços feitos além do pedido (ids ou {service_id, quantity});
    - `payment_method`/`installments`: definem a taxa (ver `fila.fees`).

    Erros: InvalidStateError (entrada inexistente ou fora da fila),
    InsufficientStockError (nada é gravado), ValidationError (dados ruins).
    """
    notifier = notifier or _NULL_NOTIFIER
    fees.validate_payment(payment_method, installments)
    products = _merge_products(final_products)
    extra_ids = _expand_extras(extra_services)

    with transaction.atomic():
        entry = QueueEntry.objects.filter(pk=entry_id).first()
        if entry is None:
            raise InvalidStateError("Entrada da fila não encontrada.", entry_id=entry_id)
        # mesma trava das operações da fila do barbeiro
        barber = catalog.get_barber(entry.barber_id, for_update=True)
        entry = QueueEntry.objects.select_for_update().select_related("customer").get(pk=entry.pk)
        if entry.status != EntryStatus.WAITING:
            raise InvalidStateError(
                "Atendimento já concluído." if entry.status == EntryStatus.COMPLETED
                else "Esta entrada não está na fila.",
                entry_id=entry.pk, status=entry.status,
            )

        quoted = {qs.service_id: qs.price for qs in entry.queue_services.all()}
        service_ids = list(quoted) if final_services is None else list(final_services)
        if len(set(service_ids)) != len(service_ids):
            raise ValidationError("Serviço repetido na conclusão.")
        if not service_ids and not extra_ids:
            raise ValidationError("Informe ao menos um serviço para concluir o atendimento.")

        services = Service.objects.in_bulk(set(service_ids) | set(extra_ids))
        missing = [sid for sid in service_ids + extra_ids if sid not in services]
        if missing:
            raise ValidationError("Alguns serviços não foram encontrados.", service_ids=missing)

        items = Item.objects.select_for_update().in_bulk(list(products))
        missing = [iid for iid in products if iid not in items]
        if missing:
            raise ValidationError("Alguns produtos não foram encontrados.", item_ids=missing)

        # checa tudo antes de gravar qualquer coisa
        for item_id, qty in products.items():
            if qty > items[item_id].qtd:
                raise InsufficientStockError(
                    f"Estoque insuficiente para {items[item_id].name}.",
                    item_id=item_id, requested=qty, available=items[item_id].qtd,
                )

        service_lines = [(services[sid], _unit_price(services[sid], quoted), False) for sid in service_ids]
        service_lines += [(services[sid], services[sid].price, True) for sid in extra_ids]

        gross = sum((price for _, price, _ in service_lines), Decimal("0.00"))
        gross += sum((items[iid].value * qty for iid, qty in products.items()), Decimal("0.00"))
        breakdown = fees.compute(gross, payment_method, installments)

        # ---- escrita ----
        for item_id, qty in products.items():
            catalog.decrement_stock(item_id, qty)

        old_position = entry.position
        n = QueueEntry.objects.filter(pk=entry.pk, status=EntryStatus.WAITING).update(
            status=EntryStatus.COMPLETED, position=None, finished_at=timezone.now(),
        )
        if n == 0:
            raise InvalidStateError("Atendimento já concluído.", entry_id=entry.pk)
        close_gap(entry.barber_id, old_position)

        history = History.objects.create(
            queue_entry=entry,
            customer=entry.customer,
            barber=barber,
            customer_name=entry.customer.name,
            barber_name=barber.name,
            payment_method=payment_method,
            installments=installments,
            gross_total=breakdown.gross_total,
            fee_rate=breakdown.fee_rate,
            fee_amount=breakdown.fee_amount,
            net_amount=breakdown.net_amount,
        )
        HistoryService.objects.bulk_create([
            HistoryService(history=history, service=svc, service_name=svc.name, price=price, is_extra=is_extra)
            for svc, price, is_extra in service_lines
        ])
        HistoryItem.objects.bulk_create([
            HistoryItem(
                history=history,
                item=items[iid],
                item_name=items[iid].name,
                quantity=qty,
                unit_price=items[iid].value,
                total_price=items[iid].value * qty,
            )
            for iid, qty in products.items()
        ])

        entry.refresh_from_db()
        notifier.notify(
            entry, evento="atendimento_concluido", mensagem="Atendimento concluído. Obrigado!",
            extra={"history_id": history.pk, "total": str(breakdown.gross_total)},
        )

    logger.info(
        "[checkout] entrada %s concluida: historico=%s bruto=%s taxa=%s liquido=%s (%s %sx)",
        entry.pk, history.pk, breakdown.gross_total, breakdown.fee_amount,
        breakdown.net_amount, payment_method, installments,
    )
    return history
