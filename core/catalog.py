# core/catalog.py
"""
Acesso ao catálogo (barbeiros, serviços, produtos) usado pela fila e pelo checkout.

As funções aqui levantam os erros de domínio de `core.exceptions` em vez de
devolver None, para que a fila/checkout não precisem repetir as checagens.
"""
from __future__ import annotations

import logging

from django.db import transaction
from django.db.models import F

from barbearias.models import Barber
from core.exceptions import InsufficientStockError, NotFoundError, ValidationError
from produtos.models import Item
from servicos.models import Service

logger = logging.getLogger(__name__)


def get_barber(barber_id, *, for_update: bool = False) -> Barber:
    qs = Barber.objects.all()
    if for_update:
        qs = qs.select_for_update()
    barber = qs.filter(pk=barber_id).first()
    if barber is None:
        raise NotFoundError("Barbeiro não encontrado.", barber_id=barber_id)
    return barber


def get_service(service_id) -> Service:
    svc = Service.objects.filter(pk=service_id).first()
    if svc is None:
        raise NotFoundError("Serviço não encontrado.", service_id=service_id)
    return svc


def get_item(item_id, *, for_update: bool = False) -> Item:
    qs = Item.objects.all()
    if for_update:
        qs = qs.select_for_update()
    item = qs.filter(pk=item_id).first()
    if item is None:
        raise NotFoundError("Produto não encontrado.", item_id=item_id)
    return item


def decrement_stock(item_id, qty: int) -> None:
    """
    Baixa condicional: só decrementa se houver saldo (`qtd >= qty`).
    Zero linhas afetadas => estoque insuficiente (ou outra venda levou antes).
    """
    if qty <= 0:
        raise ValidationError("Quantidade deve ser maior que zero.", item_id=item_id)
    n = Item.objects.filter(pk=item_id, qtd__gte=qty).update(qtd=F("qtd") - qty)
    if n == 0:
        if not Item.objects.filter(pk=item_id).exists():
            raise NotFoundError("Produto não encontrado.", item_id=item_id)
        raise InsufficientStockError(
            "Estoque insuficiente para o produto.", item_id=item_id, requested=qty,
        )


@transaction.atomic
def adjust_stock(item_id, delta: int) -> Item:
    """Ajuste manual de estoque (entrada de mercadoria, perda...). Nunca deixa negativo."""
    item = get_item(item_id, for_update=True)
    if delta < 0:
        decrement_stock(item.pk, -delta)
    elif delta > 0:
        Item.objects.filter(pk=item.pk).update(qtd=F("qtd") + delta)
    item.refresh_from_db(fields=["qtd", "updated_at"])
    logger.info("[catalogo] estoque ajustado item=%s delta=%s saldo=%s", item.pk, delta, item.qtd)
    return item
