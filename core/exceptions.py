# core/exceptions.py
from __future__ import annotations

import logging

from django.db.models import ProtectedError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

log = logging.getLogger(__name__)


class CoreError(Exception):
    """
    Base dos erros de domínio (fila, checkout, catálogo).
    Sobem direto da operação até a view; quem traduz para HTTP é o
    `api_exception_handler` abaixo.
    """
    code = "erro"
    http_status = status.HTTP_400_BAD_REQUEST
    default_message = "Operação inválida."

    def __init__(self, message: str | None = None, **extra):
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)


class ValidationError(CoreError):
    code = "validacao"
    http_status = status.HTTP_400_BAD_REQUEST
    default_message = "Dados inválidos."


class NotFoundError(CoreError):
    code = "nao_encontrado"
    http_status = status.HTTP_404_NOT_FOUND
    default_message = "Registro não encontrado."


class ConflictError(CoreError):
    code = "conflito"
    http_status = status.HTTP_409_CONFLICT
    default_message = "Conflito com o estado atual."


class InvalidStateError(CoreError):
    code = "estado_invalido"
    http_status = status.HTTP_409_CONFLICT
    default_message = "Operação não permitida para o status atual."


class InsufficientStockError(CoreError):
    code = "estoque_insuficiente"
    http_status = 422
    default_message = "Estoque insuficiente."


def api_exception_handler(exc, context):
    if isinstance(exc, CoreError):
        view = context.get("view")
        log.info(
            "[api] %s em %s: %s",
            exc.code, view.__class__.__name__ if view else None, exc.message,
        )
        body = {"ok": False, "error": exc.code, "detail": exc.message}
        if exc.extra:
            body.update(exc.extra)
        return Response(body, status=exc.http_status)

    # ex.: apagar serviço que ainda está numa fila (FK PROTECT)
    if isinstance(exc, ProtectedError):
        return Response(
            {
                "ok": False,
                "error": ConflictError.code,
                "detail": "Registro em uso; não pode ser removido.",
            },
            status=status.HTTP_409_CONFLICT,
        )

    return exception_handler(exc, context)
