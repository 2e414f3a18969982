# core/params.py
from __future__ import annotations

from typing import Optional

from core.exceptions import ValidationError


def int_param(request, name: str) -> Optional[int]:
    """Lê um id da query string; ausente -> None, não numérico -> ValidationError (400)."""
    raw = (request.query_params.get(name) or "").strip()
    if not raw:
        return None
    if not raw.isdigit():
        raise ValidationError(f"Parâmetro '{name}' inválido.")
    return int(raw)
