# core/contacts.py
from __future__ import annotations
import re
from typing import Optional
from clientes.models import Customer

_NON_DIGITS = re.compile(r"\D+")

def _only_digits(raw: Optional[str]) -> str:
    return _NON_DIGITS.sub("", raw or "")

def normalize_msisdn_br(raw: Optional[str]) -> Optional[str]:
    """
    Normaliza telefones do Brasil para E.164 (sem +):
    - Mantém DDI 55.
    - Remove '00' inicial, zeros à esquerda após 55.
    - Aceita entradas com/sem DDI; devolve 55 + DDD + número (12 ou 13 dígitos).
    Retorna None se inválido.
    """
    if not raw:
        return None
    digits = _only_digits(raw)

    # remove prefixo discado internacional "00"
    if digits.startswith("00"):
        digits = digits[2:]

    # se veio sem 55 e parece DDD+numero (10 ou 11), prefixa 55
    if not digits.startswith("55") and len(digits) in (10, 11):
        digits = "55" + digits

    # "550X..." (DDI + zero do tronco) e zeros à esquerda depois do 55
    if digits.startswith("55"):
        digits = "55" + digits[2:].lstrip("0")

    # 55 + DDD(2) + número(8 ou 9) => 12 ou 13 dígitos
    if not (len(digits) in (12, 13) and digits.isdigit()):
        return None

    return digits

def normalize_phone(raw: Optional[str]) -> str:
    """Retorna string normalizada ou "" se inválido."""
    return normalize_msisdn_br(raw) or ""

def find_or_create_customer(nome: Optional[str] = None, telefone: Optional[str] = None) -> Customer:
    """
    Resolve o cliente do balcão (walk-in):
    1) Normaliza telefone para E.164 BR.
    2) Match EXATO por telefone.
    3) Match por SUFIXO (últimos 8 dígitos) para cadastros antigos;
       se achar, grava o telefone normalizado.
    4) Se não achar, cria.
    """
    tel_norm = normalize_msisdn_br(telefone)
    nome = (nome or "").strip()

    if tel_norm:
        c = Customer.objects.filter(phone=tel_norm).first()
        if c is None:
            c = Customer.objects.filter(phone__isnull=False, phone__endswith=tel_norm[-8:]).first()
            if c is not None:
                c.phone = tel_norm
                c.save(update_fields=["phone", "updated_at"])
        if c is not None:
            if not c.name and nome:
                c.name = nome
                c.save(update_fields=["name", "updated_at"])
            return c

    return Customer.objects.create(
        name=nome or (tel_norm or "Cliente"),
        phone=tel_norm or None,  # nunca converta telefone para int
    )
