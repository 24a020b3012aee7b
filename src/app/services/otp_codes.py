"""Geração e validação de formato de códigos OTP e telefones."""

from __future__ import annotations

import hmac
import re
import secrets

OTP_CODE_LENGTH = 6

# E.164: "+" seguido de 2 a 15 dígitos, sem zero à esquerda
E164_PATTERN = re.compile(r"^\+[1-9]\d{1,14}$")


def generate_otp_code(length: int = OTP_CODE_LENGTH) -> str:
    """Gera código numérico aleatório sem zero à esquerda (CSPRNG).

    Com length=6 o intervalo é 100000..999999.
    """
    low = 10 ** (length - 1)
    high = 10**length
    return str(low + secrets.randbelow(high - low))


def is_valid_otp_format(code: str | None, length: int = OTP_CODE_LENGTH) -> bool:
    """True se o código tem exatamente `length` dígitos decimais ASCII."""
    if not isinstance(code, str) or len(code) != length:
        return False
    return code.isascii() and code.isdigit()


def codes_match(expected: str, submitted: str) -> bool:
    """Igualdade exata em tempo constante."""
    return hmac.compare_digest(expected.encode("utf-8"), submitted.encode("utf-8"))


def is_valid_phone_number(phone_number: str | None) -> bool:
    """Valida telefone no formato E.164 (ex: +15551234567)."""
    if not isinstance(phone_number, str):
        return False
    return E164_PATTERN.match(phone_number) is not None
