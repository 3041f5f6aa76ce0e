"""Brazilian phone number helpers."""

import re
from urllib.parse import quote

_NON_DIGITS = re.compile(r"\D")

MAX_DIGITS = 11
COUNTRY_CODE = "55"


def clean_phone(phone: str) -> str:
    """Strip everything but digits."""
    return _NON_DIGITS.sub("", phone)


def format_phone(value: str) -> str:
    """Apply the (XX) XXXX-XXXX / (XX) XXXXX-XXXX mask as digits are typed.

    Input beyond eleven digits is dropped.
    """
    digits = clean_phone(value)[:MAX_DIGITS]

    if not digits:
        return ""
    if len(digits) == 1:
        return f"({digits}"
    if len(digits) == 2:
        return f"({digits})"
    if len(digits) <= 6:
        return f"({digits[:2]}) {digits[2:]}"
    if len(digits) <= 10:
        # landline
        return f"({digits[:2]}) {digits[2:6]}-{digits[6:]}"
    # mobile
    return f"({digits[:2]}) {digits[2:7]}-{digits[7:]}"


def _valid_ddd(digits: str) -> bool:
    ddd = digits[:2]
    return ddd.isdigit() and 11 <= int(ddd) <= 99


def validate_phone(phone: str) -> bool:
    digits = clean_phone(phone)
    if len(digits) not in (10, 11):
        return False
    if len(digits) == 11 and digits[2] != "9":
        return False
    return _valid_ddd(digits)


def phone_error(phone: str | None) -> str | None:
    """Return the form error message for ``phone``, or None if acceptable.

    An empty value is accepted since the phone is optional on most forms.
    """
    if not phone or not phone.strip():
        return None

    digits = clean_phone(phone)
    if len(digits) < 10:
        return "Telefone deve ter pelo menos 10 dígitos"
    if len(digits) > 11:
        return "Telefone deve ter no máximo 11 dígitos"
    if len(digits) == 11 and digits[2] != "9":
        return "Número de celular deve começar com 9 após o DDD"
    if not _valid_ddd(digits):
        return "DDD inválido"
    return None


def whatsapp_number(phone: str) -> str:
    """Digits of ``phone`` with the Brazilian country code prefixed."""
    digits = clean_phone(phone)
    # 12 or 13 digits starting with 55 already carry the country code;
    # a bare number may itself have DDD 55
    if len(digits) in (12, 13) and digits.startswith(COUNTRY_CODE):
        return digits
    return COUNTRY_CODE + digits


def whatsapp_link(phone: str, message: str = "") -> str:
    """Deep link opening a WhatsApp chat with ``phone``."""
    return f"whatsapp://send?phone={whatsapp_number(phone)}&text={quote(message, safe='')}"
