"""Enums e mensagens do fluxo de verificação OTP.

As mensagens são o contrato exposto ao cliente HTTP (em inglês).
"""

from __future__ import annotations

from enum import StrEnum


class VerifyOtpStatus(StrEnum):
    """Desfechos terminais de uma tentativa de verificação."""

    VERIFIED = "verified"
    MISSING_FIELDS = "missing_fields"
    INVALID_FORMAT = "invalid_format"
    NOT_FOUND = "not_found"
    TOO_MANY_ATTEMPTS = "too_many_attempts"
    INVALID_CODE = "invalid_code"


class SendOtpStatus(StrEnum):
    """Desfechos de uma solicitação de envio de código."""

    SENT = "sent"
    MISSING_PHONE = "missing_phone"
    INVALID_PHONE = "invalid_phone"
    NOT_CONFIGURED = "not_configured"
    ALREADY_PENDING = "already_pending"
    DELIVERY_FAILED = "delivery_failed"


MSG_VERIFIED = "Phone number verified successfully"
MSG_VERIFY_MISSING_FIELDS = "Phone number and OTP are required"
MSG_NOT_FOUND = "OTP not found or expired. Please request a new one."
MSG_TOO_MANY_ATTEMPTS = "Too many failed attempts. Please request a new OTP."

MSG_SENT = "OTP sent successfully"
MSG_PHONE_REQUIRED = "Phone number is required"
MSG_INVALID_PHONE = (
    "Invalid phone number format. Please include country code (e.g., +1234567890)"
)
MSG_NOT_CONFIGURED = "WhatsApp API not configured. Please contact support."
MSG_ALREADY_PENDING = "OTP already sent. Please wait before requesting a new one."
MSG_DELIVERY_FAILED = "Failed to send OTP via WhatsApp"


def invalid_format_message(code_length: int = 6) -> str:
    """Ex.: "OTP must be 6 digits"."""
    return f"OTP must be {code_length} digits"


def invalid_code_message(remaining_attempts: int) -> str:
    """Ex.: "Invalid OTP. 2 attempts remaining."."""
    return f"Invalid OTP. {remaining_attempts} attempts remaining."


def wait_message(remaining_seconds: int) -> str:
    """Ex.: "Please wait 5 minutes before requesting a new OTP"."""
    minutes = -(-remaining_seconds // 60)
    return f"Please wait {minutes} minutes before requesting a new OTP"
