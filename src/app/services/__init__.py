"""Serviços de aplicação.

Unidades reutilizáveis sem IO direto.
Implementações concretas de IO ficam em app/infra/.
"""

from app.services.otp_codes import (
    OTP_CODE_LENGTH,
    codes_match,
    generate_otp_code,
    is_valid_otp_format,
    is_valid_phone_number,
)
from app.services.otp_sweeper import OtpSweeper

__all__ = [
    "OTP_CODE_LENGTH",
    "OtpSweeper",
    "codes_match",
    "generate_otp_code",
    "is_valid_otp_format",
    "is_valid_phone_number",
]
