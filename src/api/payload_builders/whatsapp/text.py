"""Builder para mensagens de texto (código de verificação)."""

from __future__ import annotations

from typing import Any

_VERIFICATION_TEMPLATE = (
    "🔐 {brand} Verification Code\n\n"
    "Your verification code is: {code}\n\n"
    "This code will expire in {minutes} minutes.\n\n"
    "If you didn't request this code, please ignore this message.\n\n"
    "Thank you,\n"
    "The {brand} Team"
)


def to_graph_recipient(phone_number: str) -> str:
    """Graph API espera o número E.164 sem o '+'."""
    return phone_number.removeprefix("+")


def build_verification_text(code: str, ttl_minutes: float, brand: str) -> str:
    """Corpo da mensagem com o código e a validade."""
    minutes = int(ttl_minutes) if float(ttl_minutes).is_integer() else ttl_minutes
    return _VERIFICATION_TEMPLATE.format(brand=brand, code=code, minutes=minutes)


class TextPayloadBuilder:
    """Builder para mensagens de texto simples."""

    def build(self, to: str, body: str) -> dict[str, Any]:
        """Constrói payload completo de texto conforme API Meta.

        Args:
            to: Telefone E.164 (com ou sem '+')
            body: Texto da mensagem
        """
        return {
            "messaging_product": "whatsapp",
            "to": to_graph_recipient(to),
            "type": "text",
            "text": {
                "preview_url": False,
                "body": body,
            },
        }
