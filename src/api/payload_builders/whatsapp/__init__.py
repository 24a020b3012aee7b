"""Builders de payload para API Meta/WhatsApp."""

from api.payload_builders.whatsapp.text import (
    TextPayloadBuilder,
    build_verification_text,
    to_graph_recipient,
)

__all__ = [
    "TextPayloadBuilder",
    "build_verification_text",
    "to_graph_recipient",
]
