"""Connectors: adapters de borda para APIs externas.

Estrutura:
- whatsapp/: WhatsApp Business API (entrega de códigos OTP)
"""

__all__: list[str] = []
