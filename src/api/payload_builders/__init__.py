"""Payload builders por canal: construção de payloads para APIs externas.

Estrutura:
- whatsapp/: WhatsApp Business API (mensagem de texto de verificação)
"""

__all__: list[str] = []
