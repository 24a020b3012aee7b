"""API: camada de borda HTTP e adapter do WhatsApp.

Subpastas:
- connectors/: cliente HTTP da Graph API (WhatsApp)
- payload_builders/: construção de payloads para a Graph API
- routes/: endpoints HTTP (OTP, health)

NÃO PODE conter: regras do desafio OTP, acesso direto ao store fora de
dependências FastAPI.
"""
