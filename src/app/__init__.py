"""App: núcleo do serviço: verificação de telefone por OTP.

Subpastas:
- bootstrap/: composition root (factories, inicialização, wiring)
- use_cases/: envio e verificação de OTP
- services/: geração de códigos e sweep periódico
- infra/: stores concretos (memória, Redis)
- protocols/: contratos do store e do sender
- domain/: modelo do desafio OTP
- observability/: correlation_id e métricas
- constants/: mensagens e status dos fluxos OTP

Padrão: app executa; api adapta; config configura; utils apoia.
"""
