# rankfome/errors.py
"""
Erros de domínio. Os serviços levantam estas exceções e o handler registrado
em main.py converte cada uma em JSONResponse({"detail": ...}) com o status HTTP
correspondente.
"""
from __future__ import annotations

from fastapi import Request
from fastapi.responses import JSONResponse


class RankFomeError(Exception):
    status_code: int = 500
    default_message: str = "Erro interno."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationFailure(RankFomeError):
    """Entrada inválida ou duplicada (login já usado, senhas diferentes, produto inexistente)."""
    status_code = 400
    default_message = "Requisição inválida."


class Unauthenticated(RankFomeError):
    status_code = 401
    default_message = "Não autenticado."


class Forbidden(RankFomeError):
    status_code = 403
    default_message = "Acesso negado."


class NotFound(RankFomeError):
    status_code = 404
    default_message = "Recurso não encontrado."


async def rankfome_error_handler(_request: Request, exc: RankFomeError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message},
        headers=headers,
    )
