# rankfome/security.py
"""
Hash de senha e tokens JWT.

- hash_senha / verificar_senha: SHA-256 em base64, determinístico (o mesmo
  formato de hash já gravado na base).
- JwtHelper: emite e valida tokens HS256 com issuer/audience e validade fixa,
  sem tolerância de relógio.
"""
from __future__ import annotations

import base64
import hashlib
import hmac
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from .config import JwtConfig
from .errors import Unauthenticated
from .models import TipoUsuario, Usuario
from .policy import Identidade

logger = logging.getLogger(__name__)


def hash_senha(senha: str) -> str:
    digest = hashlib.sha256(senha.encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")


def verificar_senha(senha: str, senha_hash: str) -> bool:
    return hmac.compare_digest(hash_senha(senha), senha_hash)


class JwtHelper:
    def __init__(self, config: JwtConfig) -> None:
        self._config = config

    def gerar_token(self, usuario: Usuario, agora: Optional[datetime] = None) -> str:
        agora = agora or datetime.now(timezone.utc)
        payload = {
            "sub": str(usuario.id),
            "name": usuario.nome,
            "email": usuario.cpf_email,
            "role": usuario.tipo.value,
            "iss": self._config.issuer,
            "aud": self._config.audience,
            "iat": agora,
            "exp": agora + timedelta(days=self._config.ttl_days),
        }
        return jwt.encode(payload, self._config.secret, algorithm=self._config.algorithm)

    def resolver_token(self, token: str) -> Identidade:
        """Valida o token e devolve a identidade; qualquer falha vira Unauthenticated."""
        try:
            claims = jwt.decode(
                token,
                self._config.secret,
                algorithms=[self._config.algorithm],
                audience=self._config.audience,
                issuer=self._config.issuer,
                leeway=0,
                options={"require": ["exp", "iss", "aud", "sub"]},
            )
            return Identidade(
                usuario_id=int(claims["sub"]),
                tipo=TipoUsuario(claims.get("role")),
                nome=claims.get("name", ""),
                cpf_email=claims.get("email", ""),
            )
        except (jwt.InvalidTokenError, KeyError, ValueError) as e:
            logger.debug("token rejeitado: %s", e)
            raise Unauthenticated() from e
