# rankfome/deps.py
from __future__ import annotations

from typing import AbstractSet, Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings, get_settings
from .errors import Unauthenticated
from .models import TipoUsuario
from .policy import Identidade, exigir
from .security import JwtHelper

_bearer = HTTPBearer(auto_error=False)


def get_jwt_helper(settings: Settings = Depends(get_settings)) -> JwtHelper:
    return JwtHelper(settings.jwt)


def get_identidade(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    jwt_helper: JwtHelper = Depends(get_jwt_helper),
) -> Identidade:
    if credentials is None or not credentials.credentials:
        raise Unauthenticated()
    return jwt_helper.resolver_token(credentials.credentials)


def requer(roles: AbstractSet[TipoUsuario]) -> Callable[..., Identidade]:
    """Gate de papel do endpoint (sem checagem de dono)."""

    def _dep(identidade: Identidade = Depends(get_identidade)) -> Identidade:
        exigir(identidade, roles)
        return identidade

    return _dep
