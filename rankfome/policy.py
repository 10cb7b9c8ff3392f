# rankfome/policy.py
"""
Regra única de autorização.

`Dev` (administrador) passa sempre. Os demais papéis passam se estiverem no
conjunto exigido pelo endpoint e, quando o recurso tem dono, se forem o dono.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Optional

from .errors import Forbidden
from .models import TipoUsuario

SOMENTE_DEV: frozenset[TipoUsuario] = frozenset({TipoUsuario.Dev})
VENDEDORES: frozenset[TipoUsuario] = frozenset({TipoUsuario.Vendedor, TipoUsuario.Dev})
QUALQUER: frozenset[TipoUsuario] = frozenset(TipoUsuario)


@dataclass(frozen=True)
class Identidade:
    """Quem está chamando, extraído do token."""
    usuario_id: int
    tipo: TipoUsuario
    nome: str = ""
    cpf_email: str = ""

    @property
    def is_dev(self) -> bool:
        return self.tipo is TipoUsuario.Dev


def allow(
    caller_role: TipoUsuario,
    caller_id: int,
    resource_owner_id: Optional[int],
    required_roles: AbstractSet[TipoUsuario],
) -> bool:
    if caller_role is TipoUsuario.Dev:
        return True
    if caller_role not in required_roles:
        return False
    return resource_owner_id is None or caller_id == resource_owner_id


def exigir(
    identidade: Identidade,
    required_roles: AbstractSet[TipoUsuario],
    resource_owner_id: Optional[int] = None,
) -> None:
    if not allow(identidade.tipo, identidade.usuario_id, resource_owner_id, required_roles):
        raise Forbidden()


def pode_ver(identidade: Identidade, dono_id: int) -> bool:
    """Leitura de pedidos: qualquer papel autenticado, escopo pelo dono."""
    return allow(identidade.tipo, identidade.usuario_id, dono_id, QUALQUER)
