# rankfome/models.py
"""
Tabelas do RankFome. As referências entre entidades são apenas chaves
estrangeiras (ids); quem precisa do objeto relacionado faz a consulta explícita.
"""
from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel


def _agora() -> datetime:
    return datetime.now(timezone.utc)


class TipoUsuario(str, Enum):
    Cliente = "Cliente"
    Vendedor = "Vendedor"
    Dev = "Dev"  # administrador


class StatusPedido(str, Enum):
    Pendente = "Pendente"
    Preparando = "Preparando"
    ACaminho = "ACaminho"
    Entregue = "Entregue"
    Cancelado = "Cancelado"

    @property
    def terminal(self) -> bool:
        return self in (StatusPedido.Entregue, StatusPedido.Cancelado)


class FormaPagamento(str, Enum):
    Dinheiro = "Dinheiro"
    CartaoCredito = "CartaoCredito"
    CartaoDebito = "CartaoDebito"
    Pix = "Pix"
    ValeRefeicao = "ValeRefeicao"


class Usuario(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    nome: str
    idade: int = 0
    localizacao: str = ""
    cpf_email: str = Field(index=True, unique=True)
    senha_hash: str
    tipo: TipoUsuario = TipoUsuario.Cliente
    data_criacao: datetime = Field(default_factory=_agora)


class Loja(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    nome: str
    descricao: str
    logo_url: str
    rua: str
    numero: str = "S/N"
    bairro: str
    cidade: str
    estado: str
    complemento: Optional[str] = None
    latitude: float = 0.0
    longitude: float = 0.0
    data_criacao: datetime = Field(default_factory=_agora)
    usuario_id: int = Field(foreign_key="usuario.id", ondelete="CASCADE", index=True)


class Produto(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    nome: str
    descricao: str
    preco: Decimal = Field(max_digits=10, decimal_places=2)
    imagem_url: str
    categoria: str
    disponivel: bool = True
    avaliacao_media: float = 0.0
    total_avaliacoes: int = 0
    data_criacao: datetime = Field(default_factory=_agora)
    loja_id: int = Field(foreign_key="loja.id", ondelete="CASCADE", index=True)


class Pedido(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    data_pedido: datetime = Field(default_factory=_agora)
    valor_total: Decimal = Field(max_digits=10, decimal_places=2)
    status: StatusPedido = StatusPedido.Pendente
    forma_pagamento: FormaPagamento
    endereco_rua: str
    endereco_numero: str
    endereco_bairro: str
    endereco_cidade: str
    endereco_estado: str
    endereco_complemento: Optional[str] = None
    observacoes: Optional[str] = None
    cliente_id: int = Field(foreign_key="usuario.id", ondelete="CASCADE", index=True)


class ItemPedido(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    pedido_id: int = Field(foreign_key="pedido.id", ondelete="CASCADE", index=True)
    produto_id: int = Field(foreign_key="produto.id", ondelete="CASCADE", index=True)
    quantidade: int
    preco_unitario: Decimal = Field(max_digits=10, decimal_places=2)
    subtotal: Decimal = Field(max_digits=10, decimal_places=2)
