# rankfome/schemas.py
"""
DTOs de entrada e saída da API (pydantic). As tabelas em models.py nunca são
devolvidas diretamente: cada resposta é montada a partir de ids resolvidos.
"""
from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, List, Optional

from pydantic import BaseModel, Field

from .models import FormaPagamento, StatusPedido, TipoUsuario

Dinheiro = Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2)]


class MessageResponse(BaseModel):
    message: str


# -----------------------------------------------------------------------------
# Usuários
# -----------------------------------------------------------------------------
class RegistroRequest(BaseModel):
    nome: str
    idade: int = Field(0, ge=0)
    localizacao: str = ""
    cpf_email: str = Field(..., min_length=1)
    senha: str = Field(..., min_length=1)
    confirmar_senha: str
    tipo: TipoUsuario = TipoUsuario.Cliente


class LoginRequest(BaseModel):
    cpf_email: str
    senha: str


class UsuarioResumo(BaseModel):
    id: int
    nome: str
    cpf_email: str
    tipo: TipoUsuario


class AuthResponse(BaseModel):
    message: str
    usuario: UsuarioResumo
    token: str


# -----------------------------------------------------------------------------
# Lojas
# -----------------------------------------------------------------------------
class DonoView(BaseModel):
    id: int
    nome: str


class LojaUpdate(BaseModel):
    nome: str
    descricao: str = ""
    logo_url: str = ""
    rua: str
    numero: Optional[str] = None
    bairro: str
    cidade: str
    estado: str
    complemento: Optional[str] = None


class LojaIn(LojaUpdate):
    latitude: float = 0.0
    longitude: float = 0.0


class LojaResumo(BaseModel):
    id: int
    nome: str


class ProdutoResumo(BaseModel):
    id: int
    nome: str


class ProdutoSimplificado(BaseModel):
    id: int
    nome: str
    descricao: str
    preco: Decimal
    imagem_url: str
    categoria: str
    disponivel: bool


class LojaView(BaseModel):
    id: int
    nome: str
    descricao: str
    logo_url: str
    rua: str
    numero: str
    bairro: str
    cidade: str
    estado: str
    complemento: Optional[str] = None
    latitude: float
    longitude: float
    data_criacao: datetime
    quantidade_produtos: int = 0
    dono: DonoView


class LojaDetalhes(LojaView):
    produtos: List[ProdutoSimplificado] = []


# -----------------------------------------------------------------------------
# Produtos
# -----------------------------------------------------------------------------
class ProdutoUpdate(BaseModel):
    nome: str
    descricao: str = ""
    preco: Dinheiro
    imagem_url: str = ""
    categoria: str = ""
    disponivel: bool = True


class ProdutoIn(ProdutoUpdate):
    loja_id: int


class ProdutoView(ProdutoSimplificado):
    avaliacao_media: float
    total_avaliacoes: int
    data_criacao: datetime
    loja_id: int
    loja: Optional[LojaResumo] = None


# -----------------------------------------------------------------------------
# Pedidos
# -----------------------------------------------------------------------------
class ItemPedidoIn(BaseModel):
    produto_id: int
    quantidade: int = Field(..., ge=1)


class PedidoIn(BaseModel):
    valor_total: Dinheiro
    forma_pagamento: FormaPagamento
    endereco_rua: str
    endereco_numero: str
    endereco_bairro: str
    endereco_cidade: str
    endereco_estado: str
    endereco_complemento: Optional[str] = None
    observacoes: Optional[str] = None
    itens: List[ItemPedidoIn] = []


class StatusUpdate(BaseModel):
    status: StatusPedido


class ItemPedidoView(BaseModel):
    id: int
    produto_id: int
    quantidade: int
    preco_unitario: Decimal
    subtotal: Decimal
    produto: Optional[ProdutoResumo] = None


class PedidoView(BaseModel):
    id: int
    data_pedido: datetime
    valor_total: Decimal
    status: StatusPedido
    forma_pagamento: FormaPagamento
    endereco_rua: str
    endereco_numero: str
    endereco_bairro: str
    endereco_cidade: str
    endereco_estado: str
    endereco_complemento: Optional[str] = None
    observacoes: Optional[str] = None
    cliente_id: int
    cliente: Optional[DonoView] = None
    itens: List[ItemPedidoView] = []


class UploadResponse(BaseModel):
    url: str
