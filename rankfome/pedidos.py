# rankfome/pedidos.py
"""
Motor de pedidos.

Ciclo de vida do status:

    Pendente -> Preparando -> ACaminho -> Entregue
         \\________________________________-> Cancelado

Todo pedido nasce `Pendente`. `Entregue` e `Cancelado` são terminais, mas a
transição não é validada: quem tem permissão (Vendedor/Dev) pode gravar
qualquer status, inclusive voltar de `Entregue` para `Pendente`.

O preço de cada item é copiado do produto no momento da criação e nunca mais
é recalculado. `valor_total` é o valor declarado pelo cliente, gravado como
veio.
"""
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List

from sqlmodel import Session, select

from .catalogo import campos
from .errors import Forbidden, NotFound, ValidationFailure
from .models import ItemPedido, Pedido, Produto, StatusPedido, Usuario
from .policy import Identidade, pode_ver
from .schemas import DonoView, ItemPedidoView, PedidoIn, PedidoView, ProdutoResumo

logger = logging.getLogger(__name__)

CENTAVOS = Decimal("0.01")

STATUS_INICIAL = StatusPedido.Pendente
TERMINAIS = frozenset(s for s in StatusPedido if s.terminal)


def calcular_subtotal(preco_unitario: Decimal, quantidade: int) -> Decimal:
    return (Decimal(preco_unitario) * quantidade).quantize(CENTAVOS, rounding=ROUND_HALF_UP)


def _get_pedido(session: Session, pedido_id: int) -> Pedido:
    pedido = session.get(Pedido, pedido_id)
    if pedido is None:
        raise NotFound("Pedido não encontrado")
    return pedido


def criar_pedido(session: Session, cliente_id: int, dados: PedidoIn) -> Pedido:
    """
    Cria o pedido com todos os itens numa única transação.

    Todos os produtos são resolvidos antes de qualquer escrita; se algum não
    existir, nada é gravado e o erro informa o id que falhou.
    """
    produtos: Dict[int, Produto] = {}
    for item in dados.itens:
        produto = session.get(Produto, item.produto_id)
        if produto is None:
            raise ValidationFailure(f"Produto {item.produto_id} não encontrado")
        produtos[item.produto_id] = produto

    pedido = Pedido(
        cliente_id=cliente_id,
        valor_total=dados.valor_total,
        status=STATUS_INICIAL,
        forma_pagamento=dados.forma_pagamento,
        endereco_rua=dados.endereco_rua,
        endereco_numero=dados.endereco_numero,
        endereco_bairro=dados.endereco_bairro,
        endereco_cidade=dados.endereco_cidade,
        endereco_estado=dados.endereco_estado,
        endereco_complemento=dados.endereco_complemento,
        observacoes=dados.observacoes,
    )
    session.add(pedido)
    session.flush()  # libera pedido.id

    calculado = Decimal("0.00")
    for item in dados.itens:
        preco = Decimal(produtos[item.produto_id].preco).quantize(CENTAVOS)
        subtotal = calcular_subtotal(preco, item.quantidade)
        calculado += subtotal
        session.add(ItemPedido(
            pedido_id=pedido.id,
            produto_id=item.produto_id,
            quantidade=item.quantidade,
            preco_unitario=preco,
            subtotal=subtotal,
        ))

    if calculado != Decimal(dados.valor_total).quantize(CENTAVOS):
        logger.warning(
            "pedido do cliente %s declara total %s, soma dos itens é %s",
            cliente_id, dados.valor_total, calculado,
        )

    session.commit()
    session.refresh(pedido)
    logger.info("pedido %s criado (%d itens)", pedido.id, len(dados.itens))
    return pedido


def listar_pedidos(session: Session, identidade: Identidade) -> List[Pedido]:
    stmt = select(Pedido).order_by(Pedido.id)
    if not identidade.is_dev:
        stmt = stmt.where(Pedido.cliente_id == identidade.usuario_id)
    return list(session.exec(stmt).all())


def obter_pedido(session: Session, pedido_id: int, identidade: Identidade) -> Pedido:
    pedido = _get_pedido(session, pedido_id)
    if not pode_ver(identidade, pedido.cliente_id):
        raise Forbidden()
    return pedido


def atualizar_status(session: Session, pedido_id: int, status: StatusPedido) -> Pedido:
    pedido = _get_pedido(session, pedido_id)
    anterior = pedido.status
    pedido.status = status
    session.add(pedido)
    session.commit()
    session.refresh(pedido)
    logger.info("pedido %s: %s -> %s", pedido_id, anterior.value, status.value)
    return pedido


def excluir_pedido(session: Session, pedido_id: int) -> None:
    pedido = _get_pedido(session, pedido_id)
    session.delete(pedido)
    session.commit()
    logger.info("pedido %s excluído", pedido_id)


def itens_do_pedido(session: Session, pedido_id: int) -> List[ItemPedido]:
    stmt = select(ItemPedido).where(ItemPedido.pedido_id == pedido_id).order_by(ItemPedido.id)
    return list(session.exec(stmt).all())


def pedido_view(session: Session, pedido: Pedido) -> PedidoView:
    itens = itens_do_pedido(session, pedido.id)
    nomes: Dict[int, str] = {}
    ids = {i.produto_id for i in itens}
    if ids:
        nomes = dict(session.exec(select(Produto.id, Produto.nome).where(Produto.id.in_(ids))).all())

    cliente = session.get(Usuario, pedido.cliente_id)
    return PedidoView(
        **campos(pedido),
        cliente=DonoView(id=cliente.id, nome=cliente.nome) if cliente else None,
        itens=[
            ItemPedidoView(
                id=i.id,
                produto_id=i.produto_id,
                quantidade=i.quantidade,
                preco_unitario=i.preco_unitario,
                subtotal=i.subtotal,
                produto=ProdutoResumo(id=i.produto_id, nome=nomes[i.produto_id])
                if i.produto_id in nomes else None,
            )
            for i in itens
        ],
    )
