# rankfome/routes/pedidos.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from .. import pedidos
from ..db import get_session
from ..deps import get_identidade, requer
from ..policy import SOMENTE_DEV, VENDEDORES, Identidade
from ..schemas import MessageResponse, PedidoIn, PedidoView, StatusUpdate

router = APIRouter(prefix="/Pedidos", tags=["Pedidos"])


@router.get("", response_model=List[PedidoView])
def listar(
    session: Session = Depends(get_session),
    identidade: Identidade = Depends(get_identidade),
) -> List[PedidoView]:
    return [pedidos.pedido_view(session, p) for p in pedidos.listar_pedidos(session, identidade)]


@router.get("/{pedido_id}", response_model=PedidoView)
def detalhe(
    pedido_id: int,
    session: Session = Depends(get_session),
    identidade: Identidade = Depends(get_identidade),
) -> PedidoView:
    return pedidos.pedido_view(session, pedidos.obter_pedido(session, pedido_id, identidade))


@router.post("", response_model=PedidoView, status_code=status.HTTP_201_CREATED)
def criar(
    payload: PedidoIn,
    session: Session = Depends(get_session),
    identidade: Identidade = Depends(get_identidade),
) -> PedidoView:
    pedido = pedidos.criar_pedido(session, identidade.usuario_id, payload)
    return pedidos.pedido_view(session, pedido)


@router.put("/{pedido_id}/Status", response_model=MessageResponse)
def atualizar_status(
    pedido_id: int,
    payload: StatusUpdate,
    session: Session = Depends(get_session),
    _identidade: Identidade = Depends(requer(VENDEDORES)),
) -> MessageResponse:
    # qualquer Vendedor altera qualquer pedido; não há vínculo pedido -> loja
    pedidos.atualizar_status(session, pedido_id, payload.status)
    return MessageResponse(message="Status atualizado com sucesso")


@router.delete("/{pedido_id}", response_model=MessageResponse)
def excluir(
    pedido_id: int,
    session: Session = Depends(get_session),
    _identidade: Identidade = Depends(requer(SOMENTE_DEV)),
) -> MessageResponse:
    pedidos.excluir_pedido(session, pedido_id)
    return MessageResponse(message="Pedido deletado com sucesso")
