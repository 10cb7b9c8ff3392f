# rankfome/routes/lojas.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from .. import catalogo
from ..db import get_session
from ..deps import requer
from ..policy import SOMENTE_DEV, VENDEDORES, Identidade
from ..schemas import LojaDetalhes, LojaIn, LojaUpdate, LojaView, MessageResponse

router = APIRouter(prefix="/Lojas", tags=["Lojas"])


@router.get("", response_model=List[LojaView])
def listar(session: Session = Depends(get_session)) -> List[LojaView]:
    return catalogo.lojas_view(session, catalogo.listar_lojas(session))


@router.get("/{loja_id}", response_model=LojaDetalhes)
def detalhe(loja_id: int, session: Session = Depends(get_session)) -> LojaDetalhes:
    return catalogo.loja_detalhes(session, catalogo.obter_loja(session, loja_id))


@router.post("", response_model=LojaView, status_code=status.HTTP_201_CREATED)
def criar(
    payload: LojaIn,
    session: Session = Depends(get_session),
    identidade: Identidade = Depends(requer(VENDEDORES)),
) -> LojaView:
    loja = catalogo.criar_loja(session, identidade, payload)
    return catalogo.loja_view(session, loja, quantidade_produtos=0)


@router.put("/{loja_id}", response_model=MessageResponse)
def atualizar(
    loja_id: int,
    payload: LojaUpdate,
    session: Session = Depends(get_session),
    identidade: Identidade = Depends(requer(VENDEDORES)),
) -> MessageResponse:
    catalogo.atualizar_loja(session, loja_id, identidade, payload)
    return MessageResponse(message="Loja atualizada com sucesso")


@router.delete("/{loja_id}", response_model=MessageResponse)
def excluir(
    loja_id: int,
    session: Session = Depends(get_session),
    _identidade: Identidade = Depends(requer(SOMENTE_DEV)),
) -> MessageResponse:
    catalogo.excluir_loja(session, loja_id)
    return MessageResponse(message="Loja deletada com sucesso")
