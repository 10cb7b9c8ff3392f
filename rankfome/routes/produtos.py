# rankfome/routes/produtos.py
from typing import List

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from .. import catalogo
from ..db import get_session
from ..deps import requer
from ..policy import VENDEDORES, Identidade
from ..schemas import MessageResponse, ProdutoIn, ProdutoUpdate, ProdutoView

router = APIRouter(prefix="/Produtos", tags=["Produtos"])


@router.get("", response_model=List[ProdutoView])
def listar(session: Session = Depends(get_session)) -> List[ProdutoView]:
    return [catalogo.produto_view(session, p) for p in catalogo.listar_produtos(session)]


@router.get("/Loja/{loja_id}", response_model=List[ProdutoView])
def listar_da_loja(loja_id: int, session: Session = Depends(get_session)) -> List[ProdutoView]:
    produtos = catalogo.listar_produtos_da_loja(session, loja_id)
    return [catalogo.produto_view(session, p, incluir_loja=False) for p in produtos]


@router.get("/{produto_id}", response_model=ProdutoView)
def detalhe(produto_id: int, session: Session = Depends(get_session)) -> ProdutoView:
    return catalogo.produto_view(session, catalogo.obter_produto(session, produto_id))


@router.post("", response_model=ProdutoView, status_code=status.HTTP_201_CREATED)
def criar(
    payload: ProdutoIn,
    session: Session = Depends(get_session),
    identidade: Identidade = Depends(requer(VENDEDORES)),
) -> ProdutoView:
    produto = catalogo.criar_produto(session, identidade, payload)
    return catalogo.produto_view(session, produto)


@router.put("/{produto_id}", response_model=MessageResponse)
def atualizar(
    produto_id: int,
    payload: ProdutoUpdate,
    session: Session = Depends(get_session),
    identidade: Identidade = Depends(requer(VENDEDORES)),
) -> MessageResponse:
    catalogo.atualizar_produto(session, produto_id, identidade, payload)
    return MessageResponse(message="Produto atualizado com sucesso")


@router.delete("/{produto_id}", response_model=MessageResponse)
def excluir(
    produto_id: int,
    session: Session = Depends(get_session),
    identidade: Identidade = Depends(requer(VENDEDORES)),
) -> MessageResponse:
    catalogo.excluir_produto(session, produto_id, identidade)
    return MessageResponse(message="Produto deletado com sucesso")
