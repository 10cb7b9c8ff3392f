# rankfome/catalogo.py
"""
Lojas e produtos.

Cada loja pertence a um usuário (usuario_id) e cada produto a uma loja
(loja_id). Alteração e exclusão resolvem primeiro o recurso (NotFound), depois
o dono (Forbidden), e só então mutam.
"""
from __future__ import annotations

import logging
from typing import Dict, List

from sqlalchemy import func
from sqlmodel import Session, select

from .errors import NotFound, ValidationFailure
from .models import Loja, Produto, Usuario
from .policy import VENDEDORES, Identidade, exigir
from .schemas import (
    DonoView,
    LojaDetalhes,
    LojaIn,
    LojaResumo,
    LojaUpdate,
    LojaView,
    ProdutoIn,
    ProdutoSimplificado,
    ProdutoUpdate,
    ProdutoView,
)

logger = logging.getLogger(__name__)

SEM_NUMERO = "S/N"


# -----------------------------------------------------------------------------
# Lojas
# -----------------------------------------------------------------------------
def _get_loja(session: Session, loja_id: int) -> Loja:
    loja = session.get(Loja, loja_id)
    if loja is None:
        raise NotFound("Loja não encontrada")
    return loja


def criar_loja(session: Session, identidade: Identidade, dados: LojaIn) -> Loja:
    # o dono é sempre quem chama, nunca um id vindo do corpo
    loja = Loja(
        nome=dados.nome,
        descricao=dados.descricao,
        logo_url=dados.logo_url,
        rua=dados.rua,
        numero=dados.numero or SEM_NUMERO,
        bairro=dados.bairro,
        cidade=dados.cidade,
        estado=dados.estado,
        complemento=dados.complemento,
        latitude=dados.latitude,
        longitude=dados.longitude,
        usuario_id=identidade.usuario_id,
    )
    session.add(loja)
    session.commit()
    session.refresh(loja)
    logger.info("loja %s criada por usuário %s", loja.id, identidade.usuario_id)
    return loja


def listar_lojas(session: Session) -> List[Loja]:
    return list(session.exec(select(Loja).order_by(Loja.id)).all())


def obter_loja(session: Session, loja_id: int) -> Loja:
    return _get_loja(session, loja_id)


def atualizar_loja(session: Session, loja_id: int, identidade: Identidade, dados: LojaUpdate) -> Loja:
    loja = _get_loja(session, loja_id)
    exigir(identidade, VENDEDORES, loja.usuario_id)

    loja.nome = dados.nome
    loja.descricao = dados.descricao
    loja.logo_url = dados.logo_url
    loja.rua = dados.rua
    loja.numero = dados.numero or SEM_NUMERO
    loja.bairro = dados.bairro
    loja.cidade = dados.cidade
    loja.estado = dados.estado
    loja.complemento = dados.complemento
    session.add(loja)
    session.commit()
    session.refresh(loja)
    logger.info("loja %s atualizada", loja.id)
    return loja


def excluir_loja(session: Session, loja_id: int) -> None:
    loja = _get_loja(session, loja_id)
    session.delete(loja)
    session.commit()
    logger.info("loja %s excluída (produtos removidos em cascata)", loja_id)


# -----------------------------------------------------------------------------
# Produtos
# -----------------------------------------------------------------------------
def _get_produto(session: Session, produto_id: int) -> Produto:
    produto = session.get(Produto, produto_id)
    if produto is None:
        raise NotFound("Produto não encontrado")
    return produto


def dono_do_produto(session: Session, produto: Produto) -> int:
    return _get_loja(session, produto.loja_id).usuario_id


def criar_produto(session: Session, identidade: Identidade, dados: ProdutoIn) -> Produto:
    loja = session.get(Loja, dados.loja_id)
    if loja is None:
        raise ValidationFailure("Loja não encontrada")
    exigir(identidade, VENDEDORES, loja.usuario_id)

    produto = Produto(
        nome=dados.nome,
        descricao=dados.descricao,
        preco=dados.preco,
        imagem_url=dados.imagem_url,
        categoria=dados.categoria,
        disponivel=dados.disponivel,
        loja_id=loja.id,
    )
    session.add(produto)
    session.commit()
    session.refresh(produto)
    logger.info("produto %s criado na loja %s", produto.id, loja.id)
    return produto


def listar_produtos(session: Session) -> List[Produto]:
    return list(session.exec(select(Produto).order_by(Produto.id)).all())


def obter_produto(session: Session, produto_id: int) -> Produto:
    return _get_produto(session, produto_id)


def listar_produtos_da_loja(session: Session, loja_id: int) -> List[Produto]:
    """Sem checagem de existência: loja inexistente devolve lista vazia."""
    stmt = select(Produto).where(Produto.loja_id == loja_id).order_by(Produto.id)
    return list(session.exec(stmt).all())


def atualizar_produto(
    session: Session, produto_id: int, identidade: Identidade, dados: ProdutoUpdate
) -> Produto:
    produto = _get_produto(session, produto_id)
    exigir(identidade, VENDEDORES, dono_do_produto(session, produto))

    produto.nome = dados.nome
    produto.descricao = dados.descricao
    produto.preco = dados.preco
    produto.imagem_url = dados.imagem_url
    produto.categoria = dados.categoria
    produto.disponivel = dados.disponivel
    session.add(produto)
    session.commit()
    session.refresh(produto)
    logger.info("produto %s atualizado", produto.id)
    return produto


def excluir_produto(session: Session, produto_id: int, identidade: Identidade) -> None:
    produto = _get_produto(session, produto_id)
    exigir(identidade, VENDEDORES, dono_do_produto(session, produto))
    session.delete(produto)
    session.commit()
    logger.info("produto %s excluído", produto_id)


# -----------------------------------------------------------------------------
# Views
# -----------------------------------------------------------------------------
def _dono(session: Session, usuario_id: int) -> DonoView:
    usuario = session.get(Usuario, usuario_id)
    return DonoView(id=usuario_id, nome=usuario.nome if usuario else "")


def _simplificado(p: Produto) -> ProdutoSimplificado:
    return ProdutoSimplificado(
        id=p.id,
        nome=p.nome,
        descricao=p.descricao,
        preco=p.preco,
        imagem_url=p.imagem_url,
        categoria=p.categoria,
        disponivel=p.disponivel,
    )


def campos(obj, exclude: frozenset = frozenset()) -> dict:
    # getattr (e não model_dump) para recarregar instâncias expiradas após commit
    return {k: getattr(obj, k) for k in type(obj).model_fields if k not in exclude}


def _campos_loja(loja: Loja) -> dict:
    return campos(loja, frozenset({"usuario_id"}))


def loja_view(session: Session, loja: Loja, quantidade_produtos: int | None = None) -> LojaView:
    if quantidade_produtos is None:
        quantidade_produtos = session.exec(
            select(func.count()).select_from(Produto).where(Produto.loja_id == loja.id)
        ).one()
    return LojaView(
        **_campos_loja(loja),
        quantidade_produtos=quantidade_produtos,
        dono=_dono(session, loja.usuario_id),
    )


def lojas_view(session: Session, lojas: List[Loja]) -> List[LojaView]:
    contagem: Dict[int, int] = dict(
        session.exec(
            select(Produto.loja_id, func.count()).group_by(Produto.loja_id)
        ).all()
    )
    return [loja_view(session, loja, contagem.get(loja.id, 0)) for loja in lojas]


def loja_detalhes(session: Session, loja: Loja) -> LojaDetalhes:
    produtos = listar_produtos_da_loja(session, loja.id)
    return LojaDetalhes(
        **_campos_loja(loja),
        quantidade_produtos=len(produtos),
        dono=_dono(session, loja.usuario_id),
        produtos=[_simplificado(p) for p in produtos],
    )


def produto_view(session: Session, produto: Produto, incluir_loja: bool = True) -> ProdutoView:
    loja = session.get(Loja, produto.loja_id) if incluir_loja else None
    return ProdutoView(
        **campos(produto),
        loja=LojaResumo(id=loja.id, nome=loja.nome) if loja else None,
    )
