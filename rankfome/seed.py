# rankfome/seed.py
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Dict

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlmodel import Session

from . import catalogo, pedidos, usuarios
from .config import get_settings
from .db import get_engine, init_db
from .logger import setup_logging
from .models import FormaPagamento, TipoUsuario
from .policy import Identidade
from .schemas import ItemPedidoIn, LojaIn, PedidoIn, ProdutoIn, RegistroRequest
from .security import JwtHelper

logger = logging.getLogger(__name__)

# ---------- Parâmetros do seed (ajuste à vontade) ----------
SENHA_PADRAO = "rankfome123"
USUARIOS = [
    ("Admin RankFome", "admin@rankfome.dev", TipoUsuario.Dev),
    ("Maria Vendedora", "maria@lanches.com", TipoUsuario.Vendedor),
    ("João Cliente", "joao@cliente.com", TipoUsuario.Cliente),
]
PRODUTOS = [
    ("X-Burger", "Pão, hambúrguer, queijo", "19.90", "Lanches"),
    ("X-Salada", "Pão, hambúrguer, queijo, salada", "22.50", "Lanches"),
    ("Batata Frita", "Porção média", "12.00", "Porções"),
    ("Refrigerante Lata", "350ml", "6.00", "Bebidas"),
]


def run(engine: Engine | None = None) -> Dict[str, int]:
    engine = engine or get_engine()
    init_db(engine)
    jwt_helper = JwtHelper(get_settings().jwt)

    with Session(engine) as s:
        # limpa na ordem certa (FKs)
        for tbl in ("itempedido", "pedido", "produto", "loja", "usuario"):
            s.exec(text(f"DELETE FROM {tbl}"))
        s.commit()

        ids: Dict[str, int] = {}
        for nome, login, tipo in USUARIOS:
            u, _ = usuarios.registrar(s, jwt_helper, RegistroRequest(
                nome=nome, cpf_email=login, senha=SENHA_PADRAO,
                confirmar_senha=SENHA_PADRAO, tipo=tipo,
            ))
            ids[tipo.value] = u.id

        vendedor = Identidade(ids["Vendedor"], TipoUsuario.Vendedor)
        loja = catalogo.criar_loja(s, vendedor, LojaIn(
            nome="Lanches da Maria", descricao="Hambúrgueres artesanais",
            rua="Rua das Flores", numero="100", bairro="Centro",
            cidade="Curitiba", estado="PR", latitude=-25.4284, longitude=-49.2733,
        ))

        produtos = [
            catalogo.criar_produto(s, vendedor, ProdutoIn(
                nome=nome, descricao=desc, preco=Decimal(preco),
                categoria=cat, loja_id=loja.id,
            ))
            for nome, desc, preco, cat in PRODUTOS
        ]

        itens = [ItemPedidoIn(produto_id=produtos[0].id, quantidade=2),
                 ItemPedidoIn(produto_id=produtos[3].id, quantidade=2)]
        precos = {p.id: p.preco for p in produtos}
        total = sum(pedidos.calcular_subtotal(precos[i.produto_id], i.quantidade) for i in itens)
        pedido = pedidos.criar_pedido(s, ids["Cliente"], PedidoIn(
            valor_total=total, forma_pagamento=FormaPagamento.Pix,
            endereco_rua="Av. Sete de Setembro", endereco_numero="2000",
            endereco_bairro="Batel", endereco_cidade="Curitiba", endereco_estado="PR",
            itens=itens,
        ))

        contagens = {
            tbl: s.exec(text(f"SELECT COUNT(*) FROM {tbl}")).one()[0]
            for tbl in ("usuario", "loja", "produto", "pedido", "itempedido")
        }
        logger.info("seed concluído: %s (pedido %s)", contagens, pedido.id)
        return contagens


if __name__ == "__main__":
    setup_logging(get_settings().log_level)
    run()
    print("Seed OK ✔")
