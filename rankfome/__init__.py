"""RankFome: API de pedidos de delivery (usuários, lojas, produtos e pedidos)."""

__version__ = "1.0.0"
