from decimal import Decimal

import pytest

from conftest import ENDERECO


def registrar(client, nome, tipo, login=None, senha="segredo1"):
    resp = client.post("/Usuarios/Registro", json={
        "nome": nome,
        "idade": 30,
        "localizacao": "Curitiba",
        "cpf_email": login or f"{nome.lower()}@teste.com",
        "senha": senha,
        "confirmar_senha": senha,
        "tipo": tipo,
    })
    assert resp.status_code == 200, resp.text
    body = resp.json()
    return body["usuario"]["id"], {"Authorization": f"Bearer {body['token']}"}


LOJA = {
    "nome": "Lanches da Maria", "descricao": "Hambúrgueres", "logo_url": "",
    "rua": "Rua das Flores", "bairro": "Centro", "cidade": "Curitiba", "estado": "PR",
}


@pytest.fixture
def cenario(client):
    """Vendedora A com loja S e produto P (19.90); cliente B."""
    a_id, a = registrar(client, "A", "Vendedor")
    loja = client.post("/Lojas", json=LOJA, headers=a).json()
    produto = client.post("/Produtos", json={
        "nome": "X-Burger", "descricao": "d", "preco": 19.90,
        "categoria": "Lanches", "loja_id": loja["id"],
    }, headers=a).json()
    b_id, b = registrar(client, "B", "Cliente")
    return {"a": a, "a_id": a_id, "b": b, "b_id": b_id, "loja": loja, "produto": produto}


def _criar_pedido(client, headers, itens, total):
    return client.post("/Pedidos", json={
        "valor_total": total, "forma_pagamento": "Pix", "itens": itens, **ENDERECO,
    }, headers=headers)


# -----------------------------------------------------------------------------
# Usuários
# -----------------------------------------------------------------------------
def test_register_then_login(client, jwt_helper):
    resp = client.post("/Usuarios/Registro", json={
        "nome": "Maria", "cpf_email": "123.456.789-00", "senha": "s3nha",
        "confirmar_senha": "s3nha", "tipo": "Vendedor",
    })
    assert resp.status_code == 200
    body = resp.json()
    assert body["usuario"]["tipo"] == "Vendedor"
    assert jwt_helper.resolver_token(body["token"]).tipo.value == "Vendedor"

    login = client.post("/Usuarios/Login", json={"cpf_email": "123.456.789-00", "senha": "s3nha"})
    assert login.status_code == 200
    assert login.json()["usuario"]["id"] == body["usuario"]["id"]


def test_register_duplicate_login_fails(client):
    registrar(client, "Maria", "Cliente", login="maria@x.com")
    resp = client.post("/Usuarios/Registro", json={
        "nome": "Outra", "cpf_email": "maria@x.com", "senha": "x",
        "confirmar_senha": "x", "tipo": "Vendedor",
    })
    assert resp.status_code == 400
    assert resp.json()["detail"] == "CPF/Email já cadastrado"


def test_register_password_mismatch(client):
    resp = client.post("/Usuarios/Registro", json={
        "nome": "Maria", "cpf_email": "m@x.com", "senha": "a", "confirmar_senha": "b",
    })
    assert resp.status_code == 400
    assert resp.json()["detail"] == "As senhas não coincidem"


def test_login_failures_are_indistinguishable(client):
    registrar(client, "Maria", "Cliente", login="maria@x.com")
    errada = client.post("/Usuarios/Login", json={"cpf_email": "maria@x.com", "senha": "errada"})
    inexistente = client.post("/Usuarios/Login", json={"cpf_email": "ninguem@x.com", "senha": "x"})
    assert errada.status_code == inexistente.status_code == 401
    assert errada.json() == inexistente.json()


# -----------------------------------------------------------------------------
# Autenticação / autorização
# -----------------------------------------------------------------------------
def test_protected_routes_require_token(client):
    assert client.get("/Pedidos").status_code == 401
    assert client.post("/Lojas", json=LOJA).status_code == 401
    bad = {"Authorization": "Bearer token-invalido"}
    assert client.get("/Pedidos", headers=bad).status_code == 401


def test_cliente_cannot_create_store(client):
    _, b = registrar(client, "B", "Cliente")
    assert client.post("/Lojas", json=LOJA, headers=b).status_code == 403


def test_store_owner_checks(client, cenario):
    _, c = registrar(client, "C", "Vendedor")
    loja_id = cenario["loja"]["id"]
    novo = {**LOJA, "nome": "Novo"}

    assert client.put(f"/Lojas/{loja_id}", json=novo, headers=c).status_code == 403
    assert client.put(f"/Lojas/{loja_id}", json=novo, headers=cenario["a"]).status_code == 200
    assert client.get(f"/Lojas/{loja_id}").json()["nome"] == "Novo"
    # exclusão de loja é só para Dev, nem o dono pode
    assert client.delete(f"/Lojas/{loja_id}", headers=cenario["a"]).status_code == 403


def test_product_owner_checks(client, cenario):
    _, c = registrar(client, "C", "Vendedor")
    pid = cenario["produto"]["id"]
    dados = {"nome": "X", "preco": 1, "disponivel": True}

    assert client.put(f"/Produtos/{pid}", json=dados, headers=c).status_code == 403
    assert client.delete(f"/Produtos/{pid}", headers=c).status_code == 403
    assert client.post("/Produtos", json={**dados, "loja_id": cenario["loja"]["id"]},
                       headers=c).status_code == 403
    assert client.post("/Produtos", json={**dados, "loja_id": 999},
                       headers=cenario["a"]).status_code == 400
    assert client.delete(f"/Produtos/{pid}", headers=cenario["a"]).status_code == 200
    assert client.get(f"/Produtos/{pid}").status_code == 404


def test_catalog_reads_are_public(client, cenario):
    loja_id = cenario["loja"]["id"]
    lojas = client.get("/Lojas").json()
    assert lojas[0]["quantidade_produtos"] == 1
    assert lojas[0]["dono"] == {"id": cenario["a_id"], "nome": "A"}
    assert client.get(f"/Lojas/{loja_id}").json()["produtos"][0]["nome"] == "X-Burger"
    assert client.get("/Produtos").json()[0]["loja"]["id"] == loja_id
    assert len(client.get(f"/Produtos/Loja/{loja_id}").json()) == 1
    assert client.get("/Produtos/Loja/4242").json() == []
    assert client.get("/Lojas/4242").status_code == 404


# -----------------------------------------------------------------------------
# Pedidos
# -----------------------------------------------------------------------------
def test_order_scenario(client, cenario):
    pid = cenario["produto"]["id"]
    resp = _criar_pedido(client, cenario["b"], [{"produto_id": pid, "quantidade": 3}], 59.70)
    assert resp.status_code == 201
    pedido = resp.json()
    assert pedido["status"] == "Pendente"
    assert pedido["cliente_id"] == cenario["b_id"]
    [item] = pedido["itens"]
    assert Decimal(item["preco_unitario"]) == Decimal("19.90")
    assert Decimal(item["subtotal"]) == Decimal("59.70")
    assert Decimal(pedido["valor_total"]) == Decimal("59.70")

    # vendedora A (sem vínculo com o pedido) muda o status
    url = f"/Pedidos/{pedido['id']}"
    assert client.put(f"{url}/Status", json={"status": "Preparando"},
                      headers=cenario["a"]).status_code == 200
    assert client.get(url, headers=cenario["b"]).json()["status"] == "Preparando"

    _, c = registrar(client, "C", "Cliente")
    assert client.get(url, headers=c).status_code == 403
    assert client.get("/Pedidos", headers=c).json() == []
    assert [p["id"] for p in client.get("/Pedidos", headers=cenario["b"]).json()] == [pedido["id"]]


def test_order_with_missing_product_persists_nothing(client, cenario):
    pid = cenario["produto"]["id"]
    resp = _criar_pedido(client, cenario["b"],
                         [{"produto_id": pid, "quantidade": 1}, {"produto_id": 777, "quantidade": 1}],
                         19.90)
    assert resp.status_code == 400
    assert "777" in resp.json()["detail"]
    assert client.get("/Pedidos", headers=cenario["b"]).json() == []


def test_status_and_delete_gates(client, cenario):
    pid = cenario["produto"]["id"]
    pedido = _criar_pedido(client, cenario["b"], [{"produto_id": pid, "quantidade": 1}], 19.90).json()
    url = f"/Pedidos/{pedido['id']}"

    assert client.put(f"{url}/Status", json={"status": "Entregue"},
                      headers=cenario["b"]).status_code == 403
    assert client.put("/Pedidos/999/Status", json={"status": "Entregue"},
                      headers=cenario["a"]).status_code == 404
    assert client.delete(url, headers=cenario["a"]).status_code == 403

    _, dev = registrar(client, "Root", "Dev")
    assert len(client.get("/Pedidos", headers=dev).json()) == 1
    assert client.delete(url, headers=dev).status_code == 200
    assert client.get(url, headers=dev).status_code == 404


def test_admin_deletes_store_cascades_products(client, cenario):
    _, dev = registrar(client, "Root", "Dev")
    loja_id, pid = cenario["loja"]["id"], cenario["produto"]["id"]

    assert client.delete(f"/Lojas/{loja_id}", headers=dev).status_code == 200
    assert client.get(f"/Produtos/{pid}").status_code == 404
    assert client.delete(f"/Lojas/{loja_id}", headers=dev).status_code == 404


# -----------------------------------------------------------------------------
# Upload
# -----------------------------------------------------------------------------
def test_upload_image(client):
    resp = client.post("/Upload", files={"file": ("foto.PNG", b"\x89PNG fake", "image/png")})
    assert resp.status_code == 200
    url = resp.json()["url"]
    assert url.endswith(".png")
    path = url.split("/images/", 1)[1]
    assert client.get(f"/images/{path}").content == b"\x89PNG fake"


@pytest.mark.parametrize("nome,conteudo", [
    ("doc.pdf", b"%PDF"),
    ("vazio.png", b""),
    ("grande.jpg", b"0" * (5 * 1024 * 1024 + 1)),
])
def test_upload_rejections(client, nome, conteudo):
    resp = client.post("/Upload", files={"file": (nome, conteudo, "application/octet-stream")})
    assert resp.status_code == 400


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_upload_rejects_declared_size_before_reading():
    import asyncio
    from io import BytesIO

    from fastapi import UploadFile

    from rankfome.config import get_settings
    from rankfome.errors import ValidationFailure
    from rankfome.routes.upload import upload_imagem

    buffer = BytesIO(b"\x89PNG")
    arquivo = UploadFile(buffer, size=5 * 1024 * 1024 + 1, filename="grande.png")
    with pytest.raises(ValidationFailure):
        asyncio.run(upload_imagem(None, arquivo, get_settings()))
    assert buffer.tell() == 0


# -----------------------------------------------------------------------------
# CORS
# -----------------------------------------------------------------------------
def test_cors_allows_any_origin(client):
    origem = {"Origin": "http://front.rankfome.local"}
    resp = client.get("/Lojas", headers=origem)
    assert resp.headers["access-control-allow-origin"] == "*"

    preflight = client.options("/Lojas", headers={
        **origem,
        "Access-Control-Request-Method": "POST",
        "Access-Control-Request-Headers": "Authorization, Content-Type",
    })
    assert preflight.status_code == 200
    assert preflight.headers["access-control-allow-origin"] == "*"
    assert "POST" in preflight.headers["access-control-allow-methods"]


def test_main_runs_uvicorn_on_app(monkeypatch):
    from rankfome import __main__ as entrada

    chamadas = []
    monkeypatch.setattr(entrada.uvicorn, "run", lambda *a, **kw: chamadas.append((a, kw)))
    monkeypatch.setenv("PORT", "9001")

    entrada.main()

    [(args, kwargs)] = chamadas
    assert args == ("rankfome.main:app",)
    assert kwargs["port"] == 9001
