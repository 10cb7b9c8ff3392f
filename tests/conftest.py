import os
import tempfile

# precisa vir antes de qualquer import do pacote (get_settings é cacheado)
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="rankfome-test-")
os.environ["JWT_SECRET_KEY"] = "chave-de-teste-rankfome-com-mais-de-32-bytes"

from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel  # noqa: E402

from rankfome.config import get_settings  # noqa: E402
from rankfome.db import get_engine, init_db  # noqa: E402
from rankfome.main import app  # noqa: E402
from rankfome.models import Loja, Produto, TipoUsuario, Usuario  # noqa: E402
from rankfome.policy import Identidade  # noqa: E402
from rankfome.security import JwtHelper, hash_senha  # noqa: E402

ENDERECO = {
    "endereco_rua": "Rua A",
    "endereco_numero": "10",
    "endereco_bairro": "Centro",
    "endereco_cidade": "Curitiba",
    "endereco_estado": "PR",
}


@pytest.fixture(autouse=True)
def engine():
    eng = get_engine()
    SQLModel.metadata.drop_all(eng)
    init_db(eng)
    yield eng


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def jwt_helper():
    return JwtHelper(get_settings().jwt)


def make_usuario(session, nome, tipo, login=None, senha="segredo1"):
    u = Usuario(
        nome=nome,
        cpf_email=login or f"{nome.lower()}@teste.com",
        senha_hash=hash_senha(senha),
        tipo=tipo,
    )
    session.add(u)
    session.commit()
    session.refresh(u)
    return u


def identidade(usuario):
    return Identidade(usuario.id, usuario.tipo, usuario.nome, usuario.cpf_email)


def make_loja(session, dono_id, nome="Loja"):
    loja = Loja(
        nome=nome, descricao="d", logo_url="", rua="R", bairro="B",
        cidade="C", estado="PR", usuario_id=dono_id,
    )
    session.add(loja)
    session.commit()
    session.refresh(loja)
    return loja


def make_produto(session, loja_id, preco="19.90", nome="X-Burger"):
    p = Produto(
        nome=nome, descricao="d", preco=Decimal(preco), imagem_url="",
        categoria="Lanches", loja_id=loja_id,
    )
    session.add(p)
    session.commit()
    session.refresh(p)
    return p


@pytest.fixture
def vendedor(session):
    return make_usuario(session, "Vendedora", TipoUsuario.Vendedor)


@pytest.fixture
def cliente(session):
    return make_usuario(session, "Cliente", TipoUsuario.Cliente)


@pytest.fixture
def dev(session):
    return make_usuario(session, "Admin", TipoUsuario.Dev)
