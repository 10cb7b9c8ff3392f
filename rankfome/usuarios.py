# rankfome/usuarios.py
from __future__ import annotations

import logging
from typing import Tuple

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from .errors import Unauthenticated, ValidationFailure
from .models import Usuario
from .schemas import LoginRequest, RegistroRequest, UsuarioResumo
from .security import JwtHelper, hash_senha, verificar_senha

logger = logging.getLogger(__name__)

CREDENCIAIS_INVALIDAS = "CPF/Email ou senha incorretos"


def buscar_por_login(session: Session, cpf_email: str) -> Usuario | None:
    return session.exec(select(Usuario).where(Usuario.cpf_email == cpf_email)).first()


def registrar(session: Session, jwt_helper: JwtHelper, dados: RegistroRequest) -> Tuple[Usuario, str]:
    """
    Cria o usuário e devolve (usuario, token).
    Login duplicado e senhas divergentes viram ValidationFailure.
    """
    if buscar_por_login(session, dados.cpf_email) is not None:
        raise ValidationFailure("CPF/Email já cadastrado")
    if dados.senha != dados.confirmar_senha:
        raise ValidationFailure("As senhas não coincidem")

    usuario = Usuario(
        nome=dados.nome,
        idade=dados.idade,
        localizacao=dados.localizacao,
        cpf_email=dados.cpf_email,
        senha_hash=hash_senha(dados.senha),
        tipo=dados.tipo,
    )
    session.add(usuario)
    try:
        session.commit()
    except IntegrityError as e:
        # corrida entre dois registros com o mesmo login: o índice único decide
        session.rollback()
        raise ValidationFailure("CPF/Email já cadastrado") from e
    session.refresh(usuario)

    logger.info("usuário %s registrado como %s", usuario.id, usuario.tipo.value)
    return usuario, jwt_helper.gerar_token(usuario)


def autenticar(session: Session, jwt_helper: JwtHelper, dados: LoginRequest) -> Tuple[Usuario, str]:
    usuario = buscar_por_login(session, dados.cpf_email)
    if usuario is None or not verificar_senha(dados.senha, usuario.senha_hash):
        logger.warning("login recusado")
        raise Unauthenticated(CREDENCIAIS_INVALIDAS)
    return usuario, jwt_helper.gerar_token(usuario)


def resumo(usuario: Usuario) -> UsuarioResumo:
    return UsuarioResumo(
        id=usuario.id,
        nome=usuario.nome,
        cpf_email=usuario.cpf_email,
        tipo=usuario.tipo,
    )
