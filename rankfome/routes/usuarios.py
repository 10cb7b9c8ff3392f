# rankfome/routes/usuarios.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from .. import usuarios
from ..db import get_session
from ..deps import get_jwt_helper
from ..schemas import AuthResponse, LoginRequest, RegistroRequest
from ..security import JwtHelper

router = APIRouter(prefix="/Usuarios", tags=["Usuarios"])


@router.post("/Registro", response_model=AuthResponse)
def registro(
    payload: RegistroRequest,
    session: Session = Depends(get_session),
    jwt_helper: JwtHelper = Depends(get_jwt_helper),
) -> AuthResponse:
    usuario, token = usuarios.registrar(session, jwt_helper, payload)
    return AuthResponse(
        message="Usuário criado com sucesso",
        usuario=usuarios.resumo(usuario),
        token=token,
    )


@router.post("/Login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    session: Session = Depends(get_session),
    jwt_helper: JwtHelper = Depends(get_jwt_helper),
) -> AuthResponse:
    usuario, token = usuarios.autenticar(session, jwt_helper, payload)
    return AuthResponse(
        message="Login realizado com sucesso",
        usuario=usuarios.resumo(usuario),
        token=token,
    )
