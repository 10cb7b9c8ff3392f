# rankfome/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

_BASE_DIR = Path(__file__).resolve().parent.parent


@dataclass(frozen=True)
class JwtConfig:
    """Parâmetros de assinatura/validação dos tokens (imutáveis)."""
    secret: str
    issuer: str = "RankFome"
    audience: str = "RankFomeApp"
    ttl_days: int = 7
    algorithm: str = "HS256"


@dataclass(frozen=True)
class Settings:
    database_url: str
    jwt: JwtConfig
    upload_dir: Path
    upload_max_bytes: int = 5 * 1024 * 1024
    upload_extensions: tuple[str, ...] = (".jpg", ".jpeg", ".png", ".gif", ".webp")
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Lê o ambiente (.env incluso) e monta um Settings."""
    return Settings(
        database_url=os.getenv("DATABASE_URL", f"sqlite:///{_BASE_DIR / 'rankfome.db'}"),
        jwt=JwtConfig(
            secret=os.getenv("JWT_SECRET_KEY", "SUA_CHAVE_SECRETA_SUPER_SEGURA_AQUI_12345"),
            issuer=os.getenv("JWT_ISSUER", "RankFome"),
            audience=os.getenv("JWT_AUDIENCE", "RankFomeApp"),
            ttl_days=int(os.getenv("JWT_TTL_DAYS", "7")),
        ),
        upload_dir=Path(os.getenv("UPLOAD_DIR", str(_BASE_DIR / "wwwroot"))),
        upload_max_bytes=int(os.getenv("UPLOAD_MAX_BYTES", str(5 * 1024 * 1024))),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()
