# rankfome/main.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .config import get_settings
from .db import init_db
from .errors import RankFomeError, rankfome_error_handler
from .logger import setup_logging
from .routes import lojas, pedidos, produtos, upload, usuarios

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Startup
# -----------------------------------------------------------------------------
@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Cria as tabelas na base configurada."""
    init_db()
    logger.info("RankFome API pronta")
    yield


# -----------------------------------------------------------------------------
# App
# -----------------------------------------------------------------------------
def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="RankFome API", version="1.0", lifespan=lifespan)

    # CORS liberado para qualquer origem (front-end servido à parte)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RankFomeError, rankfome_error_handler)

    @app.exception_handler(Exception)
    async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.error("erro inesperado em %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(status_code=500, content={"detail": "Erro interno."})

    for module in (usuarios, lojas, produtos, pedidos, upload):
        app.include_router(module.router)

    app.mount(
        "/images",
        StaticFiles(directory=upload.images_dir(settings)),
        name="images",
    )

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()
