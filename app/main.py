import os
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from app.api.pedidos.router.router import api_pedidos
from app.api.sistema.router import router as sistema_router
from app.config.settings import (
    CORS_ALLOW_ALL,
    CORS_ORIGINS,
    DB_AUTO_SETUP,
    ENABLE_DOCS,
    PORT,
    resolve_database_config,
)
from app.core.exception_handlers import register_exception_handlers
from app.database.db_connection import Database
from app.database.init_db import inicializar_banco
from app.utils.logger import logger, log_db_error
from app.utils.prometheus_metrics import PrometheusMiddleware


def _criar_database() -> Database:
    config = resolve_database_config(os.environ)
    if config.use_remote:
        logger.info("ℹ️  Usando DB remota (development o forzado)")
    else:
        logger.info("ℹ️  Priorizando DB local (modo producción por defecto)")
    # Log de configuração (sem password)
    logger.info(f"📦 DB config: {config.safe_dict()}")
    return Database.from_config(config)


def create_app(database: Optional[Database] = None, auto_setup: bool = DB_AUTO_SETUP) -> FastAPI:
    """
    Monta a aplicação.

    `database` permite injetar o handle do banco (ex.: testes); quando omitido
    ele é criado a partir das variáveis de ambiente no startup e descartado no
    shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Iniciando API e banco de dados...")
        db = database
        if db is None:
            try:
                db = _criar_database()
            except SQLAlchemyError as e:
                log_db_error("DB config", e)
                logger.warning("⚠️  DB inválida, deshabilitando endpoints de DB")
        app.state.database = db
        if db is not None:
            inicializar_banco(db, auto_setup=auto_setup)
        logger.info("API iniciada com sucesso.")
        try:
            yield
        finally:
            logger.info("Encerrando API...")
            # Só fecha o pool que foi criado aqui
            if database is None and db is not None:
                db.close()
            logger.info("API encerrada.")

    app = FastAPI(
        title="API La Quinta - Pedidos",
        version="1.0.0",
        description="Registro, consulta e atualização de estado de pedidos",
        docs_url=("/swagger" if ENABLE_DOCS else None),
        redoc_url=("/redoc" if ENABLE_DOCS else None),
        openapi_url=("/openapi.json" if ENABLE_DOCS else None),
        redirect_slashes=False,  # Evita redirecionamento 307 quando URL não termina com /
        lifespan=lifespan,
    )
    app.state.database = database

    register_exception_handlers(app)

    # Middlewares são executados na ORDEM REVERSA da adição
    app.add_middleware(PrometheusMiddleware)

    # - Se CORS_ALLOW_ALL=true => allow_origins=["*"], allow_credentials=False
    # - Caso contrário => allow_origins=CORS_ORIGINS (se vazio cai para ["*"])
    if CORS_ALLOW_ALL:
        allowed_origins = ["*"]
        allow_credentials = False
    else:
        allowed_origins = CORS_ORIGINS or ["*"]
        allow_credentials = bool(CORS_ORIGINS)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(sistema_router)
    app.include_router(api_pedidos)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    logger.info(f"🚀 API La Quinta corriendo en puerto {PORT}")
    uvicorn.run("app.main:app", host="0.0.0.0", port=PORT)
