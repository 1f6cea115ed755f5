"""
Endpoints de infraestrutura: healthchecks, teste de banco, setup da tabela e
métricas Prometheus.
"""
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from sqlalchemy.exc import SQLAlchemyError

from app.database.db_connection import Database, get_database
from app.database.init_db import criar_tabelas
from app.utils.logger import log_db_error
from app.utils.prometheus_metrics import CONTENT_TYPE_LATEST, get_metrics

router = APIRouter(tags=["Sistema"])


# Healthchecks não tocam no banco
@router.get("/", response_class=PlainTextResponse)
async def root():
    return "OK"


@router.get("/health")
async def health():
    return {"ok": True}


@router.get("/db")
def testar_db(database: Database = Depends(get_database)):
    try:
        return {"ok": True, "db": database.ping()}
    except SQLAlchemyError as e:
        info = log_db_error("DB test", e)
        return JSONResponse(status_code=500, content={"ok": False, "error": info["message"]})


@router.post("/setup")
def setup(database: Database = Depends(get_database)):
    """Cria a tabela `pedidos` se ainda não existir."""
    try:
        criar_tabelas(database)
    except SQLAlchemyError as e:
        info = log_db_error("POST /setup", e)
        return JSONResponse(status_code=500, content={"ok": False, "error": info["message"]})
    return {"ok": True}


@router.get("/metrics", include_in_schema=False)
async def metrics():
    return Response(content=get_metrics(), media_type=CONTENT_TYPE_LATEST)
