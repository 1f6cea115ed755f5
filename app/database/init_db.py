import logging

from sqlalchemy.exc import SQLAlchemyError

from app.database.db_connection import Base, Database
from app.utils.logger import log_db_error
# Registra o model no metadata antes do create_all
from app.api.pedidos.models.model_pedido import PedidoModel

logger = logging.getLogger("app_logger")


def criar_tabelas(database: Database) -> None:
    """Cria a tabela `pedidos` se ainda não existir (CREATE TABLE IF NOT EXISTS)."""
    logger.info("📋 Criando tabela %s (se não existir)...", PedidoModel.__tablename__)
    Base.metadata.create_all(bind=database.engine, tables=[PedidoModel.__table__], checkfirst=True)


def inicializar_banco(database: Database, auto_setup: bool = False) -> bool:
    """
    Checa a conectividade e, opcionalmente, cria as tabelas.

    Retorna False quando o banco ficou desabilitado (modo degradado).
    """
    if not database.check_connection():
        return False

    logger.info("✅ DB conectada")
    if auto_setup:
        try:
            criar_tabelas(database)
        except SQLAlchemyError as e:
            log_db_error("DB setup inicial", e)
    return True
