# app/database/db_connection.py

from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from app.config.settings import DatabaseConfig
from app.core.exceptions import DatabaseUnavailableError
from app.utils.logger import logger, log_db_error

# Base única para todos os models
Base = declarative_base()


class Database:
    """
    Handle do banco: engine (pool de conexões) + fábrica de sessões.

    Criado explicitamente no startup e injetado no app; quando a checagem
    inicial de conexão falha o handle fica desabilitado (modo degradado) até o
    fim do processo.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=engine,
        )
        self.available = True

    @classmethod
    def from_config(cls, config: DatabaseConfig) -> "Database":
        engine = create_engine(
            config.url,
            pool_pre_ping=True,
        )
        return cls(engine)

    def ping(self) -> int:
        with self.engine.connect() as conn:
            return conn.execute(text("SELECT 1 AS ok")).scalar()

    def check_connection(self) -> bool:
        """Testa a conexão; em caso de falha desabilita o handle."""
        try:
            self.ping()
            return True
        except SQLAlchemyError as e:
            log_db_error("DB conexión inicial", e)
            logger.warning("⚠️ Error conectando a la DB, deshabilitando endpoints de DB")
            self.disable()
            return False

    def disable(self) -> None:
        self.available = False
        self.engine.dispose()

    def session(self) -> Session:
        if not self.available:
            raise DatabaseUnavailableError()
        return self.session_factory()

    def close(self) -> None:
        self.engine.dispose()
        logger.info("Pool de DB cerrado")


def get_database(request: Request) -> Database:
    database: Optional[Database] = getattr(request.app.state, "database", None)
    if database is None or not database.available:
        raise DatabaseUnavailableError()
    return database


# Dependency para FastAPI
def get_db(request: Request) -> Iterator[Session]:
    db = get_database(request).session()
    try:
        yield db
    finally:
        db.close()
