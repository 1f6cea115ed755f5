import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv
from sqlalchemy.engine import URL, make_url

# Carrega o .env manualmente se estiver fora do Docker
if not os.getenv("RUNNING_IN_DOCKER"):
    dotenv_path = Path(__file__).resolve().parents[2] / ".env"
    load_dotenv(dotenv_path=dotenv_path)

TRUTHY = ("1", "true", "yes", "on")
LOCAL_HOSTS = ("localhost", "127.0.0.1")


def is_truthy(value: Optional[str]) -> bool:
    return bool(value) and str(value).strip().lower() in TRUTHY


def is_local_host(host: Optional[str]) -> bool:
    if not host:
        return False
    return str(host).strip().lower() in LOCAL_HOSTS


@dataclass(frozen=True)
class DatabaseConfig:
    """Parâmetros de conexão resolvidos uma única vez no startup."""

    host: str = "localhost"
    port: int = 5432
    database: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    database_url: Optional[str] = None
    ssl: bool = False
    use_remote: bool = False

    @property
    def url(self) -> URL:
        if self.database_url:
            url = make_url(self.database_url)
            # postgres:// (Heroku/EasyPanel) não é aceito pelo SQLAlchemy
            if url.drivername in ("postgres", "postgresql"):
                url = url.set(drivername="postgresql+psycopg2")
        else:
            url = URL.create(
                "postgresql+psycopg2",
                username=self.user,
                password=self.password,
                host=self.host,
                port=self.port,
                database=self.database,
            )
        if self.ssl and "sslmode" not in url.query:
            url = url.update_query_dict({"sslmode": "require"})
        return url

    def safe_dict(self) -> dict:
        """Resumo da configuração sem a senha, para log."""
        return {
            "host": self.host,
            "port": self.port,
            "database": self.database,
            "user": self.user,
            "usingDatabaseUrl": bool(self.database_url),
            "ssl": self.ssl,
            "remote": self.use_remote,
        }


def resolve_database_config(env: Mapping[str, str]) -> DatabaseConfig:
    """
    Resolve a configuração do banco a partir das variáveis de ambiente.

    - `DATABASE_URL` tem prioridade sobre os parâmetros avulsos.
    - Host remoto é detectado quando há `DATABASE_URL` ou `DB_HOST` não local.
    - O banco remoto só é priorizado em development, salvo `DB_FORCE_REMOTE`
      ou `DB_FORCE_LOCAL`.
    - SSL vem de `DB_SSL`; se ausente, liga apenas para `DATABASE_URL` com host
      não local.
    """
    database_url = env.get("DATABASE_URL") or None
    raw_host = env.get("DB_HOST") or None

    force_local = is_truthy(env.get("DB_FORCE_LOCAL"))
    force_remote = is_truthy(env.get("DB_FORCE_REMOTE"))
    detected_remote = bool(database_url) or (bool(raw_host) and not is_local_host(raw_host))

    app_env = (env.get("APP_ENV") or env.get("NODE_ENV") or "").strip().lower()
    is_dev = app_env == "development"
    use_remote = force_remote or (not force_local and is_dev and detected_remote)

    ssl_env = (env.get("DB_SSL") or "").strip().lower()
    if ssl_env:
        ssl = ssl_env in TRUTHY
    else:
        ssl = bool(database_url) and not is_local_host(raw_host)

    try:
        port = int(env.get("DB_PORT") or 5432)
    except ValueError:
        port = 5432

    password = env.get("DB_PASSWORD")
    return DatabaseConfig(
        host=raw_host or "localhost",
        port=port,
        database=env.get("DB_NAME") or None,
        user=env.get("DB_USER") or None,
        password=str(password) if password else None,
        database_url=database_url,
        ssl=ssl,
        use_remote=use_remote,
    )


# Servidor
PORT = int(os.getenv("PORT") or 3000)

# Criação automática da tabela `pedidos` no startup
DB_AUTO_SETUP = is_truthy(os.getenv("DB_AUTO_SETUP", "false"))

# CORS
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
CORS_ALLOW_ALL = os.getenv("CORS_ALLOW_ALL", "true").lower() in ("1", "true", "yes")

# FastAPI / App
ENABLE_DOCS = os.getenv("ENABLE_DOCS", "true").lower() in ("1", "true", "yes")

# Logs
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_DIR = os.getenv("LOG_DIR")
