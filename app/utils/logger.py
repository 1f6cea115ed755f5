# app/utils/logger.py

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from app.config.settings import LOG_DIR as SETTINGS_LOG_DIR, LOG_LEVEL

# Caminho da pasta logs/
BASE_DIR = Path(__file__).resolve().parent.parent
LOG_DIR = Path(SETTINGS_LOG_DIR) if SETTINGS_LOG_DIR else BASE_DIR / "logs"
LOG_DIR.mkdir(parents=True, exist_ok=True)
LOG_FILE = LOG_DIR / "app.log"

# Instância do logger
logger = logging.getLogger("app_logger")
logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))


class PrometheusLogHandler(logging.Handler):
    """Handler customizado para registrar logs nas métricas Prometheus."""

    def emit(self, record):
        from app.utils.prometheus_metrics import record_log
        try:
            record_log(record.levelname)
        except Exception:
            self.handleError(record)


# Evita duplicar handlers se importar várias vezes
if not logger.handlers:
    formatter = logging.Formatter("[%(asctime)s] [%(levelname)s] %(name)s: %(message)s")

    # Handler para arquivo com rotação
    file_handler = RotatingFileHandler(
        filename=LOG_FILE,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,
        encoding="utf-8"
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    logger.addHandler(PrometheusLogHandler())


def log_db_error(context: str, exc: BaseException) -> dict:
    """
    Registra um erro de banco com os detalhes do driver (quando houver).

    Os detalhes ficam só no log; o cliente recebe apenas uma mensagem curta.
    """
    orig = getattr(exc, "orig", None) or exc
    diag = getattr(orig, "diag", None)
    info = {
        "message": str(orig).strip() or type(orig).__name__,
        "code": getattr(orig, "pgcode", None),
        "detail": getattr(diag, "message_detail", None),
        "hint": getattr(diag, "message_hint", None),
        "where": getattr(diag, "context", None),
    }
    logger.error("%s error: %s", context, info)
    return info
