"""
Módulo de métricas Prometheus para monitoramento da aplicação.
"""
import re
from time import time
from typing import Callable

from prometheus_client import Counter, Histogram, Gauge, generate_latest, CONTENT_TYPE_LATEST
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

# Métricas de requisições HTTP
http_requests_total = Counter(
    'http_requests_total',
    'Total de requisições HTTP',
    ['method', 'endpoint', 'status_code']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'Duração das requisições HTTP em segundos',
    ['method', 'endpoint'],
    buckets=[0.01, 0.05, 0.1, 0.5, 1.0, 2.5, 5.0, 10.0]
)

http_errors_total = Counter(
    'http_errors_total',
    'Total de erros HTTP',
    ['method', 'endpoint', 'status_code']
)

active_connections = Gauge(
    'active_connections',
    'Número de conexões ativas'
)

# Erros de banco convertidos em PersistenceError
db_errors_total = Counter(
    'db_errors_total',
    'Total de falhas de banco por operação',
    ['operation']
)

log_messages_total = Counter(
    'log_messages_total',
    'Total de mensagens de log',
    ['level']
)

_PEDIDO_ID = re.compile(r'^/pedidos/[^/]+')


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Middleware para coletar métricas Prometheus das requisições HTTP."""

    async def dispatch(self, request: Request, call_next: Callable):
        # Ignora o endpoint de métricas para evitar loop
        if request.url.path == "/metrics":
            return await call_next(request)

        method = request.method
        endpoint = self._normalize_endpoint(request.url.path)

        start_time = time()
        active_connections.inc()
        try:
            response = await call_next(request)
        except Exception:
            http_requests_total.labels(method=method, endpoint=endpoint, status_code=500).inc()
            http_errors_total.labels(method=method, endpoint=endpoint, status_code=500).inc()
            raise
        finally:
            active_connections.dec()

        status_code = response.status_code
        http_requests_total.labels(
            method=method,
            endpoint=endpoint,
            status_code=status_code
        ).inc()
        http_request_duration_seconds.labels(
            method=method,
            endpoint=endpoint
        ).observe(time() - start_time)

        if status_code >= 400:
            http_errors_total.labels(
                method=method,
                endpoint=endpoint,
                status_code=status_code
            ).inc()
        return response

    @staticmethod
    def _normalize_endpoint(endpoint: str) -> str:
        """
        Troca o id do pedido por um placeholder para evitar alta cardinalidade.
        Ex: /pedidos/A1/estado -> /pedidos/{id}/estado
        """
        if endpoint == "/pedidos" or endpoint == "/pedidos/":
            return "/pedidos"
        return _PEDIDO_ID.sub("/pedidos/{id}", endpoint)


def get_metrics():
    """Retorna as métricas no formato Prometheus."""
    return generate_latest()


def record_log(level: str):
    log_messages_total.labels(level=level).inc()


def record_db_error(operation: str):
    db_errors_total.labels(operation=operation).inc()
