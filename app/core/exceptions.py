"""
Erros de domínio da API de pedidos.

Cada erro carrega o status HTTP e a mensagem curta devolvida ao cliente;
detalhes internos ficam apenas no log.
"""
from starlette import status


class ApiError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Error interno"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class PedidoValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Faltan campos obligatorios"


class PedidoNotFoundError(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Pedido no encontrado"


class PersistenceError(ApiError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class DatabaseUnavailableError(PersistenceError):
    default_message = (
        "DB no configurada. Crea un .env con DB_HOST/DB_NAME/DB_USER/DB_PASSWORD"
    )
