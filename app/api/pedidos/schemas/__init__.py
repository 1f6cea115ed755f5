"""
Schemas do bounded context de Pedidos.
"""

from .schema_pedido import (
    CAMPOS_OBRIGATORIOS,
    PedidoCreate,
    PedidoCreateResponse,
    PedidoEstadoUpdate,
    PedidoResponse,
    PedidoRowResponse,
)

__all__ = [
    "CAMPOS_OBRIGATORIOS",
    "PedidoCreate",
    "PedidoCreateResponse",
    "PedidoEstadoUpdate",
    "PedidoResponse",
    "PedidoRowResponse",
]
