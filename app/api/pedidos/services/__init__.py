"""
Services do bounded context de Pedidos.
"""

from .service_pedidos import PedidoService

__all__ = [
    "PedidoService",
]
