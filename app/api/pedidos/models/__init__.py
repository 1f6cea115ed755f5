"""
Models do bounded context de Pedidos.
"""

from .model_pedido import PedidoModel

__all__ = [
    "PedidoModel",
]
