"""
Router principal do bounded context de Pedidos.
"""
from fastapi import APIRouter

from app.api.pedidos.router.router_pedidos import router as router_pedidos

api_pedidos = APIRouter()

api_pedidos.include_router(router_pedidos)
