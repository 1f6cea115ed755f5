# app/api/pedidos/router/router_pedidos.py
from typing import List, Optional

from fastapi import APIRouter, Depends, status

from app.api.pedidos.schemas.schema_pedido import (
    PedidoCreate,
    PedidoCreateResponse,
    PedidoEstadoUpdate,
    PedidoResponse,
    PedidoRowResponse,
)
from app.api.pedidos.services.dependencies import get_pedido_service
from app.api.pedidos.services.service_pedidos import PedidoService
from app.utils.logger import logger

router = APIRouter(
    prefix="/pedidos",
    tags=["API - Pedidos"],
)


@router.get("", response_model=List[PedidoResponse], status_code=status.HTTP_200_OK)
def listar_pedidos(svc: PedidoService = Depends(get_pedido_service)):
    """Últimos 100 pedidos, do mais recente para o mais antigo (fecha, hora)."""
    return svc.listar()


@router.post("", response_model=PedidoCreateResponse, status_code=status.HTTP_200_OK)
def criar_pedido(
    payload: PedidoCreate,
    svc: PedidoService = Depends(get_pedido_service),
):
    """
    Cria um pedido. Se já existir um pedido com o mesmo id nada é alterado e a
    resposta traz `inserted: false`.
    """
    pedido_id, inserted = svc.criar(payload)
    logger.info(f"[Pedidos] POST /pedidos id={pedido_id} inserted={inserted}")
    return PedidoCreateResponse(id=pedido_id, inserted=inserted)


@router.get("/{pedido_id}", response_model=PedidoRowResponse, status_code=status.HTTP_200_OK)
def obter_pedido(
    pedido_id: str,
    svc: PedidoService = Depends(get_pedido_service),
):
    pedido = svc.obter(pedido_id)
    return PedidoRowResponse(row=PedidoResponse.model_validate(pedido))


@router.put("/{pedido_id}/estado", response_model=PedidoRowResponse, status_code=status.HTTP_200_OK)
def atualizar_estado_pedido(
    pedido_id: str,
    payload: Optional[PedidoEstadoUpdate] = None,
    svc: PedidoService = Depends(get_pedido_service),
):
    estado = payload.estado if payload else None
    pedido = svc.atualizar_estado(pedido_id, estado)
    logger.info(f"[Pedidos] Estado do pedido {pedido_id} atualizado para {pedido.estado!r}")
    return PedidoRowResponse(row=PedidoResponse.model_validate(pedido))
