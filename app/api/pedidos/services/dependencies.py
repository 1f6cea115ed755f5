from fastapi import Depends
from sqlalchemy.orm import Session

from app.database.db_connection import get_db
from app.api.pedidos.services.service_pedidos import PedidoService


def get_pedido_service(db: Session = Depends(get_db)) -> PedidoService:
    return PedidoService(db)
