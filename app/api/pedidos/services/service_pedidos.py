# app/api/pedidos/services/service_pedidos.py
from typing import List, Tuple

from sqlalchemy.engine import Row
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.pedidos.models.model_pedido import PedidoModel
from app.api.pedidos.repositories.repo_pedidos import LIMITE_LISTAGEM, PedidoRepository
from app.api.pedidos.schemas.schema_pedido import PedidoCreate
from app.core.dates import parse_fecha, parse_hora
from app.core.exceptions import PedidoNotFoundError, PedidoValidationError, PersistenceError
from app.utils.logger import logger, log_db_error
from app.utils.prometheus_metrics import record_db_error


class PedidoService:
    """
    Regras do recurso pedidos: validação de entrada e tradução das falhas de
    banco em PersistenceError (mensagem curta para o cliente, detalhes no log).
    """

    def __init__(self, db: Session):
        self.db = db
        self.repo = PedidoRepository(db)

    def _falha_banco(self, contexto: str, exc: SQLAlchemyError, mensagem: str) -> PersistenceError:
        self.db.rollback()
        log_db_error(contexto, exc)
        record_db_error(contexto)
        return PersistenceError(mensagem)

    def listar(self, limit: int = LIMITE_LISTAGEM) -> List[PedidoModel]:
        try:
            return self.repo.list(limit)
        except SQLAlchemyError as e:
            raise self._falha_banco("GET /pedidos", e, "Error al obtener pedidos") from e

    def obter(self, pedido_id: str) -> PedidoModel:
        try:
            pedido = self.repo.get_by_id(pedido_id)
        except SQLAlchemyError as e:
            raise self._falha_banco("GET /pedidos/:id", e, "Error al obtener pedido") from e
        if not pedido:
            raise PedidoNotFoundError()
        return pedido

    def criar(self, data: PedidoCreate) -> Tuple[str, bool]:
        """
        Cria o pedido se o id ainda não existir.

        Retorna (id, inserted); inserted=False quando o id já estava gravado,
        caso em que nada é sobrescrito.
        """
        faltantes = data.campos_faltantes()
        if faltantes:
            logger.info("[Pedidos] POST /pedidos sem campos obrigatórios: %s", ", ".join(faltantes))
            raise PedidoValidationError("Faltan campos obligatorios")

        try:
            fecha = parse_fecha(data.fecha)
        except ValueError:
            raise PedidoValidationError("Formato de 'fecha' inválido, se espera DD/MM/YYYY")
        try:
            hora = parse_hora(data.hora)
        except ValueError:
            raise PedidoValidationError("Formato de 'hora' inválido, se espera HH:MM:SS")

        try:
            inserted = self.repo.create_if_absent(
                id=data.id,
                fecha=fecha,
                hora=hora,
                telefono=str(data.telefono),
                nombre=data.nombre,
                direccion=data.direccion or None,
                modalidad=data.modalidad,
                productos=data.productos,
                estado=data.estado or None,
            )
        except SQLAlchemyError as e:
            raise self._falha_banco("POST /pedidos", e, "Error al guardar pedido") from e

        if not inserted:
            logger.info("[Pedidos] Pedido %s já existia, insert ignorado", data.id)
        return data.id, inserted

    def atualizar_estado(self, pedido_id: str, estado: str | None) -> Row:
        if not estado:
            raise PedidoValidationError("Falta el campo 'estado'")

        try:
            pedido = self.repo.update_estado(pedido_id, estado)
        except SQLAlchemyError as e:
            raise self._falha_banco(
                "PUT /pedidos/:id/estado", e, "Error al actualizar estado del pedido"
            ) from e
        if pedido is None:
            raise PedidoNotFoundError()
        return pedido
