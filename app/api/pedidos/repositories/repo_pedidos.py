# app/api/pedidos/repositories/repo_pedidos.py
from __future__ import annotations

from datetime import date, time
from typing import List, Optional

from sqlalchemy import update
from sqlalchemy.engine import Row
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from app.api.pedidos.models.model_pedido import PedidoModel

LIMITE_LISTAGEM = 100


class PedidoRepository:
    """
    Acesso à tabela `pedidos`. Cada método executa um único statement
    (mais o commit); não há transações envolvendo vários statements.
    """

    def __init__(self, db: Session):
        self.db = db

    def list(self, limit: int = LIMITE_LISTAGEM) -> List[PedidoModel]:
        limit = min(limit, LIMITE_LISTAGEM) if limit else LIMITE_LISTAGEM
        return (
            self.db.query(PedidoModel)
            .order_by(PedidoModel.fecha.desc(), PedidoModel.hora.desc())
            .limit(limit)
            .all()
        )

    def get_by_id(self, pedido_id: str) -> Optional[PedidoModel]:
        return (
            self.db.query(PedidoModel)
            .filter(PedidoModel.id == pedido_id)
            .first()
        )

    def _insert_ignorando_conflito(self, valores: dict):
        """INSERT ... ON CONFLICT (id) DO NOTHING no dialeto do banco conectado."""
        tabela = PedidoModel.__table__
        dialect = self.db.get_bind().dialect.name
        if dialect == "postgresql":
            return postgresql.insert(tabela).values(**valores).on_conflict_do_nothing(
                index_elements=[tabela.c.id]
            )
        if dialect == "sqlite":
            return sqlite.insert(tabela).values(**valores).on_conflict_do_nothing(
                index_elements=[tabela.c.id]
            )
        raise NotImplementedError(f"INSERT ignorando conflito não suportado no dialeto {dialect!r}")

    def create_if_absent(
        self,
        *,
        id: str,
        fecha: date,
        hora: time,
        telefono: str,
        nombre: str,
        direccion: Optional[str],
        modalidad: str,
        productos: str,
        estado: Optional[str],
    ) -> bool:
        """Insere o pedido; retorna False quando já existia um com o mesmo id."""
        stmt = self._insert_ignorando_conflito(
            dict(
                id=id,
                fecha=fecha,
                hora=hora,
                telefono=telefono,
                nombre=nombre,
                direccion=direccion,
                modalidad=modalidad,
                productos=productos,
                estado=estado,
            )
        )
        result = self.db.execute(stmt)
        self.db.commit()
        return result.rowcount == 1

    def update_estado(self, pedido_id: str, estado: str) -> Optional[Row]:
        """
        UPDATE ... RETURNING por id, num único statement; retorna a linha
        atualizada ou None se não existir.
        """
        tabela = PedidoModel.__table__
        row = self.db.execute(
            update(tabela)
            .where(tabela.c.id == pedido_id)
            .values(estado=estado)
            .returning(*tabela.c)
        ).first()
        self.db.commit()
        return row
