# app/api/pedidos/models/model_pedido.py
from sqlalchemy import Column, Date, Text, Time

from app.database.db_connection import Base


class PedidoModel(Base):
    __tablename__ = "pedidos"

    # id vem de fora (ex.: número do pedido no chatbot), não é gerado aqui
    id = Column(Text, primary_key=True)
    fecha = Column(Date, nullable=False)
    hora = Column(Time, nullable=False)
    telefono = Column(Text, nullable=False)
    nombre = Column(Text, nullable=False)
    direccion = Column(Text, nullable=True)
    modalidad = Column(Text, nullable=False)
    productos = Column(Text, nullable=False)
    estado = Column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<PedidoModel id={self.id!r} fecha={self.fecha} hora={self.hora} estado={self.estado!r}>"
