# app/api/pedidos/schemas/schema_pedido.py
import math
from datetime import date, time
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, field_serializer, field_validator

from app.core.dates import format_fecha, format_hora

CAMPOS_OBRIGATORIOS = (
    "id",
    "fecha",
    "hora",
    "telefono",
    "nombre",
    "modalidad",
    "productos",
)


def _vazio_para_none(v: Any) -> Any:
    """
    Valores "falsy" (None, "", 0, false, NaN) viram None; números viram texto.
    """
    if not v:
        return None
    if isinstance(v, bool):
        return "true"
    if isinstance(v, float):
        if not math.isfinite(v):
            return None
        # 5551234.0 -> "5551234"
        return str(int(v)) if v.is_integer() else str(v)
    if isinstance(v, int):
        return str(v)
    return v


class PedidoCreate(BaseModel):
    """
    Corpo do POST /pedidos.

    Todos os campos são opcionais aqui: a checagem dos obrigatórios é feita
    pelo service, que responde 400 com a mensagem da API.
    """
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    fecha: Optional[str] = None
    hora: Optional[str] = None
    telefono: Optional[str] = None
    nombre: Optional[str] = None
    direccion: Optional[str] = None
    modalidad: Optional[str] = None
    productos: Optional[str] = None
    estado: Optional[str] = None

    @field_validator("*", mode="before")
    @classmethod
    def normalizar_vazios(cls, v):
        return _vazio_para_none(v)

    def campos_faltantes(self) -> List[str]:
        return [campo for campo in CAMPOS_OBRIGATORIOS if not getattr(self, campo)]


class PedidoEstadoUpdate(BaseModel):
    estado: Optional[str] = None

    @field_validator("estado", mode="before")
    @classmethod
    def normalizar_estado(cls, v):
        return _vazio_para_none(v)


class PedidoResponse(BaseModel):
    id: str
    fecha: date
    hora: time
    telefono: str
    nombre: str
    direccion: Optional[str] = None
    modalidad: str
    productos: str
    estado: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)

    @field_serializer("fecha")
    def serializar_fecha(self, fecha: date) -> str:
        return format_fecha(fecha)

    @field_serializer("hora")
    def serializar_hora(self, hora: time) -> str:
        return format_hora(hora)


class PedidoRowResponse(BaseModel):
    ok: bool = True
    row: PedidoResponse


class PedidoCreateResponse(BaseModel):
    ok: bool = True
    id: str
    inserted: bool
