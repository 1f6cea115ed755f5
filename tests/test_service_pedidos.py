from datetime import date, time

import pytest

from app.api.pedidos.schemas.schema_pedido import PedidoCreate
from app.api.pedidos.services.service_pedidos import PedidoService
from app.core.exceptions import PedidoNotFoundError, PedidoValidationError, PersistenceError


@pytest.fixture
def svc(session):
    return PedidoService(session)


def test_criar_converte_fecha_e_hora(svc, pedido_a1):
    pedido_id, inserted = svc.criar(PedidoCreate(**pedido_a1))
    assert (pedido_id, inserted) == ("A1", True)

    pedido = svc.obter("A1")
    assert pedido.fecha == date(2024, 6, 1)
    assert pedido.hora == time(12, 30, 0)
    assert pedido.direccion is None
    assert pedido.estado is None


def test_criar_aceita_hora_sem_segundos(svc, pedido_a1):
    pedido_a1["hora"] = "08:05"
    svc.criar(PedidoCreate(**pedido_a1))
    assert svc.obter("A1").hora == time(8, 5)


def test_criar_idempotente_por_id(svc, pedido_a1):
    assert svc.criar(PedidoCreate(**pedido_a1)) == ("A1", True)
    assert svc.criar(PedidoCreate(**{**pedido_a1, "nombre": "Otro"})) == ("A1", False)
    assert svc.obter("A1").nombre == "Juan"
    assert len(svc.listar()) == 1


def test_campos_faltantes(pedido_a1):
    data = PedidoCreate(**{**pedido_a1, "nombre": "", "telefono": 0})
    assert data.campos_faltantes() == ["telefono", "nombre"]


def test_numero_nao_finito_conta_como_faltante(pedido_a1):
    data = PedidoCreate(**{**pedido_a1, "telefono": float("nan"), "productos": float("inf")})
    assert data.campos_faltantes() == ["telefono", "productos"]


def test_criar_sem_obrigatorio(svc, pedido_a1):
    del pedido_a1["modalidad"]
    with pytest.raises(PedidoValidationError):
        svc.criar(PedidoCreate(**pedido_a1))
    assert svc.listar() == []


def test_opcionais_vazios_viram_none(svc, pedido_a1):
    svc.criar(PedidoCreate(**pedido_a1, direccion="", estado=""))
    pedido = svc.obter("A1")
    assert pedido.direccion is None
    assert pedido.estado is None


def test_obter_inexistente(svc):
    with pytest.raises(PedidoNotFoundError):
        svc.obter("ghost-id")


def test_atualizar_estado_preserva_demais_campos(svc, pedido_a1):
    svc.criar(PedidoCreate(**pedido_a1))
    pedido = svc.atualizar_estado("A1", "entregado")
    assert pedido.estado == "entregado"
    assert pedido.nombre == "Juan"
    assert pedido.productos == "2 pizzas"
    assert pedido.fecha == date(2024, 6, 1)


def test_atualizar_estado_aceita_qualquer_texto(svc, pedido_a1):
    svc.criar(PedidoCreate(**pedido_a1))
    svc.atualizar_estado("A1", "entregado")
    assert svc.atualizar_estado("A1", "pendiente").estado == "pendiente"


def test_atualizar_estado_vazio(svc):
    with pytest.raises(PedidoValidationError):
        svc.atualizar_estado("A1", "")


def test_atualizar_estado_inexistente(svc):
    with pytest.raises(PedidoNotFoundError):
        svc.atualizar_estado("ghost-id", "x")


def test_falha_de_banco_vira_persistence_error(svc, database):
    from app.api.pedidos.models.model_pedido import PedidoModel

    PedidoModel.__table__.drop(database.engine)
    with pytest.raises(PersistenceError) as exc_info:
        svc.listar()
    assert exc_info.value.message == "Error al obtener pedidos"
    assert exc_info.value.status_code == 500
