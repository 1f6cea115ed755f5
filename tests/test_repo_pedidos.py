from datetime import date, time
from types import SimpleNamespace

import pytest
from sqlalchemy import event

from app.api.pedidos.repositories.repo_pedidos import PedidoRepository


def _criar(repo, pedido_id="A1"):
    return repo.create_if_absent(
        id=pedido_id,
        fecha=date(2024, 6, 1),
        hora=time(12, 30),
        telefono="5551234",
        nombre="Juan",
        direccion=None,
        modalidad="delivery",
        productos="2 pizzas",
        estado=None,
    )


@pytest.fixture
def statements(database):
    executados = []

    def registrar(conn, cursor, statement, parameters, context, executemany):
        executados.append(statement)

    event.listen(database.engine, "before_cursor_execute", registrar)
    yield executados
    event.remove(database.engine, "before_cursor_execute", registrar)


def test_update_estado_usa_um_unico_statement(session, statements):
    repo = PedidoRepository(session)
    assert _criar(repo) is True
    statements.clear()

    row = repo.update_estado("A1", "entregado")

    assert len(statements) == 1
    assert statements[0].lstrip().upper().startswith("UPDATE")
    assert "RETURNING" in statements[0].upper()
    assert row.estado == "entregado"
    assert row.nombre == "Juan"
    assert row.fecha == date(2024, 6, 1)
    assert row.hora == time(12, 30)


def test_update_estado_inexistente_retorna_none(session):
    assert PedidoRepository(session).update_estado("ghost-id", "x") is None


def test_create_if_absent_ignora_id_repetido(session):
    repo = PedidoRepository(session)
    assert _criar(repo) is True
    assert _criar(repo) is False
    assert len(repo.list()) == 1


def test_insert_em_dialeto_nao_suportado():
    db = SimpleNamespace(get_bind=lambda: SimpleNamespace(dialect=SimpleNamespace(name="mysql")))
    with pytest.raises(NotImplementedError):
        _criar(PedidoRepository(db))
