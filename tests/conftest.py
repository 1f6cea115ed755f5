import os
import sys

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

# adjust path to import package when running tests from workspace root
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))  # noqa: E402

from app.database.db_connection import Database
from app.database.init_db import criar_tabelas
from app.main import create_app


PEDIDO_A1 = {
    "id": "A1",
    "fecha": "01/06/2024",
    "hora": "12:30:00",
    "telefono": "5551234",
    "nombre": "Juan",
    "modalidad": "delivery",
    "productos": "2 pizzas",
}


def make_sqlite_database() -> Database:
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    return Database(engine)


@pytest.fixture
def empty_database():
    db = make_sqlite_database()
    yield db
    db.close()


@pytest.fixture
def database(empty_database):
    criar_tabelas(empty_database)
    return empty_database


@pytest.fixture
def session(database):
    s = database.session()
    yield s
    s.close()


@pytest.fixture
def client(database):
    app = create_app(database=database)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def pedido_a1():
    return dict(PEDIDO_A1)
