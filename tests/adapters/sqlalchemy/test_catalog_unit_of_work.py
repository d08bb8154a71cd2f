from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from stockroom.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)
from tests.helpers.products import make_product

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemyCatalogUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert configured_engine() is engine_b
    assert is_started()


def test_unit_of_work_commits_catalog(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    product = make_product("A1")

    with SqlAlchemyCatalogUnitOfWork() as uow:
        uow.repositories.products.save_catalog((product,))
        uow.commit()

    with SqlAlchemyCatalogUnitOfWork() as uow:
        assert uow.repositories.products.load_catalog() == (product,)


def test_unit_of_work_rolls_back_on_error(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with pytest.raises(RuntimeError), SqlAlchemyCatalogUnitOfWork() as uow:
        uow.repositories.products.save_catalog((make_product("A1"),))
        raise RuntimeError("boom")

    with SqlAlchemyCatalogUnitOfWork() as uow:
        assert uow.repositories.products.load_catalog() == ()


def test_repositories_require_open_session(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    uow = SqlAlchemyCatalogUnitOfWork()

    with pytest.raises(StartupError):
        _ = uow.repositories
