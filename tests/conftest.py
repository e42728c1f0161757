from typing import Generator

import pytest
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from db.models import Base
from db.store import SqlEntityStore
from domain.actors import Actor
from domain.base_types import Role
from domain.directory import DirectoryManager
from domain.inventory import InventoryManager
from domain.ledger_engine import LedgerEngine
from tests.helpers.time_utils import DEFAULT_TIME_GEN, TimeGenerator

engine: Engine = create_engine("sqlite:///:memory:", connect_args={"check_same_thread": False})
session_factory = sessionmaker(engine)


@pytest.fixture(scope="function")
def test_session() -> Generator[Session, None, None]:
    with session_factory() as session:
        yield session


@pytest.fixture(scope="function", autouse=True)
def reset_db() -> Generator[None, None, None]:
    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture(autouse=True)
def _reset_default_time_gen() -> None:
    DEFAULT_TIME_GEN.reset()


@pytest.fixture(scope="function")
def clock() -> TimeGenerator:
    return DEFAULT_TIME_GEN


@pytest.fixture(scope="function")
def store(test_session: Session) -> SqlEntityStore:
    return SqlEntityStore(test_session)


@pytest.fixture(scope="function")
def ledger(store: SqlEntityStore, clock: TimeGenerator) -> LedgerEngine:
    return LedgerEngine(store=store, clock=clock)


@pytest.fixture(scope="function")
def inventory(store: SqlEntityStore, ledger: LedgerEngine, clock: TimeGenerator) -> InventoryManager:
    return InventoryManager(store=store, ledger=ledger, clock=clock)


@pytest.fixture(scope="function")
def directory(store: SqlEntityStore) -> DirectoryManager:
    return DirectoryManager(store=store)


@pytest.fixture(scope="function")
def owner(directory: DirectoryManager) -> Actor:
    return directory.create_organization(email="owner@dealer.example", name="Owner")


@pytest.fixture(scope="function")
def staff(directory: DirectoryManager, owner: Actor) -> Actor:
    return directory.invite(owner, email="staff@dealer.example", name="Staff", role=Role.RESTRICTED)


@pytest.fixture(scope="function")
def viewer(directory: DirectoryManager, owner: Actor) -> Actor:
    return directory.invite(owner, email="viewer@dealer.example", name="Viewer", role=Role.READ_ONLY)
