from __future__ import annotations

import pytest

from medtransport import CallContext, Registries
from medtransport.config import Settings
from medtransport.db import get_db, init_db, make_engine, make_session_factory

NOW = 100
OWNER = "ST1PQHQKV0RJXZFY1DGX8MNSNYVE3VGZJSRTPGZGM"
CERTIFIER = "ST2CY5V39NHDPWSXMW9QDT3HC3GD6Q6XX4CFRK9AG"
STRANGER = "ST3AM1A56AK2C1XAFJ4115ZSV26EB49BVQ10MGCS0"


@pytest.fixture
def cfg():
    return Settings(DATABASE_URL="sqlite+pysqlite:///:memory:", SQL_ECHO=False)


@pytest.fixture
def registries(cfg):
    regs = Registries.create(cfg)
    yield regs
    regs.close()


@pytest.fixture
def db(cfg):
    # сервисы напрямую, без обёртки Result
    engine = make_engine(cfg)
    init_db(engine)
    gen = get_db(make_session_factory(engine))
    session = next(gen)
    yield session
    gen.close()
    engine.dispose()


@pytest.fixture
def ctx():
    return CallContext(actor=OWNER, clock=NOW)


@pytest.fixture
def other():
    return CallContext(actor=STRANGER, clock=NOW)


@pytest.fixture
def certifier():
    return CallContext(actor=CERTIFIER, clock=NOW)
