from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from .config import Settings, settings as default_settings
from .models.base import Base

# Импорт моделей (чтобы при create_all были зарегистрированы все таблицы)
from .models import driver, patient, route, vehicle  # noqa: E402,F401


# ---------- Engine / Session ----------

def make_engine(cfg: Settings | None = None) -> Engine:
    cfg = cfg or default_settings
    url = cfg.DATABASE_URL

    if url.startswith("sqlite") and ":memory:" in url:
        # одна in-memory база = одно соединение, иначе каждая сессия увидит пустую БД
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
            echo=cfg.SQL_ECHO,
            future=True,
        )
    if url.startswith("sqlite"):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            pool_pre_ping=True,
            echo=cfg.SQL_ECHO,
            future=True,
        )
    return create_engine(
        url,
        pool_pre_ping=True,
        echo=cfg.SQL_ECHO,
        future=True,
    )


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        bind=engine,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )


def init_db(engine: Engine) -> None:
    # Создать таблицы. Удаления нигде нет, поэтому схема только растёт
    Base.metadata.create_all(bind=engine)


# ---------- Dependency ----------
def get_db(session_factory: sessionmaker):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()
