import logging

from sqlalchemy import event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from .config import settings

log = logging.getLogger(__name__)


def make_engine(database_url: str) -> Engine:
    """
    Build an engine for Postgres or SQLite.

    SQLite connections are shared across FastAPI's threadpool, in-memory
    databases are pinned to a single connection, and foreign keys are
    switched on so ON DELETE CASCADE behaves like it does on Postgres.
    """
    url = make_url(database_url)
    backend = url.get_backend_name()
    if backend == "sqlite":
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
        eng = create_engine(database_url, echo=False, **kwargs)

        @event.listens_for(eng, "connect")
        def _sqlite_fk_on(dbapi_conn, _record):
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON")
            cur.close()

        return eng
    if not backend.startswith("postgres"):
        raise RuntimeError(
            f"Unsupported database backend '{backend}'. Use sqlite or postgresql+psycopg."
        )
    return create_engine(database_url, echo=False, pool_pre_ping=True)


engine = make_engine(settings.DATABASE_URL)

def get_session():
    with Session(engine) as session:
        yield session

def init_db(bind: Engine | None = None) -> None:
    """
    Register the models and create any missing tables. Safe to call
    multiple times; Alembic owns schema changes after the first run.
    """
    import recipe_planner.models  # noqa: F401
    SQLModel.metadata.create_all(bind or engine)
    log.info("database ready (%s)", (bind or engine).url.get_backend_name())
