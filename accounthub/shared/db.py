# accounthub/shared/db.py
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from sqlalchemy.pool import StaticPool

from accounthub.shared.config import settings

def _engine_kwargs(url: str) -> dict:
    if not url.startswith("sqlite"):
        return {"pool_pre_ping": True}
    kwargs: dict = {"connect_args": {"check_same_thread": False}}
    # in-memory SQLite lives per connection; share one across the pool
    if url in ("sqlite://", "sqlite:///:memory:"):
        kwargs["poolclass"] = StaticPool
    return kwargs

engine = create_engine(settings.DATABASE_URL, **_engine_kwargs(settings.DATABASE_URL))

if engine.dialect.name == "sqlite":
    # SQLite leaves foreign keys (and ON DELETE CASCADE) off unless asked per connection
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_conn, _record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

class Base(DeclarativeBase):
    pass

# FastAPI dep
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db() -> None:
    # import models so they register with Base.metadata
    from accounthub.categories import models as categories_models  # noqa: F401
    from accounthub.auth import models as auth_models  # noqa: F401

    Base.metadata.create_all(bind=engine)
