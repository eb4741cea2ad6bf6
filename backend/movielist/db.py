from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from movielist.core.config import Settings, get_settings

Base = declarative_base()


def _connect_args(settings: Settings) -> dict:
    """Driver-level timeouts so a stalled store surfaces as an error instead of hanging"""
    url = settings.DATABASE_URL
    if url.startswith("sqlite"):
        return {"check_same_thread": False, "timeout": settings.DB_STATEMENT_TIMEOUT}
    if url.startswith("postgresql"):
        return {
            "connect_timeout": settings.DB_POOL_TIMEOUT,
            "options": f"-c statement_timeout={settings.DB_STATEMENT_TIMEOUT * 1000}",
        }
    if url.startswith("mysql"):
        return {
            "connect_timeout": settings.DB_POOL_TIMEOUT,
            "read_timeout": settings.DB_STATEMENT_TIMEOUT,
        }
    return {}


def build_engine(settings: Settings, **kwargs) -> Engine:
    """Create an engine for the configured database"""
    url = settings.DATABASE_URL
    options = {"connect_args": _connect_args(settings), "pool_pre_ping": True}
    if not url.startswith("sqlite"):
        options["pool_timeout"] = settings.DB_POOL_TIMEOUT
    options.update(kwargs)
    engine = create_engine(url, **options)

    if url.startswith("sqlite"):
        # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
        @event.listens_for(engine, "connect")
        def _enable_sqlite_fk(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


engine = build_engine(get_settings())
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db():
    """Dependency to get database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
