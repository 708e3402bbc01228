from sqlalchemy import Engine, StaticPool, create_engine, event
from sqlalchemy.orm import DeclarativeBase, sessionmaker

# Events live in process memory only; every engine is a private SQLite :memory: database
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"


class Base(DeclarativeBase):
    pass


def _casefold(value):
    return value.casefold() if isinstance(value, str) else value


def make_engine() -> Engine:
    """Create an in-memory engine whose single connection is shared across threads."""
    engine = create_engine(
        SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # SQLite lower() only folds ASCII
    @event.listens_for(engine, "connect")
    def register_functions(dbapi_conn, connection_record):
        dbapi_conn.create_function("casefold", 1, _casefold, deterministic=True)

    return engine


def make_session_factory(engine: Engine) -> sessionmaker:
    Base.metadata.create_all(bind=engine)
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
