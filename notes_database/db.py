import os

from dotenv import load_dotenv
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

DEFAULT_DATABASE_URL = "sqlite:///./notes.db"


# PUBLIC_INTERFACE
def get_database_url():
    """
    Retrieves the database URL from the environment variable DATABASE_URL.
    Falls back to a SQLite file in the working directory.
    """
    load_dotenv()
    return os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ships with FK enforcement off; ON DELETE CASCADE needs it per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# PUBLIC_INTERFACE
def make_engine(database_url: str, **kwargs) -> Engine:
    """
    Creates a SQLAlchemy engine for the given URL.

    SQLite engines are opened with ``check_same_thread=False`` because FastAPI
    runs sync handlers in a threadpool, and get foreign keys switched on.
    """
    is_sqlite = database_url.startswith("sqlite")
    if is_sqlite:
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        kwargs["connect_args"] = connect_args
    engine = create_engine(database_url, future=True, echo=False, **kwargs)
    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


# PUBLIC_INTERFACE
def make_session_factory(engine: Engine):
    """Returns a session factory bound to ``engine``."""
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
