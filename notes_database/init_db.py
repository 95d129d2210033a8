"""
Database initialization script.

Run this script to create all required tables in the database.
"""
from .db import get_database_url, make_engine
from .models import Base


# PUBLIC_INTERFACE
def init_db(engine):
    """Initializes the database by creating all tables if they do not exist."""
    Base.metadata.create_all(bind=engine)


def main():
    engine = make_engine(get_database_url())
    try:
        init_db(engine)
    finally:
        engine.dispose()
    print("Database tables created successfully.")


if __name__ == "__main__":
    main()
