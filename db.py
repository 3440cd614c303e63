# db.py
# Role: Database bootstrap for the resell tracker.
#       Builds the SQLAlchemy engine from DATABASE_URL, the session factory,
#       and the declarative Base shared by all ORM models.

"""
Database setup for the resell tracker.

- Reads DATABASE_URL from the environment (a .env file is honoured).
- Falls back to a SQLite database at: <project_root>/database/resell.db
"""

import os

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

load_dotenv()

# Base directory of the project (where this module lives)
BASE_DIR = os.path.dirname(os.path.abspath(__file__))

# Folder for the default SQLite DB
DB_DIR = os.path.join(BASE_DIR, "database")
DB_PATH = os.path.join(DB_DIR, "resell.db")

# Remote databases carry their credential inside the URL
DATABASE_URL = os.environ.get("DATABASE_URL", f"sqlite:///{DB_PATH}")


def build_engine(url: str = DATABASE_URL):
    """
    Create the engine for the given URL.

    SQLite needs check_same_thread=False because FastAPI serves sync routes
    from a thread pool.
    """
    if url.startswith("sqlite"):
        if url == f"sqlite:///{DB_PATH}":
            os.makedirs(DB_DIR, exist_ok=True)
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True)


engine = build_engine()

# Standard session factory used via dependency injection (see app/deps.py:get_db)
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

# Declarative base class for ORM models
Base = declarative_base()
