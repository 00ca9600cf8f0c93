import os
import logging
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine

DATABASE_URL = os.getenv(
    "DATABASE_URL", "sqlite:///./triz_course.db"  # swap with Postgres URL if needed
)


# Control SQL echo via environment variable and route output through logging
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"
if SQL_ECHO:
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)


def make_engine(url: str = DATABASE_URL) -> Engine:
    connect_args = {}
    if url.startswith("sqlite"):
        # Requests may be served from FastAPI's thread pool.
        connect_args["check_same_thread"] = False
    return create_engine(url, echo=SQL_ECHO, connect_args=connect_args)


engine = make_engine()


def create_db_and_tables(bind: Engine = engine) -> None:
    from .models import ModuleProgress  # noqa: F401

    SQLModel.metadata.create_all(bind)
