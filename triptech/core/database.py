from fastapi import Request
from sqlalchemy.engine import Engine
from sqlmodel import create_engine, Session, SQLModel
from .config import Settings


def build_engine(settings: Settings, **kwargs) -> Engine:
    if settings.DATABASE_URL.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(settings.DATABASE_URL, **kwargs)


def create_db_and_tables(engine: Engine):
    # table models must be imported before create_all sees them
    from .. import models  # noqa: F401
    SQLModel.metadata.create_all(engine)


def get_session(request: Request):
    with Session(request.app.state.engine) as session:
        yield session
