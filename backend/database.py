"""Database configuration and session management for the SQL metadata backend."""

from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from config import DATABASE_URL


class Base(DeclarativeBase):
    pass


def make_session_factory(url: str = DATABASE_URL) -> sessionmaker:
    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    engine = create_engine(url, connect_args=connect_args, echo=False)
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(session_factory: sessionmaker) -> None:
    import orm  # noqa: F401  registers models on Base.metadata

    Base.metadata.create_all(bind=session_factory.kw["bind"])
