from sqlmodel import SQLModel, create_engine

from briefy.core.config import settings

connect_args = {"check_same_thread": False} if settings.database_uri.startswith("sqlite") else {}
engine = create_engine(settings.database_uri, connect_args=connect_args)


def init_db() -> None:
    # Tables are created from the SQLModel metadata; imports register them.
    from briefy import models  # noqa: F401

    SQLModel.metadata.create_all(engine)
