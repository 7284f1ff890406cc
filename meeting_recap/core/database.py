from sqlmodel import Session, SQLModel, create_engine

from meeting_recap.core.config import DATABASE_URL

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=connect_args)


def init_db():
    """Creates the tables if they do not exist yet."""
    # Tables register themselves on the metadata at import time
    from meeting_recap.models import meeting  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session():
    with Session(engine) as session:
        yield session
