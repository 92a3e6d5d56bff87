from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

# Base class for ORM models
Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    """
    Create the metadata store engine. SQLite needs check_same_thread because
    FastAPI runs sync endpoints in a threadpool.
    """
    connect_args: dict[str, object] = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
