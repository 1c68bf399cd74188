"""Generate database sessions"""

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from src.core.config import DATABASE_URL, SQL_ECHO
from src.db.schema import Base


def build_engine(url: str = DATABASE_URL, echo: bool = SQL_ECHO) -> Engine:
    engine = create_engine(url, echo=echo)
    # Ensure all tables are created
    Base.metadata.create_all(bind=engine)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine)

