from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from catalog.settings import DATABASE_URL

# FastAPI runs sync routes on a threadpool, so a SQLite connection may change threads
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, connect_args=_connect_args, future=True, echo=False)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
Base = declarative_base()


def get_db():
    """Request-scoped session for the titles table; closed once the response is sent."""
    with SessionLocal() as db:
        yield db
