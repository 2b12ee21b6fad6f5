# tests/conftest.py
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, delete
from sqlalchemy.orm import sessionmaker

from catalog.main import app
from catalog.db import Base, get_db
from catalog.models import Title
from catalog.normalizers import NormalizationConfig, get_default_normalizer


# --- One throwaway SQLite file per test session ---
@pytest.fixture(scope="session")
def engine(tmp_path_factory):
    path = tmp_path_factory.mktemp("db") / "catalog.db"
    eng = create_engine(f"sqlite:///{path}", connect_args={"check_same_thread": False}, future=True)
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db_session(engine):
    """Session on the test database; the titles table starts empty for every test."""
    Session = sessionmaker(bind=engine, autocommit=False, autoflush=False, future=True)
    with Session() as db:
        db.execute(delete(Title))
        db.commit()
        yield db
        db.rollback()


# --- Routes read and write through the test session ---
@pytest.fixture(autouse=True)
def use_test_db(db_session):
    app.dependency_overrides[get_db] = lambda: db_session
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def config():
    return NormalizationConfig(
        aliases={
            "USA": "United States",
            "United States of America": "United States",
            "UK": "United Kingdom",
        },
        date_formats=("%Y-%m-%d", "%B %d, %Y"),
    )


@pytest.fixture
def normalizer(config):
    return get_default_normalizer(config)


@pytest.fixture
def raw_rows():
    """Catalog rows as they come out of the CSV export."""
    return [
        {
            "show_id": "s1", "type": "Movie", "title": " the   shawshank   redemption ",
            "director": "frank  darabont", "cast": None, "country": "USA",
            "date_added": "June 15, 2019", "release_year": "1994", "rating": "R",
            "duration": "142 min", "listed_in": "dramas", "description": "Two imprisoned men bond.",
        },
        {
            "show_id": "s2", "type": "TV Show", "title": "dark",
            "director": None, "cast": "louis hofmann, oliver masucci", "country": "Germany,UK",
            "date_added": "2017-12-01", "release_year": 2017, "rating": "TV-MA",
            "duration": "3 Seasons", "listed_in": "international tv shows, tv dramas",
            "description": "A missing child sets four families on a frantic hunt.",
        },
        {
            "show_id": "", "type": "Movie", "title": "no id here",
            "duration": "90 min",
        },
        {
            "show_id": "s4", "type": "Movie", "title": "killer movie",
            "country": None, "date_added": "not a date", "rating": None,
            "duration": None, "listed_in": "thrillers",
            "description": "A hitman plans to kill his last target.",
        },
        {
            "show_id": "s5", "type": "TV Show", "title": "short run",
            "country": "United States of America, India", "date_added": " August 4, 2017",
            "duration": "1 Season", "listed_in": "docuseries",
            "description": "A small crew travels.",
        },
    ]
