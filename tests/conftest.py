import os
import sys
from datetime import date
from pathlib import Path

# Ensure the src directory is on the path for imports
root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(root / "src"))

log_dir = root / "logs"
log_dir.mkdir(parents=True, exist_ok=True)
os.environ.setdefault("PERSONAPI_LOG_DIR", str(log_dir))
os.environ.setdefault("PERSONAPI_CONFIG_DIR", str(root / "logs" / "config"))
os.environ.setdefault("PERSONAPI_DB_DIR", str(root / "logs" / "db"))
# keep PBKDF2 cheap under test
os.environ.setdefault("PERSONAPI_PASSWORD_ITERATIONS", "1000")

import pytest

from personapi.db.connect import make_session_factory
from personapi.db.models import Person, sqlite_engine


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path}/test.db"


@pytest.fixture
def session_factory(db_url):
    return make_session_factory(sqlite_engine(db_url))


@pytest.fixture
def db_session(session_factory):
    with session_factory() as session:
        yield session


@pytest.fixture
def people(session_factory):
    """Seed Alice (F) and Bob (M) and return their ids."""

    with session_factory() as session:
        alice = Person(
            id=1,
            name="Alice",
            username="alice",
            email="alice@example.com",
            gender="F",
            date_of_birth=date(1990, 4, 2),
            city="Bengaluru",
        )
        bob = Person(id=2, name="Bob", username="bob", gender="M")
        session.add_all([alice, bob])
    return {"alice": 1, "bob": 2}


@pytest.fixture
def many_people(session_factory):
    """Seed 23 persons with alternating genders."""

    genders = ["Female", "Male"]
    with session_factory() as session:
        session.add_all(
            Person(name=f"Person {i:02d}", gender=genders[i % 2], city=f"City {i % 5}")
            for i in range(23)
        )
    return 23
