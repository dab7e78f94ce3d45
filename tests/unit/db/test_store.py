from contextlib import contextmanager

import pytest
from sqlalchemy.orm import sessionmaker

from personapi.db.models import sqlite_engine
from personapi.db.store import PersonRecord, PersonStore
from personapi.errors import StoreUnavailable
from personapi.paging import Direction, Order, PageRequest


@pytest.fixture
def store(session_factory):
    return PersonStore(session_factory)


def test_get_returns_detached_record(store, people):
    record = store.get(people["alice"])
    assert isinstance(record, PersonRecord)
    assert record.name == "Alice"
    assert record.gender == "F"
    assert record.date_of_birth.isoformat() == "1990-04-02"
    assert record.created_at is not None


def test_get_missing_returns_none(store, people):
    assert store.get(99) is None


def test_list_all_is_ordered_by_id(store, people):
    records = store.list_all()
    assert [r.id for r in records] == [1, 2]
    assert store.count() == 2


def test_list_by_gender_ignores_case(store, many_people):
    upper = store.list_by_gender("FEMALE")
    lower = store.list_by_gender("female")
    assert [r.id for r in upper] == [r.id for r in lower]
    assert len(upper) == 12
    assert all(r.gender == "Female" for r in upper)
    assert store.list_by_gender("unknown") == []


def test_list_by_gender_folds_non_ascii_case(store, session_factory):
    from personapi.db.models import Person

    with session_factory() as session:
        session.add(Person(name="Amélie", gender="FÉMININ"))
        session.add(Person(name="Jonas", gender="MÄNNLICH"))

    assert [r.name for r in store.list_by_gender("féminin")] == ["Amélie"]
    assert [r.name for r in store.list_by_gender("FÉMININ")] == ["Amélie"]
    assert [r.name for r in store.list_by_gender("männlich")] == ["Jonas"]


def test_pages_reconstruct_the_full_set(store, many_people):
    everyone = {r.id for r in store.list_all()}

    for size in (1, 4, 5, 23, 50):
        seen: list[int] = []
        page = store.list_page(PageRequest(page=0, size=size))
        while True:
            seen.extend(r.id for r in page.content)
            if not page.has_next:
                break
            page = store.list_page(PageRequest(page=page.number + 1, size=size))
        assert len(seen) == len(set(seen))
        assert set(seen) == everyone


def test_page_metadata(store, many_people):
    page = store.list_page(PageRequest(page=2, size=10))
    assert page.total_elements == 23
    assert page.total_pages == 3
    assert len(page) == 3
    assert page.is_last and not page.is_first


def test_page_sorting_uses_id_as_tie_breaker(store, many_people):
    page = store.list_page(
        PageRequest(page=0, size=23, sort=(Order("city", Direction.desc),))
    )
    cities = [r.city for r in page.content]
    assert cities == sorted(cities, reverse=True)
    same_city = [r.id for r in page.content if r.city == "City 4"]
    assert same_city == sorted(same_city)


def test_page_past_the_end_is_empty(store, people):
    page = store.list_page(PageRequest(page=5, size=10))
    assert page.content == ()
    assert page.total_elements == 2


def test_unreachable_database_raises_store_unavailable(tmp_path):
    engine = sqlite_engine(f"sqlite:///{tmp_path}/missing/dir/test.db")
    SessionLocal = sessionmaker(bind=engine)

    @contextmanager
    def broken_factory():
        session = SessionLocal()
        try:
            yield session
        finally:
            session.close()

    store = PersonStore(broken_factory)
    with pytest.raises(StoreUnavailable):
        store.list_all()
    with pytest.raises(StoreUnavailable):
        store.get(1)
