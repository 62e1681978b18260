import os
from datetime import date, datetime

import pytest
from sqlalchemy.orm import Session

from scouts.db import models
from scouts.db.database import SQLITE_MEMORY_URL, create_db_engine, init_schema, make_session_factory
from scouts.db.schemas import Contact, Event, Group, Registration, Scout
from scouts.db.stores import create_memory_stores, create_sql_stores

_BACKENDS = [
    "sql",
    "memory",
    pytest.param(
        "postgres",
        marks=[
            pytest.mark.postgres,
            pytest.mark.skipif(not os.getenv("TEST_DATABASE_URL"), reason="TEST_DATABASE_URL not set"),
        ],
    ),
]


def _open_session(url: str):
    eng = create_db_engine(url)
    if not url.startswith("sqlite"):
        # Server databases outlive the test; start every test from empty tables.
        models.Base.metadata.drop_all(bind=eng)
    init_schema(eng)
    return eng, make_session_factory(eng)()


@pytest.fixture
def db_session() -> Session:
    """A session on a fresh in-memory SQLite database."""
    eng, session = _open_session(SQLITE_MEMORY_URL)
    try:
        yield session
    finally:
        session.close()
        eng.dispose()


@pytest.fixture(params=_BACKENDS)
def stores(request):
    """The four stores of each backend; every test runs once per backend."""
    if request.param == "memory":
        bundle = create_memory_stores()
        yield bundle
        bundle.reset()
        return
    url = SQLITE_MEMORY_URL if request.param == "sql" else os.environ["TEST_DATABASE_URL"]
    eng, session = _open_session(url)
    try:
        yield create_sql_stores(session)
    finally:
        session.close()
        eng.dispose()


@pytest.fixture
def group_factory(stores):
    def _create(name: str = "Wolves") -> Group:
        return stores.groups.create(Group(name=name))
    return _create


@pytest.fixture
def contact_factory():
    def _make(name: str = "Jane Doe", relationship: str = "Mother") -> Contact:
        slug = name.lower().replace(" ", ".")
        return Contact(name=name, phone_number="+49 30 1234567", email=f"{slug}@example.com", relationship=relationship)
    return _make


@pytest.fixture
def new_event():
    def _make(name: str = "Camp", groups=()) -> Event:
        return Event(
            name=name,
            start_date=date(2024, 7, 1),
            end_date=date(2024, 7, 7),
            meeting_point="Station",
            location="Lake",
            cost="120 EUR",
            participating_groups=frozenset(groups),
        )
    return _make


@pytest.fixture
def new_scout():
    def _make(name: str = "Tom Sawyer", contacts=(), groups=()) -> Scout:
        return Scout(
            name=name,
            birth_date=date(2012, 3, 14),
            address="Main Street 1, Berlin",
            phone_number="+49 30 7654321",
            health_insurance="AOK",
            allergy_info="Peanuts",
            last_updated=date(2024, 1, 15),
            contacts=tuple(contacts),
            groups=frozenset(groups),
        )
    return _make


@pytest.fixture
def new_registration():
    def _make(scout: Scout, event: Event, note: str = "") -> Registration:
        return Registration(
            scout=scout,
            event=event,
            note=note,
            registration_date=datetime(2024, 5, 1, 12, 30),
            account_id="account-1",
        )
    return _make
