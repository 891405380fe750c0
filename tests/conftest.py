"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import Callable, Generator, List
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from fund_manager.api.main import create_app
from fund_manager.infrastructure.database.models import Base
from fund_manager.infrastructure.database.session import get_db
from fund_manager.domain.models import EntryKind, LedgerEntry, Member


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

OWNER_ID = "user_owner"


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def owner_headers() -> dict:
    return {"X-User-ID": OWNER_ID}


@pytest.fixture
def roommates(client: TestClient, owner_headers: dict) -> dict:
    """Group owned by OWNER_ID with members A (the owner), B and C"""
    response = client.post(
        "/v1/groups",
        json={
            "groupName": "Flat 4B",
            "monthlyContribution": 1500,
            "ownerName": "A",
            "members": [{"name": "B", "userId": "user_b"}, {"name": "C"}],
        },
        headers=owner_headers,
    )
    assert response.status_code == 201
    group = response.json()
    ids = {m["name"]: m["memberId"] for m in group["members"]}
    return {"group_id": group["groupId"], "ids": ids}


@pytest.fixture
def members() -> List[Member]:
    return [Member(member_id="a", name="A"), Member(member_id="b", name="B"), Member(member_id="c", name="C")]


@pytest.fixture
def make_entry() -> Callable[..., LedgerEntry]:
    """Build a ledger entry with sensible defaults"""
    counter = {"n": 0}

    def _make(amount: int, paid_by: str, split_between, kind: EntryKind = EntryKind.EXPENSE) -> LedgerEntry:
        counter["n"] += 1
        return LedgerEntry(
            entry_id=f"entry_{counter['n']}",
            group_id="group_1",
            title=f"Entry {counter['n']}",
            amount=amount,
            paid_by=paid_by,
            split_between=tuple(split_between),
            kind=kind,
            date=date(2024, 3, 1),
        )

    return _make
