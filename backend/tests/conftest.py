import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from classplan.api.deps import get_db
from classplan.db.base import Base
from classplan.main import app
from classplan.models.classroom import ClassroomType
from classplan.models.subject import SubjectType
from classplan.services.catalog import (
    BatchRecord,
    BreakRecord,
    Catalog,
    ClassroomRecord,
    FacultyRecord,
    SubjectRecord,
)


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture()
def cs_sem5_catalog() -> Catalog:
    # SubjectA: core, three qualified teachers, five lecture rooms.
    # SubjectB: lab, one qualified teacher, one lab room.
    subject_a = SubjectRecord(id="sub-a", name="Subject A", code="SA501", type=SubjectType.core, semester=5)
    subject_b = SubjectRecord(id="sub-b", name="Subject B", code="SB501", type=SubjectType.lab, semester=5)
    classrooms = tuple(
        ClassroomRecord(id=f"lh-{index}", name=f"LH-{index}", capacity=60, type=ClassroomType.lecture)
        for index in range(1, 6)
    ) + (ClassroomRecord(id="lab-1", name="LAB-1", capacity=40, type=ClassroomType.lab),)
    faculty = (
        FacultyRecord(id="f-1", name="Prof One", subjects=frozenset({"sub-a"})),
        FacultyRecord(id="f-2", name="Prof Two", subjects=frozenset({"sub-a"})),
        FacultyRecord(id="f-3", name="Prof Three", subjects=frozenset({"sub-a"})),
        FacultyRecord(id="f-4", name="Prof Four", subjects=frozenset({"sub-b"})),
    )
    batch = BatchRecord(id="batch-5", name="CS-Sem5", semester=5, strength=40, subjects=("sub-a", "sub-b"))
    breaks = (
        BreakRecord(
            id="brk-lunch",
            name="Lunch Break",
            start_time="12:00",
            end_time="13:00",
            days=("Monday", "Tuesday", "Wednesday", "Thursday", "Friday"),
            owner_id="owner-1",
        ),
        BreakRecord(
            id="brk-tea",
            name="Tea Break",
            start_time="15:00",
            end_time="15:15",
            days=("Monday", "Wednesday"),
            owner_id="owner-2",
        ),
    )
    return Catalog(
        classrooms=classrooms,
        subjects=(subject_a, subject_b),
        faculty=faculty,
        batches=(batch,),
        breaks=breaks,
    )
