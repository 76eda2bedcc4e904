"""Seed a small demo catalog for ClassPlan.

Run:
  PYTHONPATH=backend python scripts/seed_demo_catalog.py
"""

from __future__ import annotations

import os

from sqlalchemy import select
from sqlalchemy.orm import Session

from classplan.db.bootstrap import ensure_schema
from classplan.db.session import SessionLocal
from classplan.models.batch import Batch
from classplan.models.break_period import BreakPeriod
from classplan.models.classroom import Classroom, ClassroomType
from classplan.models.faculty import Faculty
from classplan.models.subject import Subject, SubjectType

DEPARTMENT = "CSE"
OWNER_ID = os.getenv("SEED_OWNER_ID", "demo-scheduler").strip() or "demo-scheduler"
WORKING_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]

CLASSROOMS = [
    {"name": "LH-101", "capacity": 60, "type": ClassroomType.lecture, "building": "Main", "floor": 1},
    {"name": "LH-102", "capacity": 60, "type": ClassroomType.lecture, "building": "Main", "floor": 1},
    {"name": "SEM-201", "capacity": 45, "type": ClassroomType.seminar, "building": "Main", "floor": 2},
    {"name": "LAB-301", "capacity": 40, "type": ClassroomType.lab, "building": "Tech", "floor": 3},
]

SUBJECTS = [
    {"code": "CS501", "name": "Compiler Design", "type": SubjectType.core, "credits": 4},
    {"code": "CS502", "name": "Computer Networks", "type": SubjectType.core, "credits": 4},
    {"code": "CS503", "name": "Machine Learning", "type": SubjectType.elective, "credits": 3},
    {"code": "CSL501", "name": "Networks Lab", "type": SubjectType.lab, "credits": 2},
]

FACULTY = [
    {"name": "Dr. Asha Rao", "email": "asha.rao@university.edu", "codes": ["CS501", "CS503"]},
    {"name": "Dr. Vikram Shah", "email": "vikram.shah@university.edu", "codes": ["CS502", "CSL501"]},
    {"name": "Prof. Meera Iyer", "email": "meera.iyer@university.edu", "codes": ["CS501", "CS502"]},
]


def upsert_classrooms(session: Session) -> None:
    for spec in CLASSROOMS:
        existing = session.execute(select(Classroom).where(Classroom.name == spec["name"])).scalar_one_or_none()
        if existing is None:
            session.add(Classroom(equipment=[], **spec))


def upsert_subjects(session: Session) -> dict[str, str]:
    ids_by_code: dict[str, str] = {}
    for spec in SUBJECTS:
        subject = session.execute(select(Subject).where(Subject.code == spec["code"])).scalar_one_or_none()
        if subject is None:
            subject = Subject(semester=5, department=DEPARTMENT, **spec)
            session.add(subject)
            session.flush()
        ids_by_code[subject.code] = subject.id
    return ids_by_code


def upsert_faculty(session: Session, ids_by_code: dict[str, str]) -> None:
    for spec in FACULTY:
        member = session.execute(select(Faculty).where(Faculty.email == spec["email"])).scalar_one_or_none()
        subject_ids = [ids_by_code[code] for code in spec["codes"]]
        if member is None:
            session.add(
                Faculty(
                    name=spec["name"],
                    email=spec["email"],
                    department=DEPARTMENT,
                    subjects=subject_ids,
                    availability={day: ["09:00", "10:00", "11:00", "14:00"] for day in WORKING_DAYS},
                    max_hours_per_week=16,
                )
            )
        else:
            member.subjects = subject_ids


def upsert_batch(session: Session, ids_by_code: dict[str, str]) -> None:
    batch = session.execute(select(Batch).where(Batch.name == "CS-Sem5")).scalar_one_or_none()
    if batch is None:
        session.add(
            Batch(
                name="CS-Sem5",
                semester=5,
                department=DEPARTMENT,
                strength=40,
                subjects=list(ids_by_code.values()),
            )
        )
    else:
        batch.subjects = list(ids_by_code.values())


def upsert_breaks(session: Session) -> None:
    existing = session.execute(
        select(BreakPeriod).where(BreakPeriod.owner_id == OWNER_ID, BreakPeriod.name == "Lunch Break")
    ).scalar_one_or_none()
    if existing is None:
        session.add(
            BreakPeriod(
                name="Lunch Break",
                start_time="12:00",
                end_time="13:00",
                days=list(WORKING_DAYS),
                owner_id=OWNER_ID,
            )
        )


def main() -> None:
    ensure_schema()
    with SessionLocal() as session:
        upsert_classrooms(session)
        ids_by_code = upsert_subjects(session)
        upsert_faculty(session, ids_by_code)
        upsert_batch(session, ids_by_code)
        upsert_breaks(session)
        session.commit()

    print("Seeded demo catalog for semester 5")
    print(f"Break owner id: {OWNER_ID}")


if __name__ == "__main__":
    main()
