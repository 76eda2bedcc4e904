"""Read-only snapshot of the scheduling catalog for one generation run.

The generator never touches the database: routes load a :class:`Catalog`
once with :func:`load_catalog` and hand it to the engine.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from sqlalchemy import select
from sqlalchemy.orm import Session

from classplan.models.batch import Batch
from classplan.models.break_period import BreakPeriod
from classplan.models.classroom import Classroom, ClassroomType
from classplan.models.faculty import Faculty
from classplan.models.subject import Subject, SubjectType


@dataclass(frozen=True)
class ClassroomRecord:
    id: str
    name: str
    capacity: int
    type: ClassroomType
    building: str = ""
    floor: int = 0
    equipment: tuple[str, ...] = ()


@dataclass(frozen=True)
class SubjectRecord:
    id: str
    name: str
    code: str
    type: SubjectType
    credits: int = 3
    semester: int = 1
    department: str = ""

    @property
    def requires_lab(self) -> bool:
        return self.type == SubjectType.lab


@dataclass(frozen=True)
class FacultyRecord:
    id: str
    name: str
    subjects: frozenset[str]
    email: str = ""
    department: str = ""
    availability: Mapping[str, tuple[str, ...]] = field(default_factory=dict, hash=False, compare=False)
    max_hours_per_week: int = 20

    def is_qualified_for(self, subject_id: str) -> bool:
        return subject_id in self.subjects


@dataclass(frozen=True)
class BatchRecord:
    id: str
    name: str
    semester: int
    strength: int
    subjects: tuple[str, ...]
    department: str = ""


@dataclass(frozen=True)
class BreakRecord:
    id: str
    name: str
    start_time: str
    end_time: str
    days: tuple[str, ...]
    owner_id: str | None = None


def classroom_suits(classroom: ClassroomRecord, subject: SubjectRecord, strength: int) -> bool:
    if classroom.capacity < strength:
        return False
    is_lab_room = classroom.type == ClassroomType.lab
    return is_lab_room if subject.requires_lab else not is_lab_room


def qualified_faculty(subject: SubjectRecord, faculty: Iterable[FacultyRecord]) -> list[FacultyRecord]:
    return [member for member in faculty if member.is_qualified_for(subject.id)]


def suitable_classrooms(
    subject: SubjectRecord,
    classrooms: Iterable[ClassroomRecord],
    strength: int,
) -> list[ClassroomRecord]:
    return [room for room in classrooms if classroom_suits(room, subject, strength)]


@dataclass(frozen=True)
class Catalog:
    classrooms: tuple[ClassroomRecord, ...] = ()
    subjects: tuple[SubjectRecord, ...] = ()
    faculty: tuple[FacultyRecord, ...] = ()
    batches: tuple[BatchRecord, ...] = ()
    breaks: tuple[BreakRecord, ...] = ()

    def missing_rosters(self) -> list[str]:
        rosters = (
            ("classrooms", self.classrooms),
            ("subjects", self.subjects),
            ("faculty", self.faculty),
            ("batches", self.batches),
        )
        return [name for name, roster in rosters if not roster]

    def find_batch(self, semester: int | str) -> BatchRecord | None:
        selector = str(semester).strip()
        return next((batch for batch in self.batches if str(batch.semester) == selector), None)

    def enrolled_subjects(self, batch: BatchRecord) -> list[SubjectRecord]:
        enrolled = set(batch.subjects)
        return [subject for subject in self.subjects if subject.id in enrolled]

    def breaks_owned_by(self, owner_id: str | None) -> list[BreakRecord]:
        if owner_id is None:
            return list(self.breaks)
        return [item for item in self.breaks if item.owner_id == owner_id]

    def subject_map(self) -> dict[str, SubjectRecord]:
        return {subject.id: subject for subject in self.subjects}

    def faculty_map(self) -> dict[str, FacultyRecord]:
        return {member.id: member for member in self.faculty}

    def classroom_map(self) -> dict[str, ClassroomRecord]:
        return {room.id: room for room in self.classrooms}


def _classroom_record(row: Classroom) -> ClassroomRecord:
    return ClassroomRecord(
        id=row.id,
        name=row.name,
        capacity=row.capacity,
        type=ClassroomType(row.type),
        building=row.building,
        floor=row.floor,
        equipment=tuple(row.equipment or ()),
    )


def _subject_record(row: Subject) -> SubjectRecord:
    return SubjectRecord(
        id=row.id,
        name=row.name,
        code=row.code,
        type=SubjectType(row.type),
        credits=row.credits,
        semester=row.semester,
        department=row.department,
    )


def _faculty_record(row: Faculty) -> FacultyRecord:
    availability = {day: tuple(times) for day, times in (row.availability or {}).items()}
    return FacultyRecord(
        id=row.id,
        name=row.name,
        subjects=frozenset(row.subjects or ()),
        email=row.email,
        department=row.department,
        availability=availability,
        max_hours_per_week=row.max_hours_per_week,
    )


def _batch_record(row: Batch) -> BatchRecord:
    return BatchRecord(
        id=row.id,
        name=row.name,
        semester=row.semester,
        strength=row.strength,
        subjects=tuple(row.subjects or ()),
        department=row.department,
    )


def _break_record(row: BreakPeriod) -> BreakRecord:
    return BreakRecord(
        id=row.id,
        name=row.name,
        start_time=row.start_time,
        end_time=row.end_time,
        days=tuple(row.days or ()),
        owner_id=row.owner_id,
    )


def load_catalog(db: Session) -> Catalog:
    return Catalog(
        classrooms=tuple(
            _classroom_record(row) for row in db.execute(select(Classroom).order_by(Classroom.name)).scalars()
        ),
        subjects=tuple(
            _subject_record(row) for row in db.execute(select(Subject).order_by(Subject.name)).scalars()
        ),
        faculty=tuple(
            _faculty_record(row) for row in db.execute(select(Faculty).order_by(Faculty.name)).scalars()
        ),
        batches=tuple(
            _batch_record(row) for row in db.execute(select(Batch).order_by(Batch.name)).scalars()
        ),
        breaks=tuple(
            _break_record(row)
            for row in db.execute(select(BreakPeriod).order_by(BreakPeriod.start_time)).scalars()
        ),
    )
