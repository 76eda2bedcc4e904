from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from classplan.services.catalog import (
    ClassroomRecord,
    FacultyRecord,
    SubjectRecord,
    qualified_faculty,
    suitable_classrooms,
)

logger = logging.getLogger(__name__)

DEFAULT_UNSCHEDULABLE_PENALTY = 100.0

REASON_NO_FACULTY = "no_qualified_faculty"
REASON_NO_CLASSROOM = "no_suitable_classroom"


@dataclass(frozen=True)
class RankedSubject:
    subject: SubjectRecord
    difficulty: float
    qualified_faculty_count: int
    suitable_classroom_count: int

    @property
    def schedulable(self) -> bool:
        return self.qualified_faculty_count > 0 and self.suitable_classroom_count > 0

    @property
    def blocking_reason(self) -> str | None:
        if self.qualified_faculty_count == 0:
            return REASON_NO_FACULTY
        if self.suitable_classroom_count == 0:
            return REASON_NO_CLASSROOM
        return None


def scarcity_score(count: int, penalty: float = DEFAULT_UNSCHEDULABLE_PENALTY) -> float:
    return 1 / count if count > 0 else penalty


def rank_subjects(
    subjects: Sequence[SubjectRecord],
    faculty: Sequence[FacultyRecord],
    classrooms: Sequence[ClassroomRecord],
    strength: int,
    *,
    penalty: float = DEFAULT_UNSCHEDULABLE_PENALTY,
) -> list[RankedSubject]:
    """Order subjects most-constrained first.

    Difficulty is the sum of the inverse counts of qualified faculty and of
    suitable classrooms; an empty pool scores ``penalty`` instead. Ties keep
    the input order. Subjects that cannot be placed at all are still returned
    so the allocator can report them.
    """
    ranked: list[RankedSubject] = []
    for subject in subjects:
        faculty_count = len(qualified_faculty(subject, faculty))
        classroom_count = len(suitable_classrooms(subject, classrooms, strength))
        if faculty_count == 0:
            logger.warning("No faculty assigned to teach subject %s; it cannot be scheduled", subject.name)
        if classroom_count == 0:
            logger.warning(
                "No suitable classroom for subject %s (capacity %s, type %s); it cannot be scheduled",
                subject.name,
                strength,
                subject.type.value,
            )
        ranked.append(
            RankedSubject(
                subject=subject,
                difficulty=scarcity_score(faculty_count, penalty) + scarcity_score(classroom_count, penalty),
                qualified_faculty_count=faculty_count,
                suitable_classroom_count=classroom_count,
            )
        )
    # sorted() is stable, so equal difficulties keep enrollment order.
    return sorted(ranked, key=lambda item: item.difficulty, reverse=True)
