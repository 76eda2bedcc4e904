from __future__ import annotations

import logging
import random
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from classplan.schemas.common import parse_time_window
from classplan.services.catalog import (
    BatchRecord,
    ClassroomRecord,
    FacultyRecord,
    SubjectRecord,
    qualified_faculty,
    suitable_classrooms,
)
from classplan.services.ranker import RankedSubject

logger = logging.getLogger(__name__)

REASON_NO_FREE_SLOT = "no_free_slot"


@dataclass(frozen=True)
class CandidateSlot:
    day: str
    start_time: str
    end_time: str

    @property
    def key(self) -> str:
        return f"{self.day}|{self.start_time}-{self.end_time}"


Shuffle = Callable[[list[CandidateSlot]], None]


@dataclass(frozen=True)
class PlannedSlot:
    day: str
    start_time: str
    end_time: str
    subject_id: str | None = None
    faculty_id: str | None = None
    classroom_id: str | None = None
    batch_id: str | None = None
    is_break: bool = False
    break_name: str | None = None


@dataclass(frozen=True)
class UnscheduledSubject:
    subject: SubjectRecord
    reason: str


@dataclass
class AllocationResult:
    slots: list[PlannedSlot] = field(default_factory=list)
    unscheduled: list[UnscheduledSubject] = field(default_factory=list)


class SlotAllocator:
    """Greedy single-pass placement of one weekly meeting per subject.

    Subjects are taken in ranked order and each one lands in the first
    candidate slot where the batch is free and a qualified faculty member and
    a suitable classroom are both free. Placed subjects are never moved.
    """

    def __init__(
        self,
        *,
        days: Sequence[str],
        time_windows: Sequence[str],
        periods_per_day: int,
        rng: random.Random | None = None,
        shuffle: Shuffle | None = None,
    ) -> None:
        self.days = list(days)
        self.windows = [parse_time_window(label) for label in list(time_windows)[:periods_per_day]]
        self.random = rng or random.Random()
        self.shuffle = shuffle or self.random.shuffle

    def candidate_slots(self) -> list[CandidateSlot]:
        return [CandidateSlot(day=day, start_time=start, end_time=end) for day in self.days for start, end in self.windows]

    def allocate(
        self,
        ranked: Sequence[RankedSubject],
        batch: BatchRecord,
        faculty: Sequence[FacultyRecord],
        classrooms: Sequence[ClassroomRecord],
    ) -> AllocationResult:
        candidates = self.candidate_slots()
        self.shuffle(candidates)

        busy_faculty: set[str] = set()
        busy_classrooms: set[str] = set()
        # Only one batch is scheduled per run, so this set is not keyed by batch id.
        busy_batch: set[str] = set()

        result = AllocationResult()
        for item in ranked:
            subject = item.subject
            if not item.schedulable:
                result.unscheduled.append(UnscheduledSubject(subject=subject, reason=item.blocking_reason))
                continue

            teachers = qualified_faculty(subject, faculty)
            rooms = suitable_classrooms(subject, classrooms, batch.strength)
            placed = None
            for slot in candidates:
                if slot.key in busy_batch:
                    continue
                teacher = next((f for f in teachers if f"{slot.key}|{f.id}" not in busy_faculty), None)
                if teacher is None:
                    continue
                room = next((r for r in rooms if f"{slot.key}|{r.id}" not in busy_classrooms), None)
                if room is None:
                    continue

                placed = PlannedSlot(
                    day=slot.day,
                    start_time=slot.start_time,
                    end_time=slot.end_time,
                    subject_id=subject.id,
                    faculty_id=teacher.id,
                    classroom_id=room.id,
                    batch_id=batch.id,
                )
                busy_batch.add(slot.key)
                busy_faculty.add(f"{slot.key}|{teacher.id}")
                busy_classrooms.add(f"{slot.key}|{room.id}")
                break

            if placed is None:
                logger.warning(
                    "Could not schedule subject %s (%s); all slots were busy or no resources were available",
                    subject.name,
                    subject.code,
                )
                result.unscheduled.append(UnscheduledSubject(subject=subject, reason=REASON_NO_FREE_SLOT))
                continue
            result.slots.append(placed)

        return result
