from __future__ import annotations

import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

from classplan.core.exceptions import EmptyResultError
from classplan.models.timetable import TimetableStatus
from classplan.services.allocator import AllocationResult, PlannedSlot, UnscheduledSubject
from classplan.services.catalog import BatchRecord
from classplan.services.ranker import RankedSubject

REASON_MESSAGES = {
    "no_qualified_faculty": "no faculty member is qualified to teach it",
    "no_suitable_classroom": "no classroom matches its type with enough capacity",
    "no_free_slot": "all slots were busy or no resources were available",
}


@dataclass(frozen=True)
class UnschedulableSubject:
    subject_id: str
    subject_name: str
    subject_code: str
    reason: str

    @property
    def message(self) -> str:
        detail = REASON_MESSAGES.get(self.reason, self.reason)
        return f"Could not schedule {self.subject_name} ({self.subject_code}): {detail}"

    @classmethod
    def from_unscheduled(cls, item: UnscheduledSubject) -> "UnschedulableSubject":
        return cls(
            subject_id=item.subject.id,
            subject_name=item.subject.name,
            subject_code=item.subject.code,
            reason=item.reason,
        )


@dataclass
class AssembledTimetable:
    id: str
    name: str
    semester: str
    batch_id: str
    created_at: datetime
    time_slots: list[PlannedSlot]
    status: TimetableStatus = TimetableStatus.draft
    owner_id: str | None = None

    @property
    def teaching_slots(self) -> list[PlannedSlot]:
        return [slot for slot in self.time_slots if not slot.is_break]

    @property
    def break_slots(self) -> list[PlannedSlot]:
        return [slot for slot in self.time_slots if slot.is_break]


@dataclass
class GenerationResult:
    timetable: AssembledTimetable
    warnings: list[UnschedulableSubject] = field(default_factory=list)
    ranking: list[RankedSubject] = field(default_factory=list)


def timetable_name(semester: str, created_at: datetime) -> str:
    return f"Semester {semester} Timetable - {created_at.date().isoformat()}"


def assemble_timetable(
    *,
    semester: int | str,
    batch: BatchRecord,
    allocation: AllocationResult,
    break_slots: Sequence[PlannedSlot],
    ranking: Sequence[RankedSubject] = (),
    owner_id: str | None = None,
    now: datetime | None = None,
    id_factory: Callable[[], str] | None = None,
) -> GenerationResult:
    time_slots = [*allocation.slots, *break_slots]
    if not time_slots:
        raise EmptyResultError(
            details={
                "batch_id": batch.id,
                "unscheduled": [item.subject.code for item in allocation.unscheduled],
            }
        )

    created_at = now or datetime.now(timezone.utc)
    semester_label = str(semester).strip()
    timetable = AssembledTimetable(
        id=(id_factory or (lambda: str(uuid.uuid4())))(),
        name=timetable_name(semester_label, created_at),
        semester=semester_label,
        batch_id=batch.id,
        created_at=created_at,
        time_slots=time_slots,
        owner_id=owner_id,
    )
    return GenerationResult(
        timetable=timetable,
        warnings=[UnschedulableSubject.from_unscheduled(item) for item in allocation.unscheduled],
        ranking=list(ranking),
    )
