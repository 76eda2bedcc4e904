from __future__ import annotations

from collections import Counter

from classplan.services.assembler import AssembledTimetable
from classplan.services.catalog import Catalog, classroom_suits


def audit_timetable(timetable: AssembledTimetable, catalog: Catalog) -> list[str]:
    """Re-check the booking invariants of an assembled timetable.

    Returns one human-readable line per violation; an empty list means the
    timetable is clash-free. Break slots are not audited.
    """
    subjects = catalog.subject_map()
    faculty = catalog.faculty_map()
    classrooms = catalog.classroom_map()
    batches = {batch.id: batch for batch in catalog.batches}

    violations: list[str] = []
    faculty_bookings: Counter[tuple[str, str, str, str]] = Counter()
    classroom_bookings: Counter[tuple[str, str, str, str]] = Counter()
    batch_bookings: Counter[tuple[str, str, str, str]] = Counter()

    for slot in timetable.teaching_slots:
        window = (slot.day, slot.start_time, slot.end_time)
        faculty_bookings[(*window, slot.faculty_id)] += 1
        classroom_bookings[(*window, slot.classroom_id)] += 1
        batch_bookings[(*window, slot.batch_id)] += 1

        subject = subjects.get(slot.subject_id)
        member = faculty.get(slot.faculty_id)
        room = classrooms.get(slot.classroom_id)
        batch = batches.get(slot.batch_id)
        if subject is None or member is None or room is None or batch is None:
            violations.append(f"{slot.day} {slot.start_time}: slot references an unknown catalog record")
            continue
        if not member.is_qualified_for(subject.id):
            violations.append(f"{slot.day} {slot.start_time}: {member.name} is not qualified for {subject.code}")
        if not classroom_suits(room, subject, batch.strength):
            violations.append(
                f"{slot.day} {slot.start_time}: {room.name} does not suit {subject.code} "
                f"for {batch.strength} students"
            )

    for label, bookings in (
        ("Faculty", faculty_bookings),
        ("Classroom", classroom_bookings),
        ("Batch", batch_bookings),
    ):
        for (day, start, _end, resource_id), count in bookings.items():
            if count > 1:
                violations.append(f"{label} {resource_id} double-booked on {day} at {start} ({count} slots)")
    return violations
